"""Tests for the postprocess module."""

import numpy as np
import pytest

from pipeheat.postprocess.report import PipeReport, ReportHistory
from pipeheat.time.state import TIME_TOLERANCE


def _report(sim_time, outlet=50.0):
    return PipeReport(
        sim_time=sim_time,
        fluid_inlet_temperature=60.0,
        fluid_outlet_temperature=outlet,
        mass_flow_rate=0.2,
        volume_flow_rate=0.2 / 998.0,
        fluid_heat_loss_rate=0.2 * 4182.0 * (60.0 - outlet),
        fluid_heat_loss_energy=0.2 * 4182.0 * (60.0 - outlet) * 900.0,
        environment_heat_loss_rate=100.0,
        environment_heat_loss_energy=100.0 * 900.0,
        pipe_inlet_temperature=55.0,
        pipe_outlet_temperature=45.0,
    )


class TestPipeReport:
    def test_column_names(self):
        names = PipeReport.column_names()
        assert names[0] == "sim_time"
        assert "fluid_outlet_temperature" in names
        assert names[-1] == "zone_heat_gain_rate"

    def test_zone_gain_defaults_to_zero(self):
        assert _report(1.0).zone_heat_gain_rate == 0.0


class TestReportHistory:
    def setup_method(self):
        self.history = ReportHistory()
        for i, outlet in enumerate((50.0, 48.0, 47.0), start=1):
            self.history.append(_report(0.25 * i, outlet))

    def test_length_and_iteration(self):
        assert len(self.history) == 3
        assert [r.sim_time for r in self.history] == [0.25, 0.5, 0.75]

    def test_repeated_time_replaces(self):
        self.history.append(_report(0.75, outlet=46.0))
        assert len(self.history) == 3
        assert self.history["fluid_outlet_temperature"][-1] == 46.0

    def test_same_instant_matches_controller_tolerance(self):
        self.history.append(_report(0.75 + 0.5 * TIME_TOLERANCE, outlet=46.0))
        assert len(self.history) == 3
        self.history.append(_report(0.75 + 2.0 * TIME_TOLERANCE, outlet=45.0))
        assert len(self.history) == 4

    def test_column_access(self):
        np.testing.assert_allclose(
            self.history["fluid_outlet_temperature"], [50.0, 48.0, 47.0],
        )

    def test_unknown_column(self):
        with pytest.raises(KeyError):
            self.history["pressure"]

    def test_to_array(self):
        arr = self.history.to_array()
        assert arr.shape == (3, len(PipeReport.column_names()))
        np.testing.assert_allclose(arr[:, 0], [0.25, 0.5, 0.75])

    def test_empty_to_array(self):
        arr = ReportHistory().to_array()
        assert arr.shape == (0, len(PipeReport.column_names()))

    def test_export_csv(self, tmp_path):
        path = tmp_path / "pipe.csv"
        self.history.export_csv(str(path))
        lines = path.read_text().splitlines()
        assert lines[0] == ",".join(PipeReport.column_names())
        data = np.loadtxt(path, delimiter=",", skiprows=1)
        assert data.shape == (3, len(PipeReport.column_names()))
        np.testing.assert_allclose(data[:, 2], [50.0, 48.0, 47.0])

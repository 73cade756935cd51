"""Smoke tests for plotting helpers."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from pipeheat.config import PipeConfiguration
from pipeheat.materials.fluids import ConstantFluid
from pipeheat.postprocess.report import ReportHistory
from pipeheat.time.controller import HostInputs, TimeIntegrationController
from pipeheat.time.state import ThermalState
from pipeheat.visualization.plot2d import plot_history, plot_pipe_profile, plot_soil_section


def _buried():
    return PipeConfiguration.from_dict({
        "name": "plot",
        "environment": "ground",
        "inner_diameter": 0.05,
        "length": 10.0,
        "construction": ["pvc"],
        "n_sections": 3,
        "n_depth_nodes": 6,
        "soil": "loam",
        "ground_temperature": {"mean": 10.0, "amplitude": 5.0, "phase_shift_days": 20},
    })


class TestPlots:
    def teardown_method(self):
        plt.close("all")

    def test_pipe_profile(self):
        config = _buried()
        state = ThermalState.uniform(config.n_sections)
        ax = plot_pipe_profile(state, config.geometry, title="profile")
        assert len(ax.lines) == 2
        assert ax.get_title() == "profile"

    def test_soil_section(self):
        config = _buried()
        state = ThermalState.uniform(config.n_sections, config.grid.shape)
        state.soil[..., 0, config.grid.pipe_depth_index, :] = 40.0
        ax = plot_soil_section(state, config.grid, section=1, colorbar=False)
        assert ax.get_xlabel() == "x (m)"

    def test_soil_section_requires_grid(self):
        config = _buried()
        state = ThermalState.uniform(config.n_sections)
        with pytest.raises(ValueError):
            plot_soil_section(state, config.grid)

    def test_history(self):
        ctl = TimeIntegrationController(_buried(), fluid=ConstantFluid())
        ctl.begin_environment(day=1)
        history = ReportHistory()
        for hour in (1.0, 2.0):
            history.append(ctl.simulate(HostInputs(hour, 3600.0, 40.0, 0.1)))
        ax = plot_history(history)
        assert len(ax.lines) == 2

"""Per-step pipe outputs and their history.

Classes
-------
PipeReport
    Values reported at the end of one outer step.
ReportHistory
    Ordered collection of reports with column access and CSV export.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Iterator

import numpy as np

from pipeheat.time.state import TIME_TOLERANCE


@dataclass(frozen=True)
class PipeReport:
    """Outputs of one outer step.

    Temperatures in °C, rates in W, energies in J, flows in kg/s and m³/s.
    Positive heat-loss values mean heat leaving the fluid or the pipe.
    """

    sim_time: float
    fluid_inlet_temperature: float
    fluid_outlet_temperature: float
    mass_flow_rate: float
    volume_flow_rate: float
    fluid_heat_loss_rate: float
    fluid_heat_loss_energy: float
    environment_heat_loss_rate: float
    environment_heat_loss_energy: float
    pipe_inlet_temperature: float
    pipe_outlet_temperature: float
    zone_heat_gain_rate: float = 0.0

    @classmethod
    def column_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


class ReportHistory:
    """Reports collected over a run.

    Reports at a repeated clock value replace the previous one, so the
    history holds the final evaluation of each outer step.

    Example::

        history = ReportHistory()
        for ...:
            history.append(controller.simulate(inputs))
        history["fluid_outlet_temperature"]  # numpy array
        history.export_csv("pipe.csv")
    """

    def __init__(self) -> None:
        self._reports: list[PipeReport] = []

    def append(self, report: PipeReport) -> None:
        if self._reports and abs(self._reports[-1].sim_time - report.sim_time) <= TIME_TOLERANCE:
            self._reports[-1] = report
        else:
            self._reports.append(report)

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[PipeReport]:
        return iter(self._reports)

    def __getitem__(self, name: str) -> np.ndarray:
        """Column of values for report field *name*.

        Raises:
            KeyError: If *name* is not a report field.
        """
        if name not in PipeReport.column_names():
            raise KeyError(f"Unknown report field {name!r}")
        return np.array([getattr(r, name) for r in self._reports], dtype=float)

    def to_array(self) -> np.ndarray:
        """All reports as an ``(n_reports, n_fields)`` array."""
        n_cols = len(PipeReport.column_names())
        if not self._reports:
            return np.empty((0, n_cols))
        return np.array([astuple(r) for r in self._reports], dtype=float)

    def export_csv(self, filename: str) -> None:
        """Write the history to CSV with a header row."""
        header = ",".join(PipeReport.column_names())
        np.savetxt(filename, self.to_array(), delimiter=",", header=header, comments="")

    def __repr__(self) -> str:
        return f"ReportHistory(n_reports={len(self)})"

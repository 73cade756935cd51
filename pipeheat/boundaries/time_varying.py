"""Time-dependent host values.

Classes
-------
Schedule
    Piecewise-linear time series (e.g. room temperature, air velocity)
    evaluated by the host before each outer step.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


class Schedule:
    """Piecewise-linear time series in simulation hours.

    Args:
        times: Sequence of time values (h).
        values: Corresponding values.
        period: If given, the schedule repeats every *period* hours
            (24 for a daily profile).

    Example::

        room = Schedule(
            times=[0, 7, 8, 18, 19, 24],
            values=[16.0, 16.0, 21.0, 21.0, 16.0, 16.0],
            period=24,
        )
        room(7.5)  # 18.5
    """

    def __init__(
        self,
        times: Sequence[float],
        values: Sequence[float],
        period: float | None = None,
    ) -> None:
        self.times = np.asarray(times, dtype=float)
        self.values = np.asarray(values, dtype=float)
        if len(self.times) != len(self.values):
            raise ValueError("times and values must have the same length.")
        if len(self.times) == 0:
            raise ValueError("A schedule needs at least one point.")
        if np.any(np.diff(self.times) < 0):
            raise ValueError("times must be non-decreasing.")
        if period is not None and period <= 0:
            raise ValueError("period must be positive.")
        self.period = period

    @classmethod
    def constant(cls, value: float) -> "Schedule":
        """Schedule returning *value* at all times."""
        return cls(times=[0.0], values=[value])

    def __call__(self, t: float) -> float:
        """Interpolate the value at time *t* (h)."""
        if self.period is not None:
            t = t % self.period
        return float(np.interp(t, self.times, self.values))

    def __repr__(self) -> str:
        return f"Schedule(n_points={len(self.times)}, period={self.period})"

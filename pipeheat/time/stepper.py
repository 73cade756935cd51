"""Host-side outer time stepping.

Classes
-------
Stepper
    Fixed-size outer steps in the host's clock units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

SECONDS_IN_HOUR = 3600.0
HOURS_IN_DAY = 24.0


@dataclass
class Stepper:
    """Fixed outer stepper, as a host would drive a pipe.

    The clock value yielded is the time at the *end* of each step, in
    hours, which is what the controller compares to detect a new step.

    Args:
        hours: Duration to simulate (h).
        dt: Outer step size (s).
        start_day: Simulation day of the first step.

    Example::

        stepper = Stepper(hours=24, dt=900)  # 1 day, 15-min steps
        for sim_time, dt, day in stepper:
            print(f"t={sim_time:.2f} h, dt={dt:.0f} s, day {day}")
    """

    hours: float
    dt: float
    start_day: int = 1

    def __post_init__(self) -> None:
        if self.dt <= 0.0:
            raise ValueError(f"dt must be positive, got {self.dt}.")

    @property
    def n_steps(self) -> int:
        """Number of outer steps."""
        return int(np.ceil(self.hours * SECONDS_IN_HOUR / self.dt - 1e-9))

    @property
    def times(self) -> np.ndarray:
        """Clock values at the end of each step (h)."""
        return np.array([t for t, _, _ in self])

    def day_of(self, sim_time: float) -> int:
        """Simulation day containing the end of a step ending at *sim_time*."""
        return self.start_day + max(math.ceil(sim_time / HOURS_IN_DAY) - 1, 0)

    def __iter__(self) -> Iterator[tuple[float, float, int]]:
        """Yield ``(sim_time, dt, day)`` tuples."""
        total = self.hours * SECONDS_IN_HOUR
        elapsed = 0.0
        while elapsed < total - 1e-9:
            step_dt = min(self.dt, total - elapsed)
            elapsed += step_dt
            sim_time = elapsed / SECONDS_IN_HOUR
            yield sim_time, step_dt, self.day_of(sim_time)

    def __repr__(self) -> str:
        return f"Stepper(hours={self.hours}, dt={self.dt}, start_day={self.start_day})"

"""Undisturbed (far-field) ground temperature.

Closed-form periodic solution of the 1-D heat equation in a semi-infinite
soil with a sinusoidal annual surface temperature (Kusuda & Achenbach,
1965)::

    T(z, d) = T_m - A exp(-z √(π / (365 α))) cos(2π/365 (d - d_0 - z/2 √(365 / (π α))))

where α is the soil diffusivity in m²/day, *d* the simulation day and
*d_0* the phase shift (day of minimum surface temperature).

References:
    Kusuda, T. & Achenbach, P. (1965), "Earth temperature and thermal
    diffusivity at selected stations in the United States", ASHRAE
    Transactions 71(1), 61-75.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

DAYS_IN_YEAR = 365.0
SECONDS_IN_DAY = 86400.0
MONTHS_IN_YEAR = 12
AVG_DAYS_IN_MONTH = 30


@dataclass(frozen=True)
class GroundTemperatureModel:
    """Kusuda-Achenbach far-field soil temperature.

    Args:
        mean: Annual mean surface temperature (°C).
        amplitude: Amplitude of the annual surface wave (K).
        phase_shift_days: Day of the year of minimum surface temperature.
        diffusivity: Soil thermal diffusivity (m²/s).
    """

    mean: float
    amplitude: float
    phase_shift_days: float
    diffusivity: float

    @property
    def diffusivity_per_day(self) -> float:
        """Soil diffusivity in m²/day."""
        return self.diffusivity * SECONDS_IN_DAY

    def temperature(self, depth: ArrayLike, day: float) -> np.ndarray | float:
        """Evaluate the far-field temperature.

        Args:
            depth: Depth(s) below the surface (m).
            day: Simulation day.

        Returns:
            Temperature(s) in °C, scalar if *depth* is scalar.
        """
        z = np.asarray(depth, dtype=float)
        alpha = self.diffusivity_per_day
        damping = np.exp(-z * np.sqrt(np.pi / (DAYS_IN_YEAR * alpha)))
        lag = (z / 2.0) * np.sqrt(DAYS_IN_YEAR / (np.pi * alpha))
        t = self.mean - self.amplitude * damping * np.cos(
            (2.0 * np.pi / DAYS_IN_YEAR) * (day - self.phase_shift_days - lag)
        )
        if t.ndim == 0:
            return float(t)
        return t

    def __call__(self, depth: ArrayLike, day: float) -> np.ndarray | float:
        return self.temperature(depth, day)

    @classmethod
    def from_monthly(
        cls,
        monthly_surface_temperatures: Sequence[float],
        diffusivity: float,
    ) -> "GroundTemperatureModel":
        """Derive the annual statistics from monthly surface temperatures.

        The mean is the arithmetic mean, the amplitude the mean absolute
        deviation from it, and the phase shift the (1-based) month of the
        coldest value times 30 days.  Ties go to the later month.

        Args:
            monthly_surface_temperatures: Twelve monthly values (°C).
            diffusivity: Soil thermal diffusivity (m²/s).

        Raises:
            ValueError: If not exactly twelve values are given.
        """
        temps = np.asarray(monthly_surface_temperatures, dtype=float)
        if temps.shape != (MONTHS_IN_YEAR,):
            raise ValueError(
                f"Expected {MONTHS_IN_YEAR} monthly temperatures, got {temps.size}."
            )
        mean = float(temps.mean())
        amplitude = float(np.abs(temps - mean).mean())
        # last occurrence of the minimum
        coldest = MONTHS_IN_YEAR - int(np.argmin(temps[::-1]))
        return cls(
            mean=mean,
            amplitude=amplitude,
            phase_shift_days=float(coldest * AVG_DAYS_IN_MONTH),
            diffusivity=diffusivity,
        )

    def __repr__(self) -> str:
        return (
            f"GroundTemperatureModel(mean={self.mean}, amplitude={self.amplitude}, "
            f"phase_shift_days={self.phase_shift_days})"
        )

"""Working-fluid property providers.

Classes
-------
FluidProperties
    Abstract temperature-dependent property lookup.
Water
    Saturated liquid water, tabulated (Incropera & DeWitt, Table A.6).
ConstantFluid
    Temperature-independent properties, mainly for verification.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


class FluidProperties(ABC):
    """Abstract fluid property lookup.

    All methods take a temperature in °C and return SI values.
    """

    name: str = "fluid"

    @abstractmethod
    def density(self, temperature: float) -> float:
        """Density ρ (kg/m³)."""

    @abstractmethod
    def specific_heat(self, temperature: float) -> float:
        """Specific heat c_p (J/(kg·K))."""

    @abstractmethod
    def viscosity(self, temperature: float) -> float:
        """Dynamic viscosity μ (Pa·s)."""

    @abstractmethod
    def conductivity(self, temperature: float) -> float:
        """Thermal conductivity λ (W/(m·K))."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Water(FluidProperties):
    """Liquid water with linearly interpolated tabulated properties.

    Values outside the table range are clamped to the end points.
    """

    name = "water"

    temperatures = np.array([
        1.85, 6.85, 11.85, 16.85, 21.85, 26.85, 31.85, 36.85,
        41.85, 46.85, 51.85, 56.85, 61.85, 66.85, 71.85, 76.85,
    ])
    _specific_volume = 1e-3 * np.array([
        1.000, 1.000, 1.000, 1.001, 1.002, 1.003, 1.005, 1.007,
        1.009, 1.011, 1.013, 1.016, 1.018, 1.021, 1.024, 1.027,
    ])
    _specific_heat = 1e3 * np.array([
        4.211, 4.198, 4.189, 4.184, 4.181, 4.179, 4.178, 4.178,
        4.179, 4.180, 4.182, 4.184, 4.186, 4.188, 4.191, 4.195,
    ])
    _viscosity = 1e-6 * np.array([
        1652.0, 1422.0, 1225.0, 1080.0, 959.0, 855.0, 769.0, 695.0,
        631.0, 577.0, 528.0, 489.0, 453.0, 420.0, 389.0, 365.0,
    ])
    _conductivity = 1e-3 * np.array([
        574.0, 582.0, 590.0, 598.0, 606.0, 613.0, 620.0, 628.0,
        634.0, 640.0, 645.0, 650.0, 656.0, 660.0, 664.0, 668.0,
    ])

    def _lookup(self, table: np.ndarray, temperature: float) -> float:
        return float(np.interp(temperature, self.temperatures, table))

    def density(self, temperature: float) -> float:
        return 1.0 / self._lookup(self._specific_volume, temperature)

    def specific_heat(self, temperature: float) -> float:
        return self._lookup(self._specific_heat, temperature)

    def viscosity(self, temperature: float) -> float:
        return self._lookup(self._viscosity, temperature)

    def conductivity(self, temperature: float) -> float:
        return self._lookup(self._conductivity, temperature)


@dataclass
class ConstantFluid(FluidProperties):
    """Fluid with fixed properties.

    Args:
        rho: Density (kg/m³).
        cp: Specific heat (J/(kg·K)).
        mu: Dynamic viscosity (Pa·s).
        k: Thermal conductivity (W/(m·K)).
    """

    rho: float = 998.0
    cp: float = 4182.0
    mu: float = 1.0e-3
    k: float = 0.6
    name: str = "constant"

    def density(self, temperature: float) -> float:
        return self.rho

    def specific_heat(self, temperature: float) -> float:
        return self.cp

    def viscosity(self, temperature: float) -> float:
        return self.mu

    def conductivity(self, temperature: float) -> float:
        return self.k

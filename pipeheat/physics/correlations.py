"""Convection and radiation correlations.

Functions
---------
prandtl_number
    Prandtl number of liquid water.
inside_convection_coefficient
    Fully developed pipe-flow film coefficient.
air_viscosity
    Kinematic viscosity of air.
outside_convection_coefficient
    Cross-flow film coefficient of a cylinder in air (Zukauskas/Hilpert).
exterior_surface_convection
    ASHRAE simple combined coefficient of a horizontal surface in wind.
sky_radiation_coefficient
    Linearised long-wave exchange coefficient with the sky.
absorbed_solar
    Short-wave flux absorbed by a horizontal surface.
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.constants import Stefan_Boltzmann, zero_Celsius

logger = logging.getLogger(__name__)

LAMINAR_NUSSELT = 3.66
TRANSITION_REYNOLDS = 2300.0

AIR_PRANDTL = 0.7
AIR_CONDUCTIVITY = 0.025  # W/(m·K)
MIN_CROSSFLOW_NUSSELT = 0.36

_PRANDTL_TEMPERATURES = np.array([
    1.85, 6.85, 11.85, 16.85, 21.85, 26.85, 31.85,
    36.85, 41.85, 46.85, 51.85, 56.85, 61.85,
])
_PRANDTL_VALUES = np.array([
    12.22, 10.26, 8.81, 7.56, 6.62, 5.83, 5.20,
    4.62, 4.16, 3.77, 3.42, 3.15, 2.88,
])

_AIR_TEMPERATURES = np.array([
    -73.0, -23.0, -10.0, 0.0, 10.0, 20.0, 27.0, 30.0, 40.0, 50.0, 76.85, 126.85,
])
_AIR_KINEMATIC_VISCOSITY = np.array([
    75.52e-7, 11.37e-6, 12.44e-6, 13.3e-6, 14.18e-6, 15.08e-6,
    15.75e-6, 16.0e-6, 16.95e-6, 17.91e-6, 20.92e-6, 26.41e-6,
])

# (upper Reynolds bound, C, m) for a circular cylinder in cross flow
_CROSSFLOW_RANGES = (
    (4.0, 0.989, 0.330),
    (40.0, 0.911, 0.385),
    (4000.0, 0.683, 0.466),
    (40000.0, 0.193, 0.618),
    (400000.0, 0.027, 0.805),
)

# roughness -> (D, E, F) in h = D + E V + F V², W/(m²·K)
ASHRAE_ROUGHNESS = {
    "VeryRough": (11.58, 5.894, 0.0),
    "Rough": (12.49, 4.065, 0.028),
    "MediumRough": (10.79, 4.192, 0.0),
    "MediumSmooth": (8.23, 4.00, -0.057),
    "Smooth": (10.22, 3.100, 0.0),
    "VerySmooth": (8.23, 3.33, -0.036),
}


def prandtl_number(temperature: float) -> float:
    """Prandtl number of water at *temperature* (°C), clamped to the table."""
    return float(np.interp(temperature, _PRANDTL_TEMPERATURES, _PRANDTL_VALUES))


def reynolds_number(mass_flow: float, viscosity: float, diameter: float) -> float:
    """Pipe-flow Reynolds number ``4 ṁ / (π μ D)``."""
    return 4.0 * mass_flow / (np.pi * viscosity * diameter)


def inside_convection_coefficient(
    mass_flow: float,
    viscosity: float,
    conductivity: float,
    diameter: float,
    prandtl: float,
) -> float:
    """Film coefficient between the fluid and the pipe wall.

    Laminar and stagnant flow use the constant-wall-temperature Nusselt
    number 3.66; turbulent flow uses Dittus-Boelter.

    Args:
        mass_flow: Mass flow rate (kg/s).
        viscosity: Dynamic viscosity (Pa·s).
        conductivity: Fluid conductivity (W/(m·K)).
        diameter: Internal diameter (m).
        prandtl: Fluid Prandtl number.

    Returns:
        Film coefficient (W/(m²·K)).
    """
    re = reynolds_number(mass_flow, viscosity, diameter)
    if re == 0.0 or re < TRANSITION_REYNOLDS:
        nusselt = LAMINAR_NUSSELT
    else:
        nusselt = 0.023 * re ** 0.8 * prandtl ** (1.0 / 3.0)
    return conductivity * nusselt / diameter


def air_viscosity(temperature: float) -> float:
    """Kinematic viscosity of air (m²/s).

    Uses the first tabulated value at or above *temperature*; beyond the
    table the last entry is used and a warning is logged.
    """
    idx = int(np.searchsorted(_AIR_TEMPERATURES, temperature, side="left"))
    if idx >= len(_AIR_TEMPERATURES):
        logger.warning(
            "Air temperature %.2f C above viscosity table; using %.2f C value.",
            temperature, _AIR_TEMPERATURES[-1],
        )
        idx = len(_AIR_TEMPERATURES) - 1
    return float(_AIR_KINEMATIC_VISCOSITY[idx])


def outside_convection_coefficient(
    air_temperature: float,
    air_velocity: float,
    diameter: float,
) -> float:
    """Film coefficient of a cylinder of *diameter* in air cross flow.

    Args:
        air_temperature: Air temperature (°C).
        air_velocity: Free-stream velocity (m/s).
        diameter: Outer diameter of the exposed surface (m).

    Returns:
        Film coefficient (W/(m²·K)).
    """
    re = air_velocity * diameter / air_viscosity(air_temperature)
    for upper, c, m in _CROSSFLOW_RANGES:
        if re <= upper:
            break
    else:
        logger.warning(
            "Cross-flow Reynolds number %.4g beyond correlation range; "
            "using the highest range.", re,
        )
    nusselt = max(c * re ** m * AIR_PRANDTL ** (1.0 / 3.0), MIN_CROSSFLOW_NUSSELT)
    return AIR_CONDUCTIVITY * nusselt / diameter


def exterior_surface_convection(roughness: str, wind_speed: float) -> float:
    """ASHRAE simple exterior convection coefficient (W/(m²·K)).

    Raises:
        KeyError: On an unknown roughness class.
    """
    try:
        d, e, f = ASHRAE_ROUGHNESS[roughness]
    except KeyError:
        raise KeyError(
            f"Unknown roughness {roughness!r}; expected one of "
            f"{sorted(ASHRAE_ROUGHNESS)}"
        ) from None
    return d + e * wind_speed + f * wind_speed ** 2


def sky_radiation_coefficient(
    surface_temperature: float,
    sky_temperature: float,
    absorptivity: float,
) -> float:
    """Linearised radiation coefficient between a surface and the sky.

    Both temperatures are in °C; the coefficient is zero when they are
    equal.
    """
    ts = surface_temperature + zero_Celsius
    tsky = sky_temperature + zero_Celsius
    if ts == tsky:
        return 0.0
    return Stefan_Boltzmann * absorptivity * (ts ** 4 - tsky ** 4) / (ts - tsky)


def absorbed_solar(
    absorptivity: float,
    beam: float,
    diffuse: float,
    cos_zenith: float,
) -> float:
    """Short-wave flux absorbed by a horizontal surface (W/m²)."""
    return absorptivity * (max(cos_zenith, 0.0) * beam + diffuse)

"""Ambient conditions and environment selection.

Classes
-------
EnvironmentKind
    What the outer pipe surface exchanges heat with.
AmbientConditions
    Host-supplied weather, zone, and schedule values for one outer step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ROOM_AIR_VELOCITY = 0.381  # 75 ft/min (m/s)


class EnvironmentKind(str, Enum):
    """Environment variants for the pipe's outer surface."""

    NONE = "none"
    OUTDOOR_AIR = "outdoor_air"
    ZONE_AIR = "zone_air"
    SCHEDULE = "schedule"
    GROUND = "ground"

    @classmethod
    def parse(cls, value: "str | EnvironmentKind") -> "EnvironmentKind":
        """Parse a variant name, case-insensitively.

        Raises:
            ValueError: On an unknown name.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown environment: {value!r}")

    @property
    def is_air(self) -> bool:
        """Whether the outer surface sees air in cross-flow."""
        return self in (
            EnvironmentKind.OUTDOOR_AIR,
            EnvironmentKind.ZONE_AIR,
            EnvironmentKind.SCHEDULE,
        )


@dataclass(frozen=True)
class AmbientConditions:
    """Ambient values evaluated by the host for the current outer step.

    Args:
        outdoor_dry_bulb: Outdoor air temperature (°C).
        wind_speed: Wind speed at the site (m/s).
        sky_temperature: Effective sky temperature (°C).
        beam_solar: Direct normal irradiance (W/m²).
        diffuse_solar: Diffuse horizontal irradiance (W/m²).
        solar_cos_zenith: Cosine of the solar zenith angle (–).
        zone_air_temperature: Mean air temperature of the enclosing zone (°C).
        schedule_temperature: Scheduled environment temperature (°C).
        schedule_air_velocity: Scheduled air velocity (m/s).
    """

    outdoor_dry_bulb: float = 20.0
    wind_speed: float = 0.0
    sky_temperature: float = 20.0
    beam_solar: float = 0.0
    diffuse_solar: float = 0.0
    solar_cos_zenith: float = 0.0
    zone_air_temperature: float = 21.0
    schedule_temperature: float | None = None
    schedule_air_velocity: float | None = None


def environment_temperature(
    kind: EnvironmentKind,
    ambient: AmbientConditions,
) -> float | None:
    """Select the scalar driving temperature for *kind*.

    Returns:
        Environment temperature (°C), or ``None`` for a ground-coupled pipe
        whose surroundings are the soil grid.

    Raises:
        ValueError: If the schedule variant is used without a schedule value.
    """
    if kind is EnvironmentKind.GROUND:
        return None
    if kind is EnvironmentKind.ZONE_AIR:
        return ambient.zone_air_temperature
    if kind is EnvironmentKind.SCHEDULE:
        if ambient.schedule_temperature is None:
            raise ValueError("Schedule environment requires a schedule_temperature.")
        return ambient.schedule_temperature
    # outdoor air, and the fallback for an unset environment
    return ambient.outdoor_dry_bulb


def environment_air(
    kind: EnvironmentKind,
    ambient: AmbientConditions,
) -> tuple[float, float]:
    """Air temperature and velocity seen by the outer pipe surface.

    Returns:
        ``(air_temperature, air_velocity)``.
    """
    if kind is EnvironmentKind.ZONE_AIR:
        return ambient.zone_air_temperature, ROOM_AIR_VELOCITY
    if kind is EnvironmentKind.SCHEDULE:
        if ambient.schedule_temperature is None or ambient.schedule_air_velocity is None:
            raise ValueError(
                "Schedule environment requires schedule_temperature and "
                "schedule_air_velocity."
            )
        return ambient.schedule_temperature, ambient.schedule_air_velocity
    return ambient.outdoor_dry_bulb, ambient.wind_speed

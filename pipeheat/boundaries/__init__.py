"""Boundaries: ambient environment, far-field ground, host schedules."""

from pipeheat.boundaries.environment import (
    EnvironmentKind,
    AmbientConditions,
    environment_temperature,
    environment_air,
)
from pipeheat.boundaries.ground import GroundTemperatureModel
from pipeheat.boundaries.time_varying import Schedule

__all__ = [
    "EnvironmentKind",
    "AmbientConditions",
    "environment_temperature",
    "environment_air",
    "GroundTemperatureModel",
    "Schedule",
]

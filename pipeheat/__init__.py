"""
pipeheat: Transient heat transfer of fluid-carrying pipes, in air or
buried in soil, driven step by step by a host simulation.

Subpackages
-----------
geometry
    Along-pipe sections and the buried-pipe soil grid.
materials
    Layer properties, pipe constructions, working fluids.
boundaries
    Ambient environment, far-field ground temperature, schedules.
physics
    Correlations, the near-pipe model, and the soil model.
time
    History slots, host stepping, and the time-integration controller.
solvers
    Closed-form references for verification.
postprocess
    Per-step reports and export.
visualization
    Pipe profile, soil section, and time-series plots.
"""

from pipeheat import (
    geometry,
    materials,
    boundaries,
    physics,
    time,
    solvers,
    postprocess,
    visualization,
)
from pipeheat.config import PipeConfiguration, SoilProperties, GroundTemperatureInput
from pipeheat.logging_config import setup_logging
from pipeheat.time.controller import HostInputs, TimeIntegrationController

__version__ = "0.1.0"

__all__ = [
    "geometry",
    "materials",
    "boundaries",
    "physics",
    "time",
    "solvers",
    "postprocess",
    "visualization",
    "PipeConfiguration",
    "SoilProperties",
    "GroundTemperatureInput",
    "HostInputs",
    "TimeIntegrationController",
    "setup_logging",
]

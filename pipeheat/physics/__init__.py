"""Physics: correlations and the near-pipe and soil solvers."""

from pipeheat.physics.base import PipeSolver, StepContext
from pipeheat.physics.correlations import (
    prandtl_number,
    inside_convection_coefficient,
    air_viscosity,
    outside_convection_coefficient,
    exterior_surface_convection,
    sky_radiation_coefficient,
    absorbed_solar,
)
from pipeheat.physics.nearpipe import HanbyCoefficients, NearPipeSolver
from pipeheat.physics.soil import BuriedSoilSolver, SweepResult

__all__ = [
    "PipeSolver",
    "StepContext",
    "prandtl_number",
    "inside_convection_coefficient",
    "air_viscosity",
    "outside_convection_coefficient",
    "exterior_surface_convection",
    "sky_radiation_coefficient",
    "absorbed_solar",
    "HanbyCoefficients",
    "NearPipeSolver",
    "BuriedSoilSolver",
    "SweepResult",
]

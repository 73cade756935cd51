"""Abstract base class for the spatial solvers.

Both the lumped near-pipe model and the buried-pipe soil model inherit
from :class:`PipeSolver` so the time-integration controller can drive
either one per sub-step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pipeheat.boundaries.environment import AmbientConditions
from pipeheat.materials.fluids import FluidProperties
from pipeheat.physics.correlations import prandtl_number

SUB_STEP_SECONDS = 60.0


@dataclass
class StepContext:
    """Per-step scalars handed to every solver call.

    Attributes:
        inlet_temperature: Fluid inlet temperature (°C).
        mass_flow_rate: Fluid mass flow rate (kg/s).
        density: Fluid density ρ (kg/m³).
        specific_heat: Fluid specific heat c (J/(kg·K)).
        conductivity: Fluid conductivity λ (W/(m·K)).
        viscosity: Fluid dynamic viscosity μ (Pa·s).
        dt: Sub-step duration (s).
        day: Simulation day, used by the ground boundary.
        environment_temperature: Scalar environment temperature (°C),
            ``None`` for a ground-coupled pipe.
        ambient: Weather, zone, and schedule values.
    """

    inlet_temperature: float
    mass_flow_rate: float
    density: float
    specific_heat: float
    conductivity: float
    viscosity: float
    dt: float = SUB_STEP_SECONDS
    day: float = 1.0
    environment_temperature: float | None = None
    ambient: AmbientConditions = field(default_factory=AmbientConditions)

    @classmethod
    def from_fluid(
        cls,
        fluid: FluidProperties,
        inlet_temperature: float,
        mass_flow_rate: float,
        **kwargs: Any,
    ) -> "StepContext":
        """Evaluate *fluid* properties at the inlet temperature."""
        return cls(
            inlet_temperature=inlet_temperature,
            mass_flow_rate=mass_flow_rate,
            density=fluid.density(inlet_temperature),
            specific_heat=fluid.specific_heat(inlet_temperature),
            conductivity=fluid.conductivity(inlet_temperature),
            viscosity=fluid.viscosity(inlet_temperature),
            **kwargs,
        )

    @property
    def prandtl(self) -> float:
        return prandtl_number(self.inlet_temperature)

    @property
    def capacity_rate(self) -> float:
        """ṁ c (W/K)."""
        return self.mass_flow_rate * self.specific_heat

    @property
    def is_degenerate(self) -> bool:
        """Whether fluid properties are unusable (e.g. frozen fluid)."""
        return self.specific_heat <= 0.0 or self.density <= 0.0


class PipeSolver(ABC):
    """Abstract spatial solver advancing the tentative state by one sub-step.

    Attributes:
        name: Short identifier (e.g. ``"near_pipe"``, ``"soil"``).
        config: The :class:`~pipeheat.config.PipeConfiguration`.
    """

    name: str

    def __init__(self, config: Any) -> None:
        self.config = config

    @abstractmethod
    def solve(self, state: Any, ctx: StepContext) -> Any:
        """Advance ``state`` in its tentative slot by one sub-step.

        Args:
            state: :class:`~pipeheat.time.state.ThermalState` to update.
            ctx: Per-step scalars.
        """

    def validate(self) -> list[str]:
        """Run basic consistency checks.

        Returns:
            List of problems (empty if all OK).
        """
        issues: list[str] = []
        if self.config is None:
            issues.append("No pipe configuration assigned.")
        return issues

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pipe={getattr(self.config, 'name', None)!r})"

"""Lumped along-pipe fluid and pipe-wall heat balance.

The pipe is split into N sections, each holding one fluid node and one
wall node.  Marching from the inlet, each section solves a 2×2 implicit
balance (Hanby, Wright & Fletcher 2002)::

    A1 T_f[k] = A2 T_f[k-1] + A3 T_p[k] + A4 T_f'[k]
    B1 T_p[k] = B2 T_f[k]   + B3 T_env  + B4 T_p'[k]

where primed values come from the previous sub-step.

Classes
-------
HanbyCoefficients
    Section coefficients A1..A4, B1..B4.
NearPipeSolver
    Solver for a pipe surrounded by a scalar environment, also used
    section by section from the soil model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pipeheat.boundaries.environment import EnvironmentKind, environment_air
from pipeheat.physics.base import PipeSolver, StepContext
from pipeheat.physics.correlations import (
    inside_convection_coefficient,
    outside_convection_coefficient,
)
from pipeheat.time.state import ThermalState, TimeSlot

logger = logging.getLogger(__name__)

PREV = TimeSlot.PREVIOUS
TENT = TimeSlot.TENTATIVE


@dataclass(frozen=True)
class HanbyCoefficients:
    """Coefficients of one section's fluid and wall balance."""

    a1: float
    a2: float
    a3: float
    a4: float
    b1: float
    b2: float
    b3: float
    b4: float

    @classmethod
    def from_terms(
        cls,
        fluid_capacity: float,
        pipe_capacity: float,
        capacity_rate: float,
        inside_conductance: float,
        environment_conductance: float,
        dt: float,
    ) -> "HanbyCoefficients":
        """Build coefficients from section capacities and conductances.

        Args:
            fluid_capacity: C_f (J/K).
            pipe_capacity: C_p (J/K).
            capacity_rate: ṁ c (W/K).
            inside_conductance: h_i A_i (W/K).
            environment_conductance: U_e A_o (W/K).
            dt: Sub-step duration (s).
        """
        a3 = inside_conductance * dt
        b3 = environment_conductance * dt
        return cls(
            a1=fluid_capacity + capacity_rate * dt + a3,
            a2=capacity_rate * dt,
            a3=a3,
            a4=fluid_capacity,
            b1=pipe_capacity + a3 + b3,
            b2=a3,
            b3=b3,
            b4=pipe_capacity,
        )

    def fluid_temperature(
        self,
        upstream: float,
        environment: float,
        pipe_past: float,
        fluid_past: float,
    ) -> float:
        """Fluid temperature with the wall equation eliminated."""
        return (
            self.a2 * upstream
            + self.a3 / self.b1 * (self.b3 * environment + self.b4 * pipe_past)
            + self.a4 * fluid_past
        ) / (self.a1 - self.a3 * self.b2 / self.b1)

    def pipe_temperature(self, fluid: float, environment: float, pipe_past: float) -> float:
        return (self.b2 * fluid + self.b3 * environment + self.b4 * pipe_past) / self.b1


class NearPipeSolver(PipeSolver):
    """Hanby lumped model of the fluid and pipe wall.

    Args:
        config: A :class:`~pipeheat.config.PipeConfiguration`.

    Example::

        solver = NearPipeSolver(config)
        solver.solve(state, ctx)
        state.fluid[TimeSlot.TENTATIVE, -1]  # outlet temperature
    """

    name = "near_pipe"

    def __init__(self, config) -> None:
        super().__init__(config)
        self.geometry = config.geometry

    # ------------------------------------------------------------------
    # Coefficients
    # ------------------------------------------------------------------

    def inside_coefficient(self, ctx: StepContext) -> float:
        """Fluid-to-wall film coefficient h_i (W/(m²·K))."""
        return inside_convection_coefficient(
            ctx.mass_flow_rate,
            ctx.viscosity,
            ctx.conductivity,
            self.geometry.inner_diameter,
            ctx.prandtl,
        )

    def environment_coefficient(self, ctx: StepContext) -> float:
        """Wall-to-environment coefficient U_e (W/(m²·K)) for the variant."""
        kind = self.config.environment
        construction = self.geometry.construction
        if kind is EnvironmentKind.GROUND:
            return self.config.soil.conductivity / (
                self.config.grid.spacing - construction.inner_diameter / 2.0
            )
        if kind.is_air:
            air_temp, velocity = environment_air(kind, ctx.ambient)
            h_out = outside_convection_coefficient(
                air_temp, velocity, construction.insulation_outer_diameter,
            )
            return 1.0 / (1.0 / h_out + construction.insulation_resistance)
        return 0.0

    def coefficients(self, ctx: StepContext, environment_coefficient: float) -> HanbyCoefficients:
        """Section coefficients for the current step."""
        geo = self.geometry
        return HanbyCoefficients.from_terms(
            fluid_capacity=geo.fluid_heat_capacity(ctx.density, ctx.specific_heat),
            pipe_capacity=geo.wall_heat_capacity,
            capacity_rate=ctx.capacity_rate,
            inside_conductance=self.inside_coefficient(ctx) * geo.inside_area,
            environment_conductance=environment_coefficient * geo.outside_area,
            dt=ctx.dt,
        )

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self, state: ThermalState, ctx: StepContext) -> None:
        """March all sections against the scalar environment temperature.

        The environment loss of every section is added to
        ``state.environment_heat_loss``.  Nothing is updated for a
        degenerate fluid.
        """
        if ctx.is_degenerate:
            logger.debug("Pipe %s: degenerate fluid properties, skipping update.", self.config.name)
            return
        env_temp = ctx.environment_temperature
        env_coef = self.environment_coefficient(ctx)
        coeffs = self.coefficients(ctx, env_coef)

        state.fluid[TENT, 0] = ctx.inlet_temperature
        for section in range(1, self.geometry.n_sections + 1):
            state.environment_heat_loss += self.solve_section(
                state, ctx, section, env_temp, env_coef, coeffs,
            )

    def solve_section(
        self,
        state: ThermalState,
        ctx: StepContext,
        section: int,
        environment_temperature: float,
        environment_coefficient: float,
        coeffs: HanbyCoefficients | None = None,
    ) -> float:
        """Update one section against its own environment temperature.

        Args:
            state: State updated in its tentative slot.
            ctx: Per-step scalars.
            section: Section index, 1..N.
            environment_temperature: Temperature seen by the wall (°C).
            environment_coefficient: U_e (W/(m²·K)).
            coeffs: Precomputed section coefficients.

        Returns:
            Heat loss of the section to its environment (W); zero for a
            degenerate fluid.
        """
        if ctx.is_degenerate:
            return 0.0
        if coeffs is None:
            coeffs = self.coefficients(ctx, environment_coefficient)
        if section == 1:
            state.fluid[TENT, 0] = ctx.inlet_temperature

        t_fluid = coeffs.fluid_temperature(
            upstream=state.fluid[TENT, section - 1],
            environment=environment_temperature,
            pipe_past=state.pipe[PREV, section],
            fluid_past=state.fluid[PREV, section],
        )
        state.fluid[TENT, section] = t_fluid
        state.pipe[TENT, section] = coeffs.pipe_temperature(
            t_fluid, environment_temperature, state.pipe[PREV, section],
        )

        surface_temp = self.surface_temperature(t_fluid, environment_temperature, environment_coefficient)
        return (
            environment_coefficient
            * self.geometry.outside_area
            * (surface_temp - environment_temperature)
        )

    def surface_temperature(
        self,
        fluid_temperature: float,
        environment_temperature: float,
        environment_coefficient: float,
    ) -> float:
        """Outer surface temperature from the lumped wall resistance."""
        resistance = self.geometry.construction.wall_resistance
        return environment_temperature - (environment_temperature - fluid_temperature) / (
            1.0 + environment_coefficient * resistance
        )

"""Outer-step driver that owns a pipe's thermal history.

A host calls :meth:`TimeIntegrationController.simulate` at least once per
outer time step, and possibly several times at the same clock value while
it iterates its own system.  A call at a new clock value accepts the
previous tentative result; a repeated call at the same value discards it
and recomputes from the accepted state.

Classes
-------
HostInputs
    Values supplied by the host for one evaluation.
TimeIntegrationController
    Accept/revert logic, sub-stepping, and reporting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from pipeheat.boundaries.environment import (
    AmbientConditions,
    EnvironmentKind,
    environment_temperature,
)
from pipeheat.boundaries.ground import GroundTemperatureModel
from pipeheat.materials.fluids import FluidProperties, Water
from pipeheat.physics.base import SUB_STEP_SECONDS, PipeSolver, StepContext
from pipeheat.physics.nearpipe import NearPipeSolver
from pipeheat.physics.soil import (
    CONVERGENCE_TOLERANCE,
    MAX_ITERATIONS,
    BuriedSoilSolver,
    SweepResult,
)
from pipeheat.postprocess.report import PipeReport
from pipeheat.time.state import INITIAL_TEMPERATURE, TIME_TOLERANCE, ThermalState, TimeSlot

logger = logging.getLogger(__name__)


@dataclass
class HostInputs:
    """Host values for one evaluation of a pipe.

    Args:
        sim_time: Simulation clock at the end of the outer step (h).
        time_step: Outer step length (s).
        day_of_sim: Simulation day.
        inlet_temperature: Fluid inlet temperature (°C).
        mass_flow_rate: Fluid mass flow rate (kg/s).
        ambient: Weather, zone, and schedule values.
    """

    sim_time: float
    time_step: float
    inlet_temperature: float
    mass_flow_rate: float
    day_of_sim: float = 1.0
    ambient: AmbientConditions = field(default_factory=AmbientConditions)


class TimeIntegrationController:
    """Drive one pipe through the host's outer time steps.

    Args:
        config: Validated :class:`~pipeheat.config.PipeConfiguration`.
        fluid: Property provider, :class:`~pipeheat.materials.fluids.Water`
            by default.
        ground: Far-field model for a buried pipe; built from the
            configuration if omitted.
        sub_step: Inner step duration (s).
        max_iterations: Soil sweep cap for a buried pipe.
        tolerance: Soil convergence tolerance (K).

    Raises:
        ValueError: If the configuration or the solver built from it is
            invalid.

    Example::

        ctl = TimeIntegrationController(config)
        ctl.begin_environment(day=1)
        report = ctl.simulate(HostInputs(sim_time=0.25, time_step=900,
                                         inlet_temperature=60.0,
                                         mass_flow_rate=0.3))
    """

    def __init__(
        self,
        config,
        fluid: FluidProperties | None = None,
        ground: GroundTemperatureModel | None = None,
        sub_step: float = SUB_STEP_SECONDS,
        max_iterations: int = MAX_ITERATIONS,
        tolerance: float = CONVERGENCE_TOLERANCE,
    ) -> None:
        config.validate()
        self.config = config
        self.fluid = fluid if fluid is not None else Water()
        self.sub_step = sub_step

        self.near_pipe = NearPipeSolver(config)
        self.solver: PipeSolver = self.near_pipe
        soil_shape = None
        if config.is_ground_coupled:
            ground = ground if ground is not None else config.ground_model()
            self.solver = BuriedSoilSolver(
                config, self.near_pipe, ground,
                max_iterations=max_iterations, tolerance=tolerance,
            )
            soil_shape = config.grid.shape
        issues = self.solver.validate()
        if issues:
            raise ValueError(f"Invalid solver for pipe {config.name!r}: " + "; ".join(issues))

        self.state = ThermalState.uniform(config.n_sections, soil_shape)
        self.environment_temperature: float | None = None
        self.last_sweep: SweepResult | None = None
        self._first_call = True

    # ------------------------------------------------------------------
    # Environment period
    # ------------------------------------------------------------------

    def begin_environment(self, day: float = 1.0) -> None:
        """Reset all state at the start of a design day or run period."""
        self.state.reset(INITIAL_TEMPERATURE)
        if isinstance(self.solver, BuriedSoilSolver):
            self.solver.initialize(self.state, day)
        self.environment_temperature = None
        self.last_sweep = None
        self._first_call = True
        logger.debug("Pipe %s: environment initialised on day %s.", self.config.name, day)

    # ------------------------------------------------------------------
    # Outer step
    # ------------------------------------------------------------------

    def simulate(self, inputs: HostInputs) -> PipeReport:
        """Evaluate the pipe for one host call.

        Returns:
            Report of the tentative result for this outer step.
        """
        state = self.state
        new_step = abs(inputs.sim_time - state.last_time) > TIME_TOLERANCE
        if new_step:
            state.accept()
            state.last_time = inputs.sim_time
        else:
            state.revert()

        ambient = self._resolve_ambient(inputs)
        if new_step or self._first_call:
            self.environment_temperature = environment_temperature(self.config.environment, ambient)
        self._first_call = False

        ctx = StepContext.from_fluid(
            self.fluid,
            inputs.inlet_temperature,
            inputs.mass_flow_rate,
            dt=self.sub_step,
            day=inputs.day_of_sim,
            environment_temperature=self.environment_temperature,
            ambient=ambient,
        )
        state.reset_rates()

        n_sub = int(inputs.time_step // self.sub_step)
        for _ in range(n_sub):
            result = self.solver.solve(state, ctx)
            if isinstance(result, SweepResult):
                self.last_sweep = result
            state.push_history()
        state.n_sub_steps = n_sub

        self._update_rates(ctx)
        return self.report(inputs, ctx)

    def _resolve_ambient(self, inputs: HostInputs) -> AmbientConditions:
        """Fill schedule values from the configured schedules if the host left them unset."""
        ambient = inputs.ambient
        cfg = self.config
        if cfg.environment is not EnvironmentKind.SCHEDULE:
            return ambient
        updates = {}
        if ambient.schedule_temperature is None and cfg.temperature_schedule is not None:
            updates["schedule_temperature"] = cfg.temperature_schedule(inputs.sim_time)
        if ambient.schedule_air_velocity is None and cfg.velocity_schedule is not None:
            updates["schedule_air_velocity"] = cfg.velocity_schedule(inputs.sim_time)
        return replace(ambient, **updates) if updates else ambient

    def _update_rates(self, ctx: StepContext) -> None:
        state = self.state
        outlet = float(state.fluid[TimeSlot.TENTATIVE, -1])
        state.outlet_temperature = outlet
        if ctx.is_degenerate or state.n_sub_steps == 0:
            state.fluid_heat_loss_rate = 0.0
            state.environment_heat_loss = 0.0
            return
        state.fluid_heat_loss_rate = ctx.capacity_rate * (ctx.inlet_temperature - outlet)

    def report(self, inputs: HostInputs, ctx: StepContext) -> PipeReport:
        """Build the report for the last evaluation."""
        state = self.state
        env_rate = 0.0
        if state.n_sub_steps > 0:
            env_rate = state.environment_heat_loss / state.n_sub_steps
        zone_gain = env_rate if self.config.environment is EnvironmentKind.ZONE_AIR else 0.0
        volume_flow = inputs.mass_flow_rate / ctx.density if ctx.density > 0.0 else 0.0
        return PipeReport(
            sim_time=inputs.sim_time,
            fluid_inlet_temperature=inputs.inlet_temperature,
            fluid_outlet_temperature=state.outlet_temperature,
            mass_flow_rate=inputs.mass_flow_rate,
            volume_flow_rate=volume_flow,
            fluid_heat_loss_rate=state.fluid_heat_loss_rate,
            fluid_heat_loss_energy=state.fluid_heat_loss_rate * inputs.time_step,
            environment_heat_loss_rate=env_rate,
            environment_heat_loss_energy=env_rate * inputs.time_step,
            pipe_inlet_temperature=float(state.pipe[TimeSlot.TENTATIVE, 1]),
            pipe_outlet_temperature=float(state.pipe[TimeSlot.TENTATIVE, -1]),
            zone_heat_gain_rate=zone_gain,
        )

    def __repr__(self) -> str:
        return (
            f"TimeIntegrationController(pipe={self.config.name!r}, "
            f"solver={type(self.solver).__name__})"
        )

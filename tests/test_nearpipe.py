"""Tests for the lumped near-pipe model."""

import numpy as np
import pytest

from pipeheat.boundaries.environment import AmbientConditions
from pipeheat.config import PipeConfiguration
from pipeheat.materials.fluids import ConstantFluid
from pipeheat.physics.base import StepContext
from pipeheat.physics.correlations import outside_convection_coefficient
from pipeheat.physics.nearpipe import HanbyCoefficients, NearPipeSolver
from pipeheat.solvers.analytical import AnalyticalPipe
from pipeheat.time.controller import HostInputs, TimeIntegrationController
from pipeheat.time.state import ThermalState, TimeSlot

TENT = TimeSlot.TENTATIVE
PREV = TimeSlot.PREVIOUS


def _config(environment="outdoor_air", construction=("copper",), n_sections=10):
    return PipeConfiguration.from_dict({
        "name": "test",
        "environment": environment,
        "inner_diameter": 0.05,
        "length": 50.0,
        "construction": list(construction),
        "n_sections": n_sections,
    })


def _context(fluid=None, inlet=60.0, mass_flow=0.3, env=30.0, wind=2.0):
    ambient = AmbientConditions(outdoor_dry_bulb=env, wind_speed=wind)
    return StepContext.from_fluid(
        fluid if fluid is not None else ConstantFluid(),
        inlet,
        mass_flow,
        environment_temperature=env,
        ambient=ambient,
    )


class TestHanbyCoefficients:
    def test_from_terms(self):
        c = HanbyCoefficients.from_terms(
            fluid_capacity=100.0, pipe_capacity=50.0, capacity_rate=2.0,
            inside_conductance=3.0, environment_conductance=4.0, dt=10.0,
        )
        assert c.a1 == pytest.approx(100.0 + 20.0 + 30.0)
        assert c.a2 == pytest.approx(20.0)
        assert c.a3 == c.b2 == pytest.approx(30.0)
        assert c.a4 == pytest.approx(100.0)
        assert c.b1 == pytest.approx(50.0 + 30.0 + 40.0)
        assert c.b3 == pytest.approx(40.0)
        assert c.b4 == pytest.approx(50.0)

    def test_uniform_temperature_is_fixed_point(self):
        c = HanbyCoefficients.from_terms(100.0, 50.0, 2.0, 3.0, 4.0, 10.0)
        t_f = c.fluid_temperature(upstream=15.0, environment=15.0, pipe_past=15.0, fluid_past=15.0)
        assert t_f == pytest.approx(15.0)
        assert c.pipe_temperature(t_f, 15.0, 15.0) == pytest.approx(15.0)


class TestEnvironmentCoefficient:
    def test_adiabatic(self):
        solver = NearPipeSolver(_config(environment="none"))
        assert solver.environment_coefficient(_context()) == 0.0

    def test_outdoor_air_insulated(self):
        config = _config(construction=("fiberglass", "copper"))
        solver = NearPipeSolver(config)
        c = config.geometry.construction
        h_out = outside_convection_coefficient(30.0, 2.0, c.insulation_outer_diameter)
        expected = 1.0 / (1.0 / h_out + c.insulation_resistance)
        assert solver.environment_coefficient(_context()) == pytest.approx(expected)

    def test_ground(self):
        config = PipeConfiguration.from_dict({
            "environment": "ground",
            "inner_diameter": 0.05,
            "length": 20.0,
            "construction": ["pvc"],
            "n_sections": 4,
            "soil": "loam",
            "ground_temperature": {"mean": 10.0, "amplitude": 5.0, "phase_shift_days": 20},
        })
        solver = NearPipeSolver(config)
        expected = config.soil.conductivity / (config.grid.spacing - 0.025)
        assert solver.environment_coefficient(_context()) == pytest.approx(expected)


class TestNearPipeSolver:
    def setup_method(self):
        self.config = _config()
        self.solver = NearPipeSolver(self.config)
        self.state = ThermalState.uniform(self.config.n_sections)

    def test_inlet_fixed(self):
        self.solver.solve(self.state, _context(inlet=55.0))
        assert self.state.fluid[TENT, 0] == 55.0

    def test_profile_decreases_along_pipe(self):
        self.solver.solve(self.state, _context())
        fluid = self.state.fluid[TENT]
        assert np.all(np.diff(fluid) <= 1e-12)
        assert 21.0 <= fluid[-1] <= 60.0

    def test_history_untouched(self):
        before = self.state.fluid[PREV].copy()
        self.solver.solve(self.state, _context())
        np.testing.assert_array_equal(self.state.fluid[PREV], before)

    def test_environment_loss_sign(self):
        self.solver.solve(self.state, _context(inlet=60.0, env=5.0))
        assert self.state.environment_heat_loss > 0.0

    def test_adiabatic_has_no_loss(self):
        solver = NearPipeSolver(_config(environment="none"))
        solver.solve(self.state, _context())
        assert self.state.environment_heat_loss == 0.0

    def test_surface_resistance_includes_pipe_wall(self):
        config = _config(construction=("fiberglass", "copper"))
        solver = NearPipeSolver(config)
        c = config.geometry.construction
        resistance = c.insulation_resistance + 0.0015 / 401.0
        assert c.wall_resistance == pytest.approx(resistance)
        expected = 10.0 - (10.0 - 50.0) / (1.0 + 2.0 * resistance)
        assert solver.surface_temperature(50.0, 10.0, 2.0) == pytest.approx(expected)

    def test_freeze_guard(self):
        self.state.fluid[TENT, -1] = 33.0
        before = self.state.fluid.copy()
        self.solver.solve(self.state, _context(fluid=ConstantFluid(cp=0.0)))
        np.testing.assert_array_equal(self.state.fluid, before)
        assert self.state.environment_heat_loss == 0.0

    def test_solve_section_matches_full_march(self):
        ctx = _context()
        reference = ThermalState.uniform(self.config.n_sections)
        self.solver.solve(reference, ctx)

        env_coef = self.solver.environment_coefficient(ctx)
        for section in range(1, self.config.n_sections + 1):
            self.solver.solve_section(self.state, ctx, section, 30.0, env_coef)
        np.testing.assert_allclose(self.state.fluid[TENT], reference.fluid[TENT])
        np.testing.assert_allclose(self.state.pipe[TENT, 1:], reference.pipe[TENT, 1:])


class TestSteadyState:
    """Constant inputs drive the outlet to the closed-form steady state."""

    def _run(self, n_steps=300):
        config = _config()
        fluid = ConstantFluid()
        ctl = TimeIntegrationController(config, fluid=fluid)
        ctl.begin_environment(day=1)
        ambient = AmbientConditions(outdoor_dry_bulb=30.0, wind_speed=2.0)
        outlets = []
        for i in range(1, n_steps + 1):
            report = ctl.simulate(HostInputs(
                sim_time=i * 60.0 / 3600.0,
                time_step=60.0,
                inlet_temperature=60.0,
                mass_flow_rate=0.3,
                ambient=ambient,
            ))
            outlets.append(report.fluid_outlet_temperature)

        ctx = _context(fluid=fluid)
        solver = ctl.near_pipe
        geo = config.geometry
        section_ua = AnalyticalPipe.section_conductance(
            solver.inside_coefficient(ctx) * geo.inside_area,
            solver.environment_coefficient(ctx) * geo.outside_area,
        )
        return np.array(outlets), section_ua, ctx.capacity_rate, geo.n_sections, ctl

    def test_converges_to_discrete_form(self):
        outlets, ua, mc, n, _ = self._run()
        expected = AnalyticalPipe.discrete_outlet(60.0, 30.0, ua, mc, n)
        assert outlets[-1] == pytest.approx(expected, rel=1e-9)

    def test_close_to_exponential_form(self):
        outlets, ua, mc, n, _ = self._run()
        expected = AnalyticalPipe.exponential_outlet(60.0, 30.0, n * ua, mc)
        np.testing.assert_allclose(outlets[-1], expected, rtol=1e-3)

    def test_monotone_approach(self):
        outlets, *_ = self._run(n_steps=100)
        assert np.all(np.diff(outlets) >= -1e-9)

    def test_steady_profile(self):
        _, ua, mc, n, ctl = self._run()
        profile = AnalyticalPipe.discrete_profile(60.0, 30.0, ua, mc, n)
        np.testing.assert_allclose(ctl.state.fluid[TENT], profile, rtol=1e-9)

    def test_fluid_heat_loss_at_steady_state(self):
        _, ua, mc, n, ctl = self._run()
        expected = AnalyticalPipe.discrete_outlet(60.0, 30.0, ua, mc, n)
        assert ctl.state.fluid_heat_loss_rate == pytest.approx(mc * (60.0 - expected), rel=1e-6)
        assert ctl.state.fluid_heat_loss_rate > 0.0

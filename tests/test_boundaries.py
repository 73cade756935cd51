"""Tests for the boundaries module."""

import numpy as np
import pytest

from pipeheat.boundaries.environment import (
    AmbientConditions,
    EnvironmentKind,
    ROOM_AIR_VELOCITY,
    environment_air,
    environment_temperature,
)
from pipeheat.boundaries.ground import GroundTemperatureModel
from pipeheat.boundaries.time_varying import Schedule


class TestGroundTemperatureModel:
    def setup_method(self):
        self.model = GroundTemperatureModel(
            mean=10.0, amplitude=8.0, phase_shift_days=30.0, diffusivity=5e-7,
        )

    def test_surface_minimum_at_phase_shift(self):
        assert self.model.temperature(0.0, 30.0) == pytest.approx(2.0)

    def test_surface_maximum_half_year_later(self):
        assert self.model.temperature(0.0, 30.0 + 365.0 / 2.0) == pytest.approx(18.0)

    def test_amplitude_damps_with_depth(self):
        days = np.arange(0, 365, 5)
        shallow = np.array([self.model(0.5, d) for d in days])
        deep = np.array([self.model(5.0, d) for d in days])
        assert np.ptp(deep) < np.ptp(shallow)
        assert np.ptp(deep) > 0.0

    def test_tends_to_mean_at_depth(self):
        assert self.model.temperature(50.0, 100.0) == pytest.approx(10.0, abs=1e-6)

    def test_array_input(self):
        depths = np.array([0.0, 1.0, 2.0])
        t = self.model.temperature(depths, 120.0)
        assert t.shape == (3,)
        np.testing.assert_allclose(t[0], self.model.temperature(0.0, 120.0))

    def test_scalar_returns_float(self):
        assert isinstance(self.model.temperature(1.0, 10.0), float)

    def test_diffusivity_per_day(self):
        assert self.model.diffusivity_per_day == pytest.approx(5e-7 * 86400.0)

    def test_from_monthly(self):
        monthly = [1, 2, 6, 10, 14, 18, 20, 19, 15, 10, 5, 2]
        m = GroundTemperatureModel.from_monthly(monthly, 5e-7)
        mean = np.mean(monthly)
        assert m.mean == pytest.approx(mean)
        assert m.amplitude == pytest.approx(np.mean(np.abs(np.array(monthly) - mean)))
        assert m.phase_shift_days == 30.0

    def test_from_monthly_tie_goes_to_later_month(self):
        monthly = [1, 5, 6, 10, 14, 18, 20, 19, 15, 10, 5, 1]
        m = GroundTemperatureModel.from_monthly(monthly, 5e-7)
        assert m.phase_shift_days == 12 * 30.0

    def test_from_monthly_wrong_count(self):
        with pytest.raises(ValueError, match="12"):
            GroundTemperatureModel.from_monthly([1.0] * 11, 5e-7)


class TestEnvironment:
    def setup_method(self):
        self.ambient = AmbientConditions(
            outdoor_dry_bulb=-5.0,
            wind_speed=4.0,
            zone_air_temperature=22.0,
            schedule_temperature=15.0,
            schedule_air_velocity=0.2,
        )

    def test_parse(self):
        assert EnvironmentKind.parse("Zone Air") is EnvironmentKind.ZONE_AIR
        assert EnvironmentKind.parse("outdoor-air") is EnvironmentKind.OUTDOOR_AIR
        assert EnvironmentKind.parse(EnvironmentKind.GROUND) is EnvironmentKind.GROUND

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            EnvironmentKind.parse("lava")

    def test_is_air(self):
        assert EnvironmentKind.SCHEDULE.is_air
        assert not EnvironmentKind.GROUND.is_air
        assert not EnvironmentKind.NONE.is_air

    def test_environment_temperature(self):
        a = self.ambient
        assert environment_temperature(EnvironmentKind.OUTDOOR_AIR, a) == -5.0
        assert environment_temperature(EnvironmentKind.NONE, a) == -5.0
        assert environment_temperature(EnvironmentKind.ZONE_AIR, a) == 22.0
        assert environment_temperature(EnvironmentKind.SCHEDULE, a) == 15.0
        assert environment_temperature(EnvironmentKind.GROUND, a) is None

    def test_schedule_requires_value(self):
        with pytest.raises(ValueError):
            environment_temperature(EnvironmentKind.SCHEDULE, AmbientConditions())

    def test_environment_air(self):
        a = self.ambient
        assert environment_air(EnvironmentKind.OUTDOOR_AIR, a) == (-5.0, 4.0)
        assert environment_air(EnvironmentKind.ZONE_AIR, a) == (22.0, ROOM_AIR_VELOCITY)
        assert environment_air(EnvironmentKind.SCHEDULE, a) == (15.0, 0.2)


class TestSchedule:
    def test_interpolation(self):
        s = Schedule(times=[0, 10], values=[0.0, 100.0])
        assert s(5.0) == pytest.approx(50.0)

    def test_clamps_outside(self):
        s = Schedule(times=[0, 10], values=[0.0, 100.0])
        assert s(20.0) == pytest.approx(100.0)

    def test_periodic(self):
        s = Schedule(times=[0, 12, 24], values=[10.0, 20.0, 10.0], period=24)
        assert s(30.0) == pytest.approx(s(6.0))

    def test_constant(self):
        s = Schedule.constant(18.0)
        assert s(0.0) == s(1000.0) == 18.0

    def test_validation(self):
        with pytest.raises(ValueError):
            Schedule(times=[0, 1], values=[1.0])
        with pytest.raises(ValueError):
            Schedule(times=[1, 0], values=[1.0, 2.0])
        with pytest.raises(ValueError):
            Schedule(times=[0], values=[1.0], period=0)

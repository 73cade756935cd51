"""Tests for the time module."""

import numpy as np
import pytest

from pipeheat.time.state import ThermalState, TimeSlot
from pipeheat.time.stepper import Stepper


class TestStepper:
    def test_n_steps(self):
        s = Stepper(hours=24, dt=900)
        assert s.n_steps == 96

    def test_iteration(self):
        s = Stepper(hours=1, dt=900)
        steps = list(s)
        assert len(steps) == 4
        assert steps[0] == (0.25, 900.0, 1)
        assert steps[-1] == (1.0, 900.0, 1)

    def test_partial_last_step(self):
        s = Stepper(hours=1, dt=1500)
        steps = list(s)
        assert s.n_steps == 3
        assert steps[-1][1] == pytest.approx(600.0)
        assert steps[-1][0] == pytest.approx(1.0)

    def test_times(self):
        s = Stepper(hours=2, dt=1800)
        np.testing.assert_allclose(s.times, [0.5, 1.0, 1.5, 2.0])

    def test_day_of(self):
        s = Stepper(hours=48, dt=3600, start_day=10)
        assert s.day_of(1.0) == 10
        assert s.day_of(24.0) == 10
        assert s.day_of(25.0) == 11
        assert list(s)[-1][2] == 11

    def test_invalid_dt(self):
        with pytest.raises(ValueError):
            Stepper(hours=1, dt=0)


class TestThermalState:
    def setup_method(self):
        self.state = ThermalState.uniform(4, soil_shape=(2, 3, 4), temperature=15.0)

    def test_shapes(self):
        assert self.state.fluid.shape == (3, 5)
        assert self.state.pipe.shape == (3, 5)
        assert self.state.soil.shape == (3, 2, 3, 4)
        assert self.state.n_sections == 4
        assert len(self.state.arrays()) == 3

    def test_without_soil(self):
        state = ThermalState.uniform(6)
        assert state.soil is None
        assert len(state.arrays()) == 2

    def test_accept(self):
        self.state.fluid[TimeSlot.TENTATIVE] = 40.0
        self.state.soil[TimeSlot.TENTATIVE, 0, 1, 2] = 30.0
        self.state.accept()
        np.testing.assert_array_equal(self.state.fluid[TimeSlot.CURRENT], 40.0)
        assert self.state.soil[TimeSlot.CURRENT, 0, 1, 2] == 30.0
        np.testing.assert_array_equal(self.state.fluid[TimeSlot.PREVIOUS], 15.0)

    def test_revert(self):
        self.state.pipe[TimeSlot.CURRENT] = np.linspace(10.0, 20.0, 5)
        self.state.pipe[TimeSlot.TENTATIVE] = 99.0
        self.state.revert()
        np.testing.assert_array_equal(
            self.state.pipe[TimeSlot.TENTATIVE], self.state.pipe[TimeSlot.CURRENT],
        )

    def test_revert_is_idempotent(self):
        self.state.fluid[TimeSlot.CURRENT] = 33.0
        self.state.revert()
        first = self.state.fluid.copy()
        self.state.revert()
        np.testing.assert_array_equal(self.state.fluid, first)

    def test_push_history(self):
        self.state.soil[TimeSlot.CURRENT] = 8.0
        self.state.push_history()
        np.testing.assert_array_equal(self.state.soil[TimeSlot.PREVIOUS], 8.0)

    def test_reset(self):
        self.state.fluid[:] = 50.0
        self.state.soil[:] = 5.0
        self.state.last_time = 3.0
        self.state.environment_heat_loss = 100.0
        self.state.reset(21.0)
        np.testing.assert_array_equal(self.state.fluid, 21.0)
        np.testing.assert_array_equal(self.state.pipe, 21.0)
        np.testing.assert_array_equal(self.state.soil, 5.0)
        assert self.state.last_time == 0.0
        assert self.state.environment_heat_loss == 0.0
        assert self.state.outlet_temperature == 21.0

    def test_repr(self):
        assert "N=4" in repr(self.state)

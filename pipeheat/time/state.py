"""Thermal state with enumerated history slots.

Every array carries the time slot as its leading axis, so moving state
between "previous", "current", and "tentative" is a single slice copy.

Classes
-------
TimeSlot
    Index of the history slot.
ThermalState
    Fluid, pipe-wall, and (for buried pipes) soil temperatures of one pipe.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

INITIAL_TEMPERATURE = 21.0  # °C
TIME_TOLERANCE = 1e-6  # h, clock values closer than this are the same instant


class TimeSlot(IntEnum):
    """History slot on the leading axis of every state array."""

    PREVIOUS = 0
    CURRENT = 1
    TENTATIVE = 2


N_SLOTS = len(TimeSlot)


@dataclass
class ThermalState:
    """Mutable temperatures and rate accumulators of one pipe.

    Attributes:
        fluid: Fluid temperatures, shape ``(3, N+1)``; node 0 is the inlet.
        pipe: Pipe-wall temperatures, shape ``(3, N+1)``.
        soil: Soil temperatures, shape ``(3, W, D, N)``, or ``None``.
        last_time: Last accepted host clock value (h).
        environment_heat_loss: Heat loss to the environment summed over
            sections and sub-steps (W).
        fluid_heat_loss_rate: ṁ c (T_in − T_out) (W).
        outlet_temperature: Reported outlet temperature (°C).
        n_sub_steps: Sub-steps taken in the current outer step.
    """

    fluid: np.ndarray
    pipe: np.ndarray
    soil: np.ndarray | None = None
    last_time: float = 0.0
    environment_heat_loss: float = 0.0
    fluid_heat_loss_rate: float = 0.0
    outlet_temperature: float = INITIAL_TEMPERATURE
    n_sub_steps: int = 0

    @classmethod
    def uniform(
        cls,
        n_sections: int,
        soil_shape: tuple[int, int, int] | None = None,
        temperature: float = INITIAL_TEMPERATURE,
    ) -> "ThermalState":
        """State with every node at *temperature*.

        Args:
            n_sections: Number of pipe sections N.
            soil_shape: ``(W, D, N)`` for a buried pipe.
            temperature: Initial temperature (°C).
        """
        soil = None
        if soil_shape is not None:
            soil = np.full((N_SLOTS,) + tuple(soil_shape), temperature, dtype=float)
        return cls(
            fluid=np.full((N_SLOTS, n_sections + 1), temperature, dtype=float),
            pipe=np.full((N_SLOTS, n_sections + 1), temperature, dtype=float),
            soil=soil,
            outlet_temperature=temperature,
        )

    @property
    def n_sections(self) -> int:
        return self.fluid.shape[1] - 1

    def arrays(self) -> list[np.ndarray]:
        """All slot-indexed arrays."""
        out = [self.fluid, self.pipe]
        if self.soil is not None:
            out.append(self.soil)
        return out

    def _copy_slot(self, src: TimeSlot, dst: TimeSlot) -> None:
        for arr in self.arrays():
            arr[dst] = arr[src]

    def accept(self) -> None:
        """Make the tentative state the accepted one."""
        self._copy_slot(TimeSlot.TENTATIVE, TimeSlot.CURRENT)

    def revert(self) -> None:
        """Discard the tentative state."""
        self._copy_slot(TimeSlot.CURRENT, TimeSlot.TENTATIVE)

    def push_history(self) -> None:
        """Rotate the accepted state into history."""
        self._copy_slot(TimeSlot.CURRENT, TimeSlot.PREVIOUS)

    def reset(self, temperature: float = INITIAL_TEMPERATURE) -> None:
        """Set fluid and pipe temperatures in all slots and zero the rates."""
        self.fluid[...] = temperature
        self.pipe[...] = temperature
        self.last_time = 0.0
        self.outlet_temperature = temperature
        self.reset_rates()

    def reset_rates(self) -> None:
        self.environment_heat_loss = 0.0
        self.fluid_heat_loss_rate = 0.0
        self.n_sub_steps = 0

    def __repr__(self) -> str:
        soil = None if self.soil is None else self.soil.shape[1:]
        return f"ThermalState(N={self.n_sections}, soil={soil}, last_time={self.last_time})"

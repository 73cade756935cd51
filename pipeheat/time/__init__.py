"""Time: history slots and host-side stepping.

The controller lives in :mod:`pipeheat.time.controller`; it depends on the
physics solvers, which themselves use the state defined here.
"""

from pipeheat.time.state import TimeSlot, ThermalState
from pipeheat.time.stepper import Stepper

__all__ = [
    "TimeSlot",
    "ThermalState",
    "Stepper",
]

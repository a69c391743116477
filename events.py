# events.py

"""
Input events delivered by the display shell to Simulation.step().

The shell polls its own devices and batches whatever happened since the last
tick into a sequence of these objects. Positions are arena-local (x, y).
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PointerDown:
    """Primary pointer pressed. Starts a drag."""
    pos: Tuple[float, float]


@dataclass(frozen=True)
class PointerUp:
    """Primary pointer released. Ends a drag and spawns a particle."""
    pos: Tuple[float, float]


@dataclass(frozen=True)
class PointerMove:
    """Current pointer position, used for the drag preview."""
    pos: Tuple[float, float]


@dataclass(frozen=True)
class KeyToggle:
    """Auto-fire toggle key pressed."""


@dataclass(frozen=True)
class AutoFireElapsed:
    """Shell-side timer expiry. Forces an auto-fire shot this tick."""

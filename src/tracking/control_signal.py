"""
Control signal shared between the detection cycle and the animation tick.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class Gesture(Enum):
    """Coarse hand gesture categories."""
    NONE = auto()
    FIST = auto()
    OPEN = auto()
    PEACE = auto()
    POINT = auto()
    OK = auto()


@dataclass(frozen=True)
class ControlSignal:
    """
    Smoothed sensing output for one detection cycle.

    Instances are immutable and published whole, so a reader never sees
    tension from one cycle paired with a gesture from another.

    Attributes:
        tension: 0 = relaxed hand, 1 = closed fist
        expansion: 0 = fingers together, 1 = fully spread
        active: False when no hand is tracked
        gesture: Coarse gesture category
        hand_offset: Palm centre relative to the frame centre, or None
    """
    tension: float = 0.0
    expansion: float = 0.0
    active: bool = False
    gesture: Gesture = Gesture.NONE
    hand_offset: Optional[Tuple[float, float]] = None

    def __post_init__(self):
        # An inactive signal is always the rest state
        if not self.active and (self.tension or self.expansion
                                or self.gesture != Gesture.NONE
                                or self.hand_offset is not None):
            raise ValueError(f"Inactive signal must be the rest state, got {self}")

    @classmethod
    def inactive(cls) -> "ControlSignal":
        """Rest state used whenever no hand is tracked."""
        return cls()

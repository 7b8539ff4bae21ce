"""
Hand detector capability.

The sensing pipeline only needs ``estimate_hands(frame)``; any backend
(MediaPipe, a recorded session, synthetic test fixtures) can sit behind it.
"""
from abc import ABC, abstractmethod
from typing import List

from .landmarks import HandLandmarks


class HandDetector(ABC):
    """Turns one video frame into zero or more landmark sets."""

    def start(self) -> None:
        """Acquire model resources. Raises DetectorFailure on error."""

    @abstractmethod
    def estimate_hands(self, frame) -> List[HandLandmarks]:
        """
        Detect hands in a frame.

        Returns:
            One HandLandmarks per tracked hand, or an empty list when no hand
            is visible. Raises DetectorFailure if the model fails.
        """

    def close(self) -> None:
        """Release model resources. Must be safe to call more than once."""

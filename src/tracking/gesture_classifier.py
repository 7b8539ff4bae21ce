"""
Gesture classification from the smoothed control signal.
Detects OK, peace, point, fist and open hand.
"""
from typing import Optional

from .config import ClassifierConfig
from .control_signal import ControlSignal, Gesture
from .metrics import RawMetrics

THUMB, INDEX, MIDDLE, RING, PINKY = range(5)


class GestureClassifier:
    """
    Stateless mapping from a control signal to one Gesture.

    Specific hand shapes (OK, peace, point) need per-finger extension
    ratios and are checked first; the fist / open bands only look at the
    smoothed tension and expansion. Temporal stability comes from the
    signal filter, there is no hysteresis here.
    """

    def __init__(self, config: ClassifierConfig):
        self._config = config

    def classify(self, signal: ControlSignal, metrics: Optional[RawMetrics] = None) -> Gesture:
        if not signal.active:
            return Gesture.NONE

        if metrics is not None:
            shape = self._classify_shape(metrics)
            if shape is not None:
                return shape

        cfg = self._config
        if signal.tension > cfg.fist_threshold:
            return Gesture.FIST
        if signal.expansion > cfg.open_threshold:
            return Gesture.OPEN
        return Gesture.NONE

    def is_rest_pose(self, signal: ControlSignal) -> bool:
        """Hand visible but neither spread nor clenched (reported as NONE)."""
        cfg = self._config
        return (signal.active
                and signal.expansion < cfg.rest_threshold
                and signal.tension < cfg.rest_threshold)

    def _classify_shape(self, metrics: RawMetrics) -> Optional[Gesture]:
        cfg = self._config
        ratios = metrics.finger_ratios

        def extended(finger: int, scale: float = 1.0) -> bool:
            return ratios[finger] > cfg.extended_threshold * scale

        def closed(finger: int) -> bool:
            return ratios[finger] < cfg.closed_threshold

        if (metrics.pinch_ratio < cfg.ok_pinch_threshold
                and extended(MIDDLE, cfg.ok_extended_scale)
                and extended(RING, cfg.ok_extended_scale)
                and extended(PINKY, cfg.ok_extended_scale)):
            return Gesture.OK

        if extended(INDEX) and extended(MIDDLE) and closed(RING):
            return Gesture.PEACE

        if extended(INDEX) and not extended(MIDDLE) and closed(RING):
            return Gesture.POINT

        return None

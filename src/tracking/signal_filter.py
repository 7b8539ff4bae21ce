"""
Temporal filtering of raw hand metrics into a stable control signal.
"""
import math

from .config import FilterConfig
from .control_signal import ControlSignal
from .metrics import RawMetrics


def clamp01(value: float) -> float:
    """Clamp to [0, 1]; NaN and infinities collapse to 0."""
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


class SignalFilter:
    """
    Converts per-frame RawMetrics into smoothed tension / expansion.

    Each value goes through exponential smoothing, then a dead zone that
    holds the previous value for sub-threshold changes, then a floor that
    snaps small values to exactly 0. Losing the hand resets immediately.
    """

    def __init__(self, config: FilterConfig):
        self._config = config
        self._last_tension = 0.0
        self._last_expansion = 0.0

    def update(self, metrics: RawMetrics) -> ControlSignal:
        """
        Filter one detection cycle.

        Returns:
            Active ControlSignal with gesture NONE; the caller attaches the
            gesture category and hand offset.
        """
        raw_tension, raw_expansion = self.raw_values(metrics)

        tension = self._filter(raw_tension, self._last_tension)
        expansion = self._filter(raw_expansion, self._last_expansion)

        self._last_tension = tension
        self._last_expansion = expansion

        return ControlSignal(tension=tension, expansion=expansion, active=True)

    def reset(self) -> ControlSignal:
        """Hand lost: drop all smoothing state without lag."""
        self._last_tension = 0.0
        self._last_expansion = 0.0
        return ControlSignal.inactive()

    def raw_values(self, metrics: RawMetrics):
        """Map normalized hand geometry onto unsmoothed [0, 1] values."""
        cfg = self._config
        try:
            normalized_distance = metrics.avg_fingertip_distance / metrics.hand_length
            normalized_spread = metrics.finger_spread / metrics.hand_length
        except ZeroDivisionError:
            return 0.0, 0.0

        raw_tension = clamp01((cfg.tension_offset - normalized_distance) / cfg.tension_range)
        raw_expansion = clamp01((normalized_spread - cfg.expansion_offset) / cfg.expansion_range)
        return raw_tension, raw_expansion

    def _filter(self, raw: float, last: float) -> float:
        cfg = self._config

        value = last + (raw - last) * cfg.smoothing

        if abs(value - last) < cfg.dead_zone:
            value = last

        if value < cfg.floor:
            value = 0.0

        return clamp01(value)

    @property
    def last_tension(self) -> float:
        return self._last_tension

    @property
    def last_expansion(self) -> float:
        return self._last_expansion

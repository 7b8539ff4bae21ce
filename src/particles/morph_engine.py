"""
Per-frame morphing of the live particle buffer toward a gesture-selected target.
"""
from typing import Optional
import math

import numpy as np

from tracking.config import MorphConfig
from tracking.control_signal import ControlSignal, Gesture

from .fields import FieldCache, circle_field, explosion_field, scatter_field


class MorphEngine:
    """
    Owns the live particle buffer and the secondary rotation.

    Each tick picks a target field from the control signal, scales it by a
    gesture-dependent zoom, offsets it by the hand position and moves every
    particle a fixed fraction of the way there. Forming a shape uses the
    faster active rate; drifting back to the idle cloud uses the slow one.
    """

    def __init__(self, config: MorphConfig, count: int, template="SATURN",
                 rng: Optional[np.random.Generator] = None):
        self._config = config
        self._count = count
        self._rng = rng if rng is not None else np.random.default_rng()

        self._fields = FieldCache(count, self._rng)
        self._template = template
        self._fields.get(template)

        self._circle = circle_field(count, config.circle_radius, self._rng)
        self._scatter = scatter_field(count, config.scatter_radius, self._rng)
        self._explosion = explosion_field(count, self._rng)
        for field in (self._circle, self._scatter, self._explosion):
            field.setflags(write=False)

        # Seeded from the idle cloud so the first frame does not snap
        self._buffer = self._scatter.copy()
        self._rotation = 0.0
        self._active_time = 0.0

    def set_template(self, template) -> None:
        """Select a new template. Only the cached target changes."""
        self._template = template
        self._fields.get(template)

    def target_positions(self, signal: ControlSignal) -> np.ndarray:
        """Where every particle is heading for this signal, shape (count, 3)."""
        if not signal.active:
            return self._scatter

        cfg = self._config
        gesture = signal.gesture

        if gesture == Gesture.FIST:
            zoom = cfg.fist_zoom_min + (1.0 - signal.tension) * cfg.fist_zoom_range
            target = self._circle * zoom
        elif gesture == Gesture.OK:
            radius = (cfg.explosion_radius
                      + cfg.explosion_amplitude * math.sin(self._active_time * cfg.explosion_speed))
            target = self._explosion * radius
        elif gesture == Gesture.POINT:
            target = self._fields.get(self._template) * (self._zoom(signal) * cfg.point_focus)
        elif gesture in (Gesture.OPEN, Gesture.PEACE, Gesture.NONE):
            target = self._fields.get(self._template) * self._zoom(signal)
        else:
            raise ValueError(f"Unhandled gesture {gesture}")

        if signal.hand_offset is not None and cfg.hand_offset_scale:
            ox, oy = signal.hand_offset
            # Image y grows downwards
            offset = np.array([ox, -oy, 0.0], dtype=np.float32) * cfg.hand_offset_scale
            target = target + offset

        return target

    def tick(self, delta: float, signal: ControlSignal) -> None:
        """
        Advance one animation frame.

        Args:
            delta: Seconds since the previous tick
            signal: Snapshot of the control signal, read once per tick
        """
        cfg = self._config

        if signal.active:
            self._active_time += delta
        else:
            self._active_time = 0.0

        target = self.target_positions(signal)
        lerp = cfg.active_lerp if signal.active else cfg.idle_lerp

        # Particles with a non-finite target hold still this tick
        valid = np.isfinite(target).all(axis=1)
        if valid.all():
            self._buffer += (target - self._buffer) * lerp
        else:
            self._buffer[valid] += (target[valid] - self._buffer[valid]) * lerp

        if signal.active and signal.gesture == Gesture.FIST:
            self._rotation += delta * (cfg.rotation_base + signal.tension * cfg.rotation_gain)
        else:
            self._rotation *= cfg.rotation_decay

    def _zoom(self, signal: ControlSignal) -> float:
        return self._config.zoom_min + signal.expansion * self._config.zoom_range

    @property
    def positions(self) -> np.ndarray:
        """Flat (3 * count) view of the live buffer. Read-only for renderers."""
        return self._buffer.reshape(-1)

    @property
    def points(self) -> np.ndarray:
        """(count, 3) view of the live buffer."""
        return self._buffer

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def template(self):
        return self._template

    @property
    def count(self) -> int:
        return self._count

    @property
    def scatter(self) -> np.ndarray:
        return self._scatter

    @property
    def circle(self) -> np.ndarray:
        return self._circle

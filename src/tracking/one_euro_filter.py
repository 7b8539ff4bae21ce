import math
from typing import Optional, Tuple

import numpy as np


class OneEuroFilter:
    """
    One Euro filter over a small vector (e.g. an (x, y) palm position).

    Adaptive low-pass: heavy smoothing while the hand is still, less lag
    while it moves quickly.
    """

    def __init__(self, min_cutoff: float = 1.0, beta: float = 0.0, d_cutoff: float = 1.0):
        """
        Args:
            min_cutoff: Minimum cutoff frequency in Hz. Lower = less jitter at low speed.
            beta: Speed coefficient. Higher = less lag at high speed.
            d_cutoff: Cutoff frequency for derivative smoothing (Hz).
        """
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff

        self.x_prev: Optional[np.ndarray] = None
        self.dx_prev: Optional[np.ndarray] = None
        self.t_prev: Optional[float] = None

    @staticmethod
    def _alpha(t_e: float, cutoff) -> np.ndarray:
        r = 2 * math.pi * cutoff * t_e
        return r / (r + 1)

    def reset(self) -> None:
        self.x_prev = None
        self.dx_prev = None
        self.t_prev = None

    def __call__(self, t: float, x: Tuple[float, ...]) -> Tuple[float, ...]:
        """
        Filter one sample taken at time t (seconds).

        The first sample after construction or reset passes through unchanged.
        """
        x = np.asarray(x, dtype=np.float64)

        if self.x_prev is None or self.t_prev is None:
            self.x_prev = x
            self.dx_prev = np.zeros_like(x)
            self.t_prev = t
            return tuple(float(v) for v in x)

        t_e = t - self.t_prev
        if t_e <= 0.0:
            return tuple(float(v) for v in self.x_prev)

        dx = (x - self.x_prev) / t_e
        a_d = self._alpha(t_e, self.d_cutoff)
        dx_hat = a_d * dx + (1 - a_d) * self.dx_prev

        # Per-component cutoff grows with speed
        cutoff = self.min_cutoff + self.beta * np.abs(dx_hat)
        a = self._alpha(t_e, cutoff)
        x_hat = a * x + (1 - a) * self.x_prev

        self.x_prev = x_hat
        self.dx_prev = dx_hat
        self.t_prev = t

        return tuple(float(v) for v in x_hat)

"""
Particle view - perspective projection of the live buffer painted with QPainter.
"""
from typing import Optional
import math

import numpy as np
from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QPainter, QPen, QColor, QPolygonF

from tracking.control_signal import Gesture


def project_points(points: np.ndarray, rotation: float, width: int, height: int,
                   camera_distance: float = 40.0, fov: float = 60.0) -> np.ndarray:
    """
    Rotate around the y axis and project onto the screen.

    Returns:
        (n, 2) screen coordinates of the points in front of the camera
    """
    if len(points) == 0:
        return np.zeros((0, 2), dtype=np.float32)

    c, s = math.cos(rotation), math.sin(rotation)
    x = points[:, 0] * c + points[:, 2] * s
    y = points[:, 1]
    z = -points[:, 0] * s + points[:, 2] * c

    depth = camera_distance - z
    visible = depth > 0.1

    focal = (height / 2) / math.tan(math.radians(fov) / 2)
    sx = width / 2 + x[visible] * focal / depth[visible]
    sy = height / 2 - y[visible] * focal / depth[visible]
    return np.stack([sx, sy], axis=1)


# Parking spot for culled particles
OFFSCREEN = -1.0e6


class ParticleView(QWidget):
    """Black canvas showing the particle cloud in the selected colour."""

    def __init__(self, point_size: float = 1.6, camera_distance: float = 40.0,
                 fov: float = 60.0, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_OpaquePaintEvent)
        self.setMinimumSize(320, 240)

        self._point_size = point_size
        self._camera_distance = camera_distance
        self._fov = fov

        self._points: Optional[np.ndarray] = None
        self._rotation = 0.0
        self._gesture = Gesture.NONE
        self._color = QColor("#00eaff")

        # Reused across paints; _polygon_xy is a numpy view of its storage
        self._polygon = QPolygonF()
        self._polygon_xy = np.zeros((0, 2), dtype=np.float64)

    def set_color(self, color: str):
        """Set particle colour from a hex string."""
        parsed = QColor(color)
        if parsed.isValid():
            self._color = parsed
            self.update()

    def set_frame(self, points: np.ndarray, rotation: float, gesture: Gesture = Gesture.NONE):
        """Show a new frame. The buffer is only read during paint."""
        self._points = points
        self._rotation = rotation
        self._gesture = gesture
        self.update()

    def _current_color(self) -> QColor:
        color = QColor(self._color)
        if self._gesture == Gesture.PEACE:
            # Colour shift
            h, s, v, a = color.getHsv()
            color.setHsv((max(h, 0) + 60) % 360, s, v, a)
        elif self._gesture == Gesture.POINT:
            color = color.lighter(150)
        color.setAlpha(200)
        return color

    def screen_polygon(self, screen: np.ndarray) -> QPolygonF:
        """
        Copy projected points into the reused polygon.

        The polygon holds one point per particle; slots of culled particles
        are parked off-screen so the size only changes with the count.
        """
        count = max(len(screen), 0 if self._points is None else len(self._points))
        if self._polygon.size() != count:
            self._polygon = QPolygonF()
            self._polygon.fill(QPointF(), count)
            ptr = self._polygon.data()
            ptr.setsize(count * 2 * np.dtype(np.float64).itemsize)
            self._polygon_xy = np.frombuffer(ptr, dtype=np.float64).reshape(count, 2)

        visible = len(screen)
        self._polygon_xy[:visible] = screen
        self._polygon_xy[visible:] = OFFSCREEN
        return self._polygon

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.black)

        if self._points is None:
            painter.end()
            return

        screen = project_points(
            self._points, self._rotation, self.width(), self.height(),
            self._camera_distance, self._fov,
        )

        painter.setCompositionMode(QPainter.CompositionMode_Plus)
        pen = QPen(self._current_color())
        pen.setWidthF(self._point_size)
        pen.setCapStyle(Qt.RoundCap)
        painter.setPen(pen)
        if len(screen):
            painter.drawPoints(self.screen_polygon(screen))
        painter.end()

import math
import os

import pytest

from tracking.config import Config
from tracking.landmarks import HandLandmarks


def make_hand(tip_ratio=2.0, spread_ratio=0.8, ratios=None, angles=None,
              hand_length=0.1, wrist=(0.5, 0.8), z=0.0):
    """
    Synthetic 21-point hand pointing up the image (negative y).

    Fingertips sit at ratios[i] * hand_length from the wrist. Index and
    pinky are placed symmetrically about the hand axis so that, when their
    ratios match, their distance is spread_ratio * hand_length.
    """
    ratios = list(ratios or [tip_ratio] * 5)
    half = math.asin(min(1.0, spread_ratio / (ratios[1] + ratios[4])))
    angles = list(angles or [-half - 0.7, -half, 0.0, half / 2, half])

    wx, wy = wrist

    def at(ratio, angle):
        return (wx + ratio * hand_length * math.sin(angle),
                wy - ratio * hand_length * math.cos(angle),
                z)

    points = [None] * 21
    points[HandLandmarks.WRIST] = (wx, wy, z)

    for finger, tip_index in enumerate(HandLandmarks.FINGERTIPS):
        ratio, angle = ratios[finger], angles[finger]
        points[tip_index] = at(ratio, angle)
        for step, joint in enumerate(range(tip_index - 3, tip_index)):
            points[joint] = at(ratio * (0.4 + 0.2 * step), angle)

    # Hand length is measured to the middle MCP
    points[HandLandmarks.MIDDLE_MCP] = at(1.0, 0.0)
    return HandLandmarks(landmarks=points, handedness="Right", confidence=0.9)


@pytest.fixture
def hand_factory():
    return make_hand


@pytest.fixture
def fist_hand():
    """All fingertips at 1.0 hand lengths, index-pinky spread 0.3."""
    return make_hand(tip_ratio=1.0, spread_ratio=0.3)


@pytest.fixture
def open_hand():
    return make_hand(tip_ratio=2.3, spread_ratio=1.2)


@pytest.fixture
def config():
    return Config()


@pytest.fixture(scope="session")
def qt_app():
    """One offscreen QApplication shared by every Qt test."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

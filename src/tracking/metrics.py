"""
Geometric hand metrics extracted from a single landmark set.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import math

from .errors import DegenerateInput
from .landmarks import HandLandmarks


@dataclass(frozen=True)
class RawMetrics:
    """
    Per-frame hand geometry in detector units.

    Attributes:
        avg_fingertip_distance: Mean fingertip-to-wrist distance
        hand_length: Wrist to middle finger MCP
        finger_spread: Index tip to pinky tip
        finger_ratios: Fingertip-to-wrist distance / hand_length, thumb..pinky
        pinch_ratio: Thumb tip to index tip / hand_length
        hand_center: Palm centre (x, y) in detector units
    """
    avg_fingertip_distance: float
    hand_length: float
    finger_spread: float
    finger_ratios: Tuple[float, float, float, float, float] = (0.0, 0.0, 0.0, 0.0, 0.0)
    pinch_ratio: float = 0.0
    hand_center: Optional[Tuple[float, float]] = None


def _point(landmarks: HandLandmarks, index: int, dims: int) -> Tuple[float, ...]:
    raw = landmarks.landmarks[index]
    try:
        point = tuple(float(raw[i]) for i in range(dims))
    except (TypeError, ValueError, IndexError):
        raise DegenerateInput(f"Landmark {index} is malformed, need {dims} numeric coordinates") from None

    if not all(math.isfinite(c) for c in point):
        raise DegenerateInput(f"Landmark {index} is not finite")
    return point


def _distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


def extract_metrics(landmarks: HandLandmarks, use_z: bool = False) -> RawMetrics:
    """
    Compute hand geometry from one landmark set.

    Distances are planar (x, y) unless use_z is set, in which case every
    distance in the computation includes z.

    Raises:
        DegenerateInput: the set does not hold exactly 21 usable points, or
            the hand length is zero.
    """
    if landmarks is None or len(landmarks.landmarks) != HandLandmarks.COUNT:
        count = 0 if landmarks is None else len(landmarks.landmarks)
        raise DegenerateInput(f"Expected {HandLandmarks.COUNT} landmarks, got {count}")

    dims = 3 if use_z else 2
    points = [_point(landmarks, i, dims) for i in range(HandLandmarks.COUNT)]
    wrist = points[HandLandmarks.WRIST]
    middle_mcp = points[HandLandmarks.MIDDLE_MCP]

    hand_length = _distance(wrist, middle_mcp)
    if hand_length == 0.0 or not math.isfinite(hand_length):
        raise DegenerateInput("Zero-length hand")

    tips = [points[i] for i in HandLandmarks.FINGERTIPS]
    tip_distances = [_distance(tip, wrist) for tip in tips]
    avg_distance = sum(tip_distances) / len(tip_distances)

    thumb_tip, index_tip, _, _, pinky_tip = tips
    spread = _distance(index_tip, pinky_tip)

    # Palm centre from the MCP joints, always in the image plane
    mcps = [points[i] for i in (HandLandmarks.INDEX_MCP, HandLandmarks.MIDDLE_MCP,
                                HandLandmarks.RING_MCP, HandLandmarks.PINKY_MCP)]
    cx = sum(p[0] for p in mcps) / 4
    cy = sum(p[1] for p in mcps) / 4

    return RawMetrics(
        avg_fingertip_distance=avg_distance,
        hand_length=hand_length,
        finger_spread=spread,
        finger_ratios=tuple(d / hand_length for d in tip_distances),
        pinch_ratio=_distance(thumb_tip, index_tip) / hand_length,
        hand_center=(cx, cy),
    )

import pytest

from tracking.config import ClassifierConfig
from tracking.control_signal import ControlSignal, Gesture
from tracking.gesture_classifier import GestureClassifier
from tracking.metrics import extract_metrics


@pytest.fixture
def classifier():
    return GestureClassifier(ClassifierConfig())


def active(tension=0.0, expansion=0.0):
    return ControlSignal(tension=tension, expansion=expansion, active=True)


def test_inactive_is_none(classifier):
    assert classifier.classify(ControlSignal.inactive()) == Gesture.NONE


@pytest.mark.parametrize("tension, expansion, expected", [
    (0.6, 0.0, Gesture.FIST),
    (0.6, 0.8, Gesture.FIST),   # fist band wins over open band
    (0.2, 0.4, Gesture.OPEN),
    (0.2, 0.2, Gesture.NONE),
    (0.0, 0.0, Gesture.NONE),
    (0.5, 0.3, Gesture.NONE),   # thresholds are exclusive
])
def test_bands(classifier, tension, expansion, expected):
    assert classifier.classify(active(tension, expansion)) == expected


def test_rest_pose(classifier):
    assert classifier.is_rest_pose(active(0.1, 0.1))
    assert not classifier.is_rest_pose(active(0.1, 0.2))
    assert not classifier.is_rest_pose(ControlSignal())


def test_peace(classifier, hand_factory):
    metrics = extract_metrics(hand_factory(ratios=[1.0, 2.0, 2.0, 1.0, 1.0]))

    assert classifier.classify(active(), metrics) == Gesture.PEACE


def test_point(classifier, hand_factory):
    metrics = extract_metrics(hand_factory(ratios=[1.0, 2.0, 1.0, 1.0, 1.0]))

    assert classifier.classify(active(), metrics) == Gesture.POINT


def test_ok(classifier, hand_factory):
    # Thumb tip on the index tip, other three fingers extended
    hand = hand_factory(
        ratios=[1.6, 1.6, 2.0, 2.0, 2.0],
        angles=[-0.2, -0.2, 0.0, 0.1, 0.2],
    )
    metrics = extract_metrics(hand)

    assert metrics.pinch_ratio == pytest.approx(0.0, abs=1e-9)
    assert classifier.classify(active(), metrics) == Gesture.OK


def test_hand_shapes_take_precedence_over_bands(classifier, hand_factory):
    metrics = extract_metrics(hand_factory(ratios=[1.0, 2.0, 2.0, 1.0, 1.0]))

    assert classifier.classify(active(tension=0.9), metrics) == Gesture.PEACE


def test_fist_and_open_hands_fall_through_to_bands(classifier, fist_hand, open_hand):
    assert classifier.classify(active(tension=0.9), extract_metrics(fist_hand)) == Gesture.FIST
    assert classifier.classify(active(expansion=0.9), extract_metrics(open_hand)) == Gesture.OPEN


def test_thresholds_are_configurable(hand_factory):
    strict = GestureClassifier(ClassifierConfig(extended_threshold=2.5))
    metrics = extract_metrics(hand_factory(ratios=[1.0, 2.0, 2.0, 1.0, 1.0]))

    assert strict.classify(active(), metrics) == Gesture.NONE

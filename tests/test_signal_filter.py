import math

import pytest

from tracking.config import FilterConfig
from tracking.control_signal import ControlSignal, Gesture
from tracking.metrics import RawMetrics
from tracking.signal_filter import SignalFilter, clamp01


def metrics(distance=2.5, spread=0.4, hand_length=1.0):
    """Metrics whose normalized distance / spread are the given ratios."""
    return RawMetrics(
        avg_fingertip_distance=distance * hand_length,
        hand_length=hand_length,
        finger_spread=spread * hand_length,
    )


@pytest.fixture
def signal_filter():
    return SignalFilter(FilterConfig())


def test_raw_values_use_linear_bands(signal_filter):
    assert signal_filter.raw_values(metrics(distance=2.0, spread=0.7)) == pytest.approx((0.5, 0.5))
    assert signal_filter.raw_values(metrics(distance=1.0, spread=0.3)) == (1.0, 0.0)
    assert signal_filter.raw_values(metrics(distance=3.0, spread=1.5)) == (0.0, 1.0)


def test_first_update_is_smoothed(signal_filter):
    signal = signal_filter.update(metrics(distance=1.0, spread=1.0))

    assert signal.active is True
    assert signal.gesture == Gesture.NONE
    assert signal.tension == pytest.approx(0.25)
    assert signal.expansion == pytest.approx(0.25)


def test_repeated_input_converges(signal_filter):
    for _ in range(30):
        signal = signal_filter.update(metrics(distance=1.0, spread=1.0))

    # Dead zone stops the approach within dead_zone / smoothing of the target
    assert 0.92 < signal.tension <= 1.0
    assert 0.92 < signal.expansion <= 1.0


def test_no_hand_resets_without_lag(signal_filter):
    for _ in range(10):
        signal_filter.update(metrics(distance=1.0, spread=1.0))

    signal = signal_filter.reset()

    assert signal == ControlSignal.inactive()
    assert signal.tension == 0.0 and signal.expansion == 0.0 and signal.active is False
    assert signal_filter.last_tension == 0.0
    assert signal_filter.last_expansion == 0.0

    # Next hand starts from zero again
    assert signal_filter.update(metrics(distance=1.0)).tension == pytest.approx(0.25)


def test_dead_zone_holds_value_for_small_changes(signal_filter):
    for _ in range(30):
        settled = signal_filter.update(metrics(distance=1.5))

    # Raw tension 1.0 -> 0.99, well inside the dead zone
    nudged = signal_filter.update(metrics(distance=1.51))

    assert nudged.tension == settled.tension


def test_sub_threshold_step_from_rest_stays_zero(signal_filter):
    # 0.07 * 0.25 = 0.0175 is inside the dead zone
    signal = signal_filter.update(metrics(distance=2.43))

    assert signal.tension == 0.0


def test_floor_snaps_small_values_to_zero():
    signal_filter = SignalFilter(FilterConfig(dead_zone=0.0, floor=0.05))

    # 0.16 * 0.25 = 0.04 passes the dead zone but not the floor
    signal = signal_filter.update(metrics(distance=2.34))

    assert signal.tension == 0.0
    assert signal_filter.last_tension == 0.0


@pytest.mark.parametrize("raw", [
    metrics(hand_length=1e-12),
    RawMetrics(avg_fingertip_distance=1.0, hand_length=0.0, finger_spread=1.0),
    RawMetrics(avg_fingertip_distance=float("nan"), hand_length=1.0, finger_spread=float("nan")),
    RawMetrics(avg_fingertip_distance=float("inf"), hand_length=1.0, finger_spread=float("inf")),
    RawMetrics(avg_fingertip_distance=1e300, hand_length=1e-300, finger_spread=1e300),
    RawMetrics(avg_fingertip_distance=-5.0, hand_length=1.0, finger_spread=-5.0),
])
def test_values_stay_in_unit_range(signal_filter, raw):
    for _ in range(5):
        signal = signal_filter.update(raw)
        assert 0.0 <= signal.tension <= 1.0
        assert 0.0 <= signal.expansion <= 1.0
        assert not math.isnan(signal.tension)
        assert not math.isnan(signal.expansion)


def test_bands_are_configurable():
    signal_filter = SignalFilter(FilterConfig(
        tension_offset=1.0, tension_range=0.5, smoothing=1.0, dead_zone=0.0, floor=0.0
    ))

    assert signal_filter.update(metrics(distance=0.75)).tension == pytest.approx(0.5)


def test_clamp01():
    assert clamp01(-0.5) == 0.0
    assert clamp01(1.5) == 1.0
    assert clamp01(0.3) == 0.3
    assert clamp01(float("nan")) == 0.0
    assert clamp01(float("inf")) == 0.0

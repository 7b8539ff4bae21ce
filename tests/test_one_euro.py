import pytest

from tracking.one_euro_filter import OneEuroFilter


def test_first_sample_passes_through():
    f = OneEuroFilter(min_cutoff=1.0, beta=0.0)

    assert f(0.0, (0.3, 0.7)) == pytest.approx((0.3, 0.7))
    assert f.t_prev == 0.0


def test_one_euro_filter_smoothing():
    # beta=0 means simple low-pass filter with fixed cutoff
    f = OneEuroFilter(min_cutoff=1.0, beta=0.0)
    f(0.0, (0.0,))

    # Step response: Input jumps from 0 to 1 at t=0.01
    (output,) = f(0.01, (1.0,))

    # It should not instantly jump to 1.0
    assert 0 < output < 1.0


def test_one_euro_filter_responsiveness():
    # High beta means more responsive to speed
    f_slow = OneEuroFilter(min_cutoff=0.1, beta=0.0)
    f_fast = OneEuroFilter(min_cutoff=0.1, beta=1.0)
    f_slow(0.0, (0.0,))
    f_fast(0.0, (0.0,))

    # Simulate a fast move
    t = 0.01
    x = 10.0

    (out_slow,) = f_slow(t, (x,))
    (out_fast,) = f_fast(t, (x,))

    # The adaptive one (fast) should be closer to input than the slow one
    assert abs(x - out_fast) < abs(x - out_slow)


def test_non_increasing_time_keeps_previous_value():
    f = OneEuroFilter()
    f(1.0, (0.5, 0.5))

    assert f(1.0, (0.9, 0.9)) == pytest.approx((0.5, 0.5))
    assert f(0.5, (0.9, 0.9)) == pytest.approx((0.5, 0.5))


def test_reset_restarts_from_next_sample():
    f = OneEuroFilter(min_cutoff=0.1)
    f(0.0, (0.0, 0.0))
    f(0.05, (1.0, 1.0))

    f.reset()

    assert f.x_prev is None
    assert f(0.1, (0.8, 0.2)) == pytest.approx((0.8, 0.2))

import pytest

from tracking.control_signal import ControlSignal, Gesture


def test_inactive_is_rest_state():
    signal = ControlSignal.inactive()

    assert signal == ControlSignal()
    assert (signal.tension, signal.expansion, signal.active) == (0.0, 0.0, False)
    assert signal.gesture == Gesture.NONE
    assert signal.hand_offset is None


@pytest.mark.parametrize("fields", [
    {"tension": 0.9},
    {"expansion": 0.4},
    {"gesture": Gesture.FIST},
    {"hand_offset": (0.1, 0.0)},
])
def test_inactive_signal_cannot_carry_values(fields):
    with pytest.raises(ValueError):
        ControlSignal(active=False, **fields)


def test_active_signal_carries_values():
    signal = ControlSignal(tension=0.9, expansion=0.1, active=True,
                           gesture=Gesture.FIST, hand_offset=(0.1, -0.2))

    assert signal.gesture == Gesture.FIST
    assert signal.hand_offset == (0.1, -0.2)

import pytest

from eurosim.streams.switches import NUM_SWITCHES, SwitchesEmulator


def _flags(switches, index):
    return (
        switches.released(index),
        switches.just_pressed(index),
        switches.pressed(index),
    )


def test_idle_switches_report_nothing():
    switches = SwitchesEmulator()
    for _ in range(10):
        switches.debounce()
    for i in range(NUM_SWITCHES):
        assert _flags(switches, i) == (False, False, False)


def test_press_becomes_just_pressed_after_seven_samples():
    switches = SwitchesEmulator()
    switches.set_pin(0, True)
    for _ in range(6):
        switches.debounce()
        assert switches.just_pressed(0) is False
    switches.debounce()
    assert _flags(switches, 0) == (False, True, False)


def test_held_switch_becomes_pressed():
    switches = SwitchesEmulator()
    switches.set_pin(1, True)
    for _ in range(8):
        switches.debounce()
    assert _flags(switches, 1) == (False, False, True)
    for _ in range(20):
        switches.debounce()
    assert switches.pressed(1) is True


def test_release_after_hold_is_reported():
    switches = SwitchesEmulator()
    switches.set_pin(2, True)
    for _ in range(8):
        switches.debounce()
    switches.set_pin(2, False)
    for _ in range(7):
        switches.debounce()
    assert _flags(switches, 2) == (True, False, False)
    switches.debounce()
    assert _flags(switches, 2) == (False, False, False)


def test_switches_are_independent():
    switches = SwitchesEmulator()
    switches.set_pin(0, True)
    for _ in range(8):
        switches.debounce()
    assert switches.pressed(0) is True
    assert switches.pressed(1) is False
    assert switches.pressed(2) is False


@pytest.mark.parametrize("index", [-1, NUM_SWITCHES])
def test_bad_index_raises(index):
    with pytest.raises(IndexError):
        SwitchesEmulator().pressed(index)


def test_bad_index_on_set_pin_raises():
    with pytest.raises(IndexError):
        SwitchesEmulator().set_pin(NUM_SWITCHES, True)
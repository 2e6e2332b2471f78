import pytest

from eurosim.streams.event_queue import ControlType, Event, EventQueue


@pytest.mark.parametrize(
    "control_type, code",
    [
        (ControlType.POT, 0),
        (ControlType.SWITCH_HOLD, 5),
        (ControlType.REFRESH, 0xFF),
    ],
)
def test_control_type_codes_survive_queue(control_type, code):
    queue = EventQueue(8)
    queue.add_event(control_type, 1, 0)
    event = queue.pull_event()
    assert event.control_type == code
    assert event.control_type is control_type


def test_event_round_trip():
    queue = EventQueue(32)
    queue.add_event(ControlType.SWITCH, 2, -17)
    assert queue.available() == 1
    assert queue.pull_event() == Event(ControlType.SWITCH, 2, -17)
    assert queue.available() == 0


def test_events_come_out_in_order():
    queue = EventQueue(32)
    for i in range(5):
        queue.add_event(ControlType.POT, i, i * 10)
    pulled = [queue.pull_event().control_id for _ in range(5)]
    assert pulled == list(range(5))


def test_full_queue_keeps_newest_events():
    queue = EventQueue(4)
    for i in range(10):
        queue.add_event(ControlType.ENCODER, i, 0)
    assert queue.available() == 4
    assert [queue.pull_event().control_id for _ in range(4)] == [6, 7, 8, 9]


def test_flush_empties_queue():
    queue = EventQueue(8)
    queue.add_event(ControlType.POT, 0, 1)
    queue.add_event(ControlType.POT, 1, 2)
    queue.flush()
    assert queue.available() == 0


def test_pull_from_empty_queue_raises():
    with pytest.raises(LookupError):
        EventQueue(8).pull_event()


def test_idle_time_counts_steps_and_resets_on_event():
    queue = EventQueue(8)
    queue.step_time(100)
    queue.step_time(50)
    assert queue.idle_time() == 150
    queue.add_event(ControlType.ENCODER_CLICK, 0, 0)
    assert queue.idle_time() == 0
    queue.step_time(30)
    assert queue.idle_time() == 30


def test_touch_resets_idle_time_without_event():
    queue = EventQueue(8)
    queue.step_time(40)
    queue.touch()
    assert queue.idle_time() == 0
    assert queue.available() == 0


def test_idle_time_survives_clock_wraparound():
    queue = EventQueue(8)
    queue.step_time(2**32 - 3)
    queue.touch()
    queue.step_time(10)
    assert queue.idle_time() == 10


def test_invalid_size_is_rejected():
    with pytest.raises(ValueError):
        EventQueue(0)
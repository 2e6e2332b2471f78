"""Queue of user-interface events with an idle timer."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass

_UINT32_MASK = 0xFFFFFFFF


class ControlType(enum.IntEnum):
    POT = 0
    ENCODER = 1
    ENCODER_CLICK = 2
    ENCODER_LONG_CLICK = 3
    SWITCH = 4
    SWITCH_HOLD = 5
    REFRESH = 0xFF


@dataclass(frozen=True)
class Event:
    control_type: ControlType
    control_id: int
    data: int


class EventQueue:
    """Bounded FIFO of events; when full, the oldest event is dropped.

    Time advances only through :meth:`step_time` and wraps at 32 bits.
    """

    def __init__(self, size: int = 32) -> None:
        if size < 1:
            raise ValueError("queue size must be at least 1")
        self._events: deque[Event] = deque(maxlen=size)
        self._time = 0
        self._last_event_time = 0

    def flush(self) -> None:
        """Drop all pending events."""
        self._events.clear()

    def add_event(self, control_type: ControlType, control_id: int, data: int) -> None:
        """Queue an event and reset the idle timer."""
        self._events.append(Event(ControlType(control_type), control_id, data))
        self.touch()

    def touch(self) -> None:
        """Reset the idle timer without queueing anything."""
        self._last_event_time = self._time

    def available(self) -> int:
        """Number of events waiting to be pulled."""
        return len(self._events)

    def idle_time(self) -> int:
        """Time elapsed since the last event or touch."""
        return (self._time - self._last_event_time) & _UINT32_MASK

    def pull_event(self) -> Event:
        """Remove and return the oldest event."""
        if not self._events:
            raise LookupError("event queue is empty")
        return self._events.popleft()

    def step_time(self, step: int) -> None:
        """Advance the clock."""
        self._time = (self._time + step) & _UINT32_MASK
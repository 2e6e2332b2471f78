"""Debounced push switches."""

from __future__ import annotations

NUM_SWITCHES = 3

_RELEASED = 0x7F
_JUST_PRESSED = 0x80
_PRESSED = 0x00


class SwitchesEmulator:
    """Keeps an 8-sample history per switch to debounce its pin.

    Pins are active-low: a pressed switch reads as 0.
    """

    def __init__(self) -> None:
        self._state = [0xFF] * NUM_SWITCHES
        self._pins = [True] * NUM_SWITCHES

    @staticmethod
    def _check(index: int) -> None:
        if not 0 <= index < NUM_SWITCHES:
            raise IndexError(f"switch index {index} out of range 0..{NUM_SWITCHES - 1}")

    def set_pin(self, index: int, state: bool) -> None:
        """Record whether a switch is being held down."""
        self._check(index)
        self._pins[index] = not state

    def debounce(self) -> None:
        """Shift the current pin level into every switch's history."""
        self._state = [
            ((state << 1) | int(pin)) & 0xFF
            for state, pin in zip(self._state, self._pins)
        ]

    def released(self, index: int) -> bool:
        self._check(index)
        return self._state[index] == _RELEASED

    def just_pressed(self, index: int) -> bool:
        self._check(index)
        return self._state[index] == _JUST_PRESSED

    def pressed(self, index: int) -> bool:
        self._check(index)
        return self._state[index] == _PRESSED
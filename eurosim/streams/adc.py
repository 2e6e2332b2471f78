"""Stand-in for the converter that samples the pots and CV inputs."""

from __future__ import annotations

NUM_POTS = 4
NUM_CVS = 6

_UINT16_MASK = 0xFFFF


def _checked(values: list[int], index: int, kind: str) -> int:
    if not 0 <= index < len(values):
        raise IndexError(f"{kind} index {index} out of range 0..{len(values) - 1}")
    return int(values[index]) & _UINT16_MASK


class AdcEmulator:
    """Holds the latest raw 16-bit readings of the pots and CV inputs.

    ``pots`` and ``cvs`` are written directly by whoever feeds the emulator;
    readings are taken as unsigned 16-bit values.
    """

    def __init__(self) -> None:
        self.pots = [0] * NUM_POTS
        self.cvs = [0] * NUM_CVS

    def pot(self, index: int) -> int:
        """Raw reading of a pot."""
        return _checked(self.pots, index, "pot")

    def cv(self, index: int) -> int:
        """Raw reading of a CV input."""
        return _checked(self.cvs, index, "cv")
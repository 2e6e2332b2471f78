"""Three-channel attenuator/attenuverter mixer."""

from __future__ import annotations

import enum
from typing import Sequence

NUM_CHANNELS = 3
NORMAL_VOLTAGE = 5.0
LIGHT_LAMBDA = 30.0


class ShadesMode(enum.IntEnum):
    ATTENUATOR = 0
    ATTENUVERTER = 1


def _smooth(current: float, target: float, delta_time: float) -> float:
    if target < current:
        return current + (target - current) * LIGHT_LAMBDA * delta_time
    return target


class Shades:
    """Three gain stages whose outputs sum into the next unpatched output.

    ``gains`` hold the knob positions (0..1), ``modes`` the switch positions
    and ``lights`` the (positive, negative) brightness of each channel.
    """

    def __init__(self) -> None:
        self.gains = [0.5] * NUM_CHANNELS
        self.modes = [ShadesMode.ATTENUVERTER] * NUM_CHANNELS
        self.lights = [(0.0, 0.0)] * NUM_CHANNELS

    def process(
        self,
        inputs: Sequence[float | None],
        connected: Sequence[bool],
        sample_time: float,
    ) -> list[float | None]:
        """Run one sample.

        ``inputs`` holds one voltage per channel, ``None`` when unpatched
        (normalled to 5 V); ``connected`` tells which outputs are patched.
        Returns the voltage at each patched output and ``None`` elsewhere.
        """
        if len(inputs) != NUM_CHANNELS or len(connected) != NUM_CHANNELS:
            raise ValueError(f"expected {NUM_CHANNELS} inputs and outputs")

        results: list[float | None] = []
        out = 0.0
        for i, (voltage, patched) in enumerate(zip(inputs, connected)):
            value = NORMAL_VOLTAGE if voltage is None else float(voltage)
            gain = self.gains[i]
            if self.modes[i] == ShadesMode.ATTENUVERTER:
                value *= 2.0 * gain - 1.0
            else:
                value *= gain
            out += value

            pos, neg = self.lights[i]
            self.lights[i] = (
                _smooth(pos, max(0.0, out / 5.0), sample_time),
                _smooth(neg, max(0.0, -out / 5.0), sample_time),
            )
            if patched:
                results.append(out)
                out = 0.0
            else:
                results.append(None)
        return results
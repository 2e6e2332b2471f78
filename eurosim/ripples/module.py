"""Polyphonic front panel of the filter: knobs, CV inputs and 16 voices."""

from __future__ import annotations

import math
from typing import Sequence

from eurosim.ripples.engine import FREQ_KNOB_MAX, FREQ_KNOB_MIN, RipplesEngine, RipplesFrame

MAX_CHANNELS = 16

FREQ_PARAM_MIN = math.log2(FREQ_KNOB_MIN)
FREQ_PARAM_MAX = math.log2(FREQ_KNOB_MAX)
RES_PARAM_DEFAULT = 0.0
FREQ_PARAM_DEFAULT = FREQ_PARAM_MAX
FM_PARAM_DEFAULT = 0.0

Voltages = Sequence[float] | None


def freq_param_to_knob(value: float) -> float:
    """Map the frequency parameter (log2 Hz) onto the 0..1 knob position."""
    return (value - FREQ_PARAM_MIN) / (FREQ_PARAM_MAX - FREQ_PARAM_MIN)


def _poly_voltage(voltages: Voltages, channel: int) -> float:
    if not voltages:
        return 0.0
    if len(voltages) == 1:
        return float(voltages[0])
    return float(voltages[channel]) if channel < len(voltages) else 0.0


def _voltage(voltages: Voltages, channel: int) -> float:
    if not voltages or channel >= len(voltages):
        return 0.0
    return float(voltages[channel])


class RipplesModule:
    """Panel controls and per-channel engines.

    Inputs are given as sequences of channel voltages; ``None`` or an empty
    sequence means the jack is not patched.
    """

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        self.res_param = RES_PARAM_DEFAULT
        self.freq_param = FREQ_PARAM_DEFAULT
        self.fm_param = FM_PARAM_DEFAULT
        self.engines = [RipplesEngine(sample_rate) for _ in range(MAX_CHANNELS)]

    def set_sample_rate(self, sample_rate: float) -> None:
        """Reconfigure every voice for a new sample rate."""
        self.sample_rate = sample_rate
        for engine in self.engines:
            engine.set_sample_rate(sample_rate)

    def reset(self) -> None:
        """Return the knobs to their defaults and reinitialise the voices."""
        self.res_param = RES_PARAM_DEFAULT
        self.freq_param = FREQ_PARAM_DEFAULT
        self.fm_param = FM_PARAM_DEFAULT
        self.set_sample_rate(self.sample_rate)

    def process(
        self,
        audio: Voltages = None,
        res_cv: Voltages = None,
        freq_cv: Voltages = None,
        fm_cv: Voltages = None,
        gain_cv: Voltages = None,
    ) -> list[RipplesFrame]:
        """Run one sample; return one frame with outputs per audio channel."""
        channels = min(max(len(audio) if audio else 0, 1), MAX_CHANNELS)
        freq_knob = freq_param_to_knob(self.freq_param)
        gain_present = bool(gain_cv)

        frames = []
        for c, engine in enumerate(self.engines[:channels]):
            frame = RipplesFrame(
                res_knob=self.res_param,
                freq_knob=freq_knob,
                fm_knob=self.fm_param,
                res_cv=_poly_voltage(res_cv, c),
                freq_cv=_poly_voltage(freq_cv, c),
                fm_cv=_poly_voltage(fm_cv, c),
                input=_voltage(audio, c),
                gain_cv=_poly_voltage(gain_cv, c),
                gain_cv_present=gain_present,
            )
            frames.append(engine.process(frame))
        return frames
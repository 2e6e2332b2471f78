"""Circuit-level model of a 2164/LM13700 four-pole filter with VCA."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

import numpy as np

from eurosim.ripples.aafilter import AAFilter

# Frequency knob
FREQ_KNOB_MIN = 20.0
FREQ_KNOB_MAX = 20000.0
FREQ_KNOB_VOLTAGE = math.log2(FREQ_KNOB_MAX / FREQ_KNOB_MIN)
FREQ_KNOB_DISPLAY_BASE = FREQ_KNOB_MAX / FREQ_KNOB_MIN
FREQ_KNOB_DISPLAY_MULTIPLIER = FREQ_KNOB_MIN

# Frequency CV amplifier
VCA_GAIN_CONSTANT = -33e-3
PLUS_6DB = 20.0 * math.log10(2.0)
FREQ_AMP_GAIN = VCA_GAIN_CONSTANT * PLUS_6DB
FREQ_INPUT_R = 100e3
FREQ_AMP_R = -FREQ_AMP_GAIN * FREQ_INPUT_R
FREQ_AMP_C = 560e-12

# Resonance CV amplifier
RES_INPUT_R = 22e3
RES_KNOB_V = 12.0
RES_KNOB_R = 62e3
RES_AMP_R = 47e3
RES_AMP_C = 560e-12

# Gain CV amplifier
GAIN_INPUT_R = 27e3
GAIN_NORMAL_V = 12.0
GAIN_NORMAL_R = 15e3
GAIN_AMP_R = 47e3
GAIN_AMP_C = 560e-12

# Filter core
FILTER_MAX_CUTOFF = FREQ_KNOB_MAX
FILTER_CELL_R = 33e3
FILTER_CELL_RC = 1.0 / (2.0 * math.pi * FILTER_MAX_CUTOFF)
FILTER_CELL_C = FILTER_CELL_RC / FILTER_CELL_R
FILTER_INPUT_R = 100e3
FILTER_INPUT_GAIN = FILTER_CELL_R / FILTER_INPUT_R
FILTER_CELL_SELF_MODULATION = 0.01

# Filter core feedback path
FEEDBACK_RT = 22e3
FEEDBACK_RB = 1e3
FEEDBACK_R = FEEDBACK_RT + FEEDBACK_RB
FEEDBACK_GAIN = FEEDBACK_RB / FEEDBACK_R

# Filter core feedforward path
FEEDFORWARD_RT = 300e3
FEEDFORWARD_RB = 1e3
FEEDFORWARD_R = FEEDFORWARD_RT + FEEDFORWARD_RB
FEEDFORWARD_GAIN = FEEDFORWARD_RB / FEEDFORWARD_R
FEEDFORWARD_C = 220e-9

# Filter output amplifiers
LP2_GAIN = -100e3 / 39e3
LP4_GAIN = -100e3 / 33e3
BP2_GAIN = -100e3 / 39e3

# VCA
VCA_INPUT_C = 4.7e-6
VCA_INPUT_RT = 100e3
VCA_INPUT_RB = 1e3
VCA_INPUT_R = VCA_INPUT_RT + VCA_INPUT_RB
VCA_INPUT_GAIN = VCA_INPUT_RB / VCA_INPUT_R
VCA_OUTPUT_R = 100e3

# Saturation voltage at the V-to-I converter's BJT collector
V_TO_I_COLLECTOR_V_SAT = -10.0

# Opamp saturation voltage
OPAMP_SAT_V = 10.6

# OTA thermal voltage and Pade clamp
_TEMPERATURE_C = 40.0
_K_OVER_Q = 8.617333262145e-5
_KELVIN = 273.15
_VT = _K_OVER_Q * (_TEMPERATURE_C + _KELVIN)
_ZLIM = 2.0 * math.sqrt(3.0)

T = TypeVar("T")


def v_to_i_converter(
    rfb: float,
    vc: float,
    rc: float,
    vp: float = 0.0,
    rp: float = 1e12,
) -> float:
    """Model of the nonlinear CV voltage-to-current converters.

    ``rfb`` is the amplifier feedback resistor, ``vc``/``rc`` the CV voltage
    and its input resistor, ``vp``/``rp`` the knob voltage and its resistor.
    """
    vnom = -(vc * rfb / rc + vp * rfb / rp)
    vout = max(vnom, V_TO_I_COLLECTOR_V_SAT)

    nrc = rp * rfb
    nrp = rc * rfb
    nrfb = rc * rp
    vneg = (vc * nrc + vp * nrp + vout * nrfb) / (nrc + nrp + nrfb)

    iout = (vneg - vout) / rfb
    return max(iout, 0.0)


def ota_vca(vp: Any, vn: Any, i_abc: Any) -> Any:
    """Output current of an LM13700 OTA, neglecting linearizing diodes.

    Uses a Pade approximant of ``i_abc * tanh((vp - vn) / (2 Vt))``.
    Works on floats and numpy arrays alike.
    """
    vi = vp - vn
    z = np.clip(vi / (2.0 * _VT), -_ZLIM, _ZLIM)
    z2 = z * z
    q = 12.0 + z2
    p = 12.0 * z * q / (36.0 * z2 + q * q)
    return i_abc * p


def step_rk2(dt: float, y: T, f: Callable[[T], T]) -> T:
    """Advance ``y`` by ``dt`` using the second-order Runge-Kutta method."""
    k1 = f(y)
    k2 = f(y + k1 * dt / 2.0)
    return y + dt * k2


class RCFilter:
    """One-pole RC filter (bilinear transform) with lowpass and highpass taps.

    ``cutoff`` is a frequency normalised to the sample rate; it may be a
    numpy array to run several filters in parallel.
    """

    def __init__(self, cutoff: Any = None) -> None:
        self._c: Any = 0.0
        self._x: Any = 0.0
        self._y: Any = 0.0
        if cutoff is not None:
            self.set_cutoff_freq(cutoff)

    def set_cutoff_freq(self, cutoff: Any) -> None:
        """Set the normalised cutoff frequency."""
        self._c = 2.0 / (2.0 * math.pi * np.asarray(cutoff, dtype=float))
        if np.ndim(self._c) == 0:
            self._c = float(self._c)

    def process(self, value: Any) -> None:
        """Feed one sample into the filter."""
        c = self._c
        y = (value + self._x - self._y * (1.0 - c)) / (1.0 + c)
        self._x = value
        self._y = y

    def lowpass(self) -> Any:
        return self._y

    def highpass(self) -> Any:
        return self._x - self._y


@dataclass
class RipplesFrame:
    """Control values and inputs for one sample, plus the computed outputs."""

    # Parameters
    res_knob: float = 0.0  # 0 to 1 linear
    freq_knob: float = 0.0  # 0 to 1 linear
    fm_knob: float = 0.0  # -1 to 1 linear

    # Inputs
    res_cv: float = 0.0
    freq_cv: float = 0.0
    fm_cv: float = 0.0
    input: float = 0.0
    gain_cv: float = 0.0
    gain_cv_present: bool = False

    # Outputs
    bp2: float = 0.0
    lp2: float = 0.0
    lp4: float = 0.0
    lp4vca: float = 0.0


class RipplesEngine:
    """One voice of the filter, oversampled with anti-aliasing filters."""

    def __init__(self, sample_rate: float = 1.0) -> None:
        self.rng = np.random.default_rng()
        self._sample_time = 1.0
        self._cell_voltage = np.zeros(4)
        self._aa_filter = AAFilter(sample_rate)
        self._rc_filters = RCFilter()
        self._vca_hpf = RCFilter()
        self.set_sample_rate(sample_rate)

    @property
    def oversampling_factor(self) -> int:
        return self._aa_filter.oversampling_factor()

    def set_sample_rate(self, sample_rate: float) -> None:
        """Reconfigure the engine for a new sample rate."""
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self._sample_time = 1.0 / sample_rate
        self._cell_voltage = np.zeros(4)

        self._aa_filter.init(sample_rate)
        oversample_rate = sample_rate * self._aa_filter.oversampling_factor()

        freq_cut = 1.0 / (2.0 * math.pi * FREQ_AMP_R * FREQ_AMP_C)
        res_cut = 1.0 / (2.0 * math.pi * RES_AMP_R * RES_AMP_C)
        gain_cut = 1.0 / (2.0 * math.pi * GAIN_AMP_R * GAIN_AMP_C)
        ff_cut = 1.0 / (2.0 * math.pi * FEEDFORWARD_R * FEEDFORWARD_C)

        cutoffs = np.array([ff_cut, freq_cut, res_cut, gain_cut])
        self._rc_filters.set_cutoff_freq(cutoffs / oversample_rate)

        vca_cut = 1.0 / (2.0 * math.pi * VCA_INPUT_R * VCA_INPUT_C)
        self._vca_hpf.set_cutoff_freq(vca_cut / oversample_rate)

    def process(self, frame: RipplesFrame) -> RipplesFrame:
        """Run one sample, storing the outputs in ``frame`` and returning it."""
        v_oct = (frame.freq_knob - 1.0) * FREQ_KNOB_VOLTAGE
        v_oct += frame.freq_cv
        v_oct += frame.fm_cv * frame.fm_knob
        v_oct = min(v_oct, 0.0)

        i_reso = v_to_i_converter(
            RES_AMP_R, frame.res_cv, RES_INPUT_R, frame.res_knob * RES_KNOB_V, RES_KNOB_R
        )

        gain_cv = frame.gain_cv
        gain_input_r = GAIN_INPUT_R
        if not frame.gain_cv_present:
            gain_cv = GAIN_NORMAL_V
            gain_input_r += GAIN_NORMAL_R
        i_vca = v_to_i_converter(GAIN_AMP_R, gain_cv, gain_input_r)

        factor = self._aa_filter.oversampling_factor()
        timestep = self._sample_time / factor
        # A little noise bootstraps self-oscillation.
        audio_in = frame.input + 1e-6 * (self.rng.random() - 0.5)
        packed = np.array([audio_in, v_oct, i_reso, i_vca]) * factor
        silence = np.zeros(4)
        outputs = np.zeros(4)

        for i in range(factor):
            upsampled = self._aa_filter.process_up(packed if i == 0 else silence)
            outputs = self._core_process(upsampled, timestep)
            outputs = self._aa_filter.process_down(outputs)

        frame.bp2 = float(outputs[0])
        frame.lp2 = float(outputs[1])
        frame.lp4 = float(outputs[2])
        frame.lp4vca = float(outputs[3])
        return frame

    def _core_process(self, inputs: np.ndarray, timestep: float) -> np.ndarray:
        """High-rate core: (input, v_oct, i_reso, i_vca) -> (bp2, lp2, lp4, lp4vca)."""
        self._rc_filters.process(inputs)

        control = self._rc_filters.lowpass()
        v_oct = float(control[1])
        i_reso = float(control[2])
        i_vca = float(control[3])

        feedforward = float(self._rc_filters.highpass()[0])

        # Each integrator cell obeys dvout/dt = -A/(RC) * (vin + vout).
        rad_per_s = -(2.0 ** v_oct) / FILTER_CELL_RC
        drive = float(inputs[0]) * FILTER_INPUT_GAIN

        def derivative(vout: np.ndarray) -> np.ndarray:
            vin = np.roll(vout, 1)
            vp = feedforward * FEEDFORWARD_GAIN
            vn = vout[3] * FEEDBACK_GAIN
            res = FILTER_CELL_R * ota_vca(vp, vn, i_reso)
            vin[0] = drive + res
            vsum = vin + vout
            dvout = rad_per_s * vsum
            # Self-modulation produces some even-order harmonics.
            return dvout * (1.0 + vsum * FILTER_CELL_SELF_MODULATION)

        cell = step_rk2(timestep, self._cell_voltage, derivative)
        self._cell_voltage = np.clip(cell, -OPAMP_SAT_V, OPAMP_SAT_V)

        lp1 = float(self._cell_voltage[0])
        lp2 = float(self._cell_voltage[1])
        lp4 = float(self._cell_voltage[3])
        bp2 = (lp1 + lp2) * BP2_GAIN
        self._vca_hpf.process(lp4)
        lp4vca = float(self._vca_hpf.highpass())
        lp4vca = -VCA_OUTPUT_R * float(ota_vca(0.0, lp4vca * VCA_INPUT_GAIN, i_vca))
        lp2 *= LP2_GAIN
        lp4 *= LP4_GAIN
        return np.array([bp2, lp2, lp4, lp4vca])
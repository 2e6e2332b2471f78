"""Elliptic anti-aliasing filters for oversampling at common sample rates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eurosim.sos import SOSCoefficients, SOSFilter

MAX_NUM_SECTIONS = 7


def _sec(b0: float, b1: float, b2: float, a1: float, a2: float) -> SOSCoefficients:
    return SOSCoefficients((b0, b1, b2), (a1, a2))


@dataclass(frozen=True)
class Cascade:
    """A filter design for one base sample rate."""

    sample_rate: float
    oversampling_factor: int
    order: int
    sections: tuple[SOSCoefficients, ...]


_LOW_RATE_SECTIONS = (
    _sec(3.42306291e-03, 6.53522273e-03, 3.42306291e-03, -1.13209947e00, 3.65774415e-01),
    _sec(1.00000000e00, 1.42136933e00, 1.00000000e00, -9.55595652e-01, 5.55195466e-01),
    _sec(1.00000000e00, 1.05842861e00, 1.00000000e00, -8.35474882e-01, 8.34840828e-01),
)

# Ordered from the highest base rate to the lowest.
CASCADES: tuple[Cascade, ...] = (
    Cascade(768000, 1, 2, (
        _sec(1.83197956e-02, 3.66063440e-02, 1.83197956e-02, -1.60702602e00, 6.80271956e-01),
    )),
    Cascade(705600, 1, 2, (
        _sec(2.13438638e-02, 4.26550556e-02, 2.13438638e-02, -1.57253460e00, 6.57877382e-01),
    )),
    Cascade(384000, 1, 2, (
        _sec(6.09620331e-02, 1.21896769e-01, 6.09620331e-02, -1.22760212e00, 4.71422957e-01),
    )),
    Cascade(352800, 1, 2, (
        _sec(6.99874107e-02, 1.39948456e-01, 6.99874107e-02, -1.16347041e00, 4.43393682e-01),
    )),
    Cascade(192000, 1, 2, (
        _sec(1.74603587e-01, 3.49188678e-01, 1.74603587e-01, -5.65216145e-01, 2.63611998e-01),
    )),
    Cascade(176400, 1, 2, (
        _sec(1.95938020e-01, 3.91858763e-01, 1.95938020e-01, -4.62313019e-01, 2.46047822e-01),
    )),
    Cascade(96000, 2, 8, (
        _sec(1.61637850e-04, 2.48564833e-04, 1.61637850e-04, -1.55379599e00, 6.19242969e-01),
        _sec(1.00000000e00, -3.56106191e-03, 1.00000000e00, -1.52397985e00, 7.01779035e-01),
        _sec(1.00000000e00, -7.04269454e-01, 1.00000000e00, -1.49925562e00, 8.20191196e-01),
        _sec(1.00000000e00, -9.36222412e-01, 1.00000000e00, -1.51854586e00, 9.39911675e-01),
    )),
    Cascade(88200, 2, 8, (
        _sec(2.14361684e-04, 3.44618768e-04, 2.14361684e-04, -1.51452462e00, 5.91486912e-01),
        _sec(1.00000000e00, 1.79381294e-01, 1.00000000e00, -1.47183116e00, 6.80568376e-01),
        _sec(1.00000000e00, -5.38705333e-01, 1.00000000e00, -1.43146550e00, 8.07687680e-01),
        _sec(1.00000000e00, -7.87002288e-01, 1.00000000e00, -1.44140131e00, 9.35689662e-01),
    )),
    Cascade(48000, 3, 12, (
        _sec(1.96007199e-04, 3.15285921e-04, 1.96007199e-04, -1.49750952e00, 5.79487424e-01),
        _sec(1.00000000e00, 1.64502383e-01, 1.00000000e00, -1.43900370e00, 6.63196513e-01),
        _sec(1.00000000e00, -5.92180251e-01, 1.00000000e00, -1.36241892e00, 7.75058824e-01),
        _sec(1.00000000e00, -9.07488127e-01, 1.00000000e00, -1.30223398e00, 8.69165582e-01),
        _sec(1.00000000e00, -1.04177534e00, 1.00000000e00, -1.26951947e00, 9.34679234e-01),
        _sec(1.00000000e00, -1.09276235e00, 1.00000000e00, -1.26454687e00, 9.80322986e-01),
    )),
    Cascade(44100, 3, 14, (
        _sec(2.33467524e-04, 3.85146244e-04, 2.33467524e-04, -1.46779940e00, 5.59300587e-01),
        _sec(1.00000000e00, 2.84344987e-01, 1.00000000e00, -1.39743012e00, 6.47280334e-01),
        _sec(1.00000000e00, -4.81735913e-01, 1.00000000e00, -1.30466696e00, 7.63828718e-01),
        _sec(1.00000000e00, -8.14458422e-01, 1.00000000e00, -1.22921466e00, 8.60153843e-01),
        _sec(1.00000000e00, -9.63424410e-01, 1.00000000e00, -1.18164620e00, 9.24279595e-01),
        _sec(1.00000000e00, -1.03102512e00, 1.00000000e00, -1.15782377e00, 9.63657309e-01),
        _sec(1.00000000e00, -1.05757483e00, 1.00000000e00, -1.15253824e00, 9.89272846e-01),
    )),
    Cascade(24000, 5, 8, (
        _sec(9.93374792e-04, 1.81504524e-03, 9.93374792e-04, -1.28123502e00, 4.43830055e-01),
        _sec(1.00000000e00, 9.69736619e-01, 1.00000000e00, -1.14056361e00, 5.73274737e-01),
        _sec(1.00000000e00, 3.23593812e-01, 1.00000000e00, -9.84074266e-01, 7.48267989e-01),
        _sec(1.00000000e00, 4.69137219e-02, 1.00000000e00, -9.17508757e-01, 9.16260523e-01),
    )),
    Cascade(22050, 6, 8, (
        _sec(6.47358611e-04, 1.15520581e-03, 6.47358611e-04, -1.35050917e00, 4.84676642e-01),
        _sec(1.00000000e00, 7.82770646e-01, 1.00000000e00, -1.24212580e00, 6.01760550e-01),
        _sec(1.00000000e00, 9.46030879e-02, 1.00000000e00, -1.12297856e00, 7.63193697e-01),
        _sec(1.00000000e00, -1.84341946e-01, 1.00000000e00, -1.08165394e00, 9.20980215e-01),
    )),
    Cascade(12000, 10, 6, _LOW_RATE_SECTIONS),
    Cascade(11025, 11, 6, (
        _sec(3.26702718e-03, 6.22983576e-03, 3.26702718e-03, -1.14130758e00, 3.70354990e-01),
        _sec(1.00000000e00, 1.40863044e00, 1.00000000e00, -9.69538649e-01, 5.57917370e-01),
        _sec(1.00000000e00, 1.03994151e00, 1.00000000e00, -8.54328717e-01, 8.35728285e-01),
    )),
    Cascade(8000, 15, 6, _LOW_RATE_SECTIONS),
)


def select_cascade(sample_rate: float) -> Cascade:
    """Return the design for the highest base rate not above ``sample_rate``.

    Rates below the lowest supported one (or not comparable, such as NaN)
    fall back to the lowest design.
    """
    for cascade in CASCADES:
        if cascade.sample_rate <= sample_rate:
            return cascade
    return CASCADES[-1]


class AAFilter:
    """Matched up- and down-sampling anti-aliasing filters."""

    def __init__(self, sample_rate: float) -> None:
        self._up = SOSFilter()
        self._down = SOSFilter()
        self._factor = 1
        self.init(sample_rate)

    def init(self, sample_rate: float) -> None:
        """Choose the filter design and oversampling factor for a sample rate."""
        cascade = select_cascade(sample_rate)
        count = len(cascade.sections)
        self._up.init(count, cascade.sections)
        self._down.init(count, cascade.sections)
        self._factor = cascade.oversampling_factor

    def process_up(self, value: Any) -> Any:
        """Filter one sample on the upsampling side."""
        return self._up.process(value)

    def process_down(self, value: Any) -> Any:
        """Filter one sample on the downsampling side."""
        return self._down.process(value)

    def oversampling_factor(self) -> int:
        """The oversampling factor chosen for the current sample rate."""
        return self._factor
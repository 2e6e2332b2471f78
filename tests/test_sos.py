import numpy as np
import pytest

from eurosim.sos import SOSCoefficients, SOSFilter


def _impulse(filt, length):
    return [filt.process(1.0 if i == 0 else 0.0) for i in range(length)]


def test_fir_section_impulse_response_is_b_coefficients():
    section = SOSCoefficients((0.25, -0.5, 0.125), (0.0, 0.0))
    filt = SOSFilter(1, [section])
    assert _impulse(filt, 5) == [0.25, -0.5, 0.125, 0.0, 0.0]


def test_feedback_section_decays_geometrically():
    section = SOSCoefficients((1.0, 0.0, 0.0), (-0.5, 0.0))
    filt = SOSFilter(1, [section])
    out = _impulse(filt, 6)
    for prev, cur in zip(out, out[1:]):
        assert cur == pytest.approx(prev * 0.5)
    assert out[0] == 1.0


def test_zero_sections_pass_input_through():
    filt = SOSFilter(0)
    assert [filt.process(v) for v in (1.5, -2.0, 3.25)] == [1.5, -2.0, 3.25]


def test_cascade_equals_chained_single_sections():
    s1 = SOSCoefficients((0.3, 0.2, 0.1), (-0.4, 0.2))
    s2 = SOSCoefficients((1.0, -0.7, 0.5), (0.1, -0.3))
    cascade = SOSFilter(2, [s1, s2])
    first = SOSFilter(1, [s1])
    second = SOSFilter(1, [s2])
    signal = [1.0, -0.5, 0.25, 2.0, 0.0, -1.0, 0.75, 0.0, 0.0, 0.3]
    for v in signal:
        assert cascade.process(v) == pytest.approx(second.process(first.process(v)))


def test_reset_restores_initial_response():
    section = SOSCoefficients((0.5, 0.4, 0.3), (-0.2, 0.1))
    filt = SOSFilter(1, [section])
    first = _impulse(filt, 8)
    filt.process(4.0)
    filt.reset()
    assert _impulse(filt, 8) == first


def test_numpy_vectors_match_scalar_processing():
    section = SOSCoefficients((0.2, 0.3, 0.2), (-0.6, 0.25))
    vec_filter = SOSFilter(1, [section])
    lanes = [SOSFilter(1, [section]) for _ in range(4)]
    rng = np.random.default_rng(3)
    for _ in range(20):
        sample = rng.normal(size=4)
        out = vec_filter.process(sample)
        expected = [lane.process(float(v)) for lane, v in zip(lanes, sample)]
        assert np.allclose(out, expected)


def test_init_replaces_sections_and_clears_state():
    a = SOSCoefficients((1.0, 0.0, 0.0), (-0.9, 0.0))
    b = SOSCoefficients((0.5, 0.0, 0.0), (0.0, 0.0))
    filt = SOSFilter(1, [a])
    filt.process(1.0)
    filt.init(1, [b])
    assert filt.sections == (b,)
    assert _impulse(filt, 3) == [0.5, 0.0, 0.0]


def test_extra_sections_are_ignored():
    a = SOSCoefficients((0.5, 0.0, 0.0), (0.0, 0.0))
    b = SOSCoefficients((2.0, 0.0, 0.0), (0.0, 0.0))
    filt = SOSFilter(1, [a, b])
    assert filt.num_sections == 1
    assert filt.sections == (a,)


def test_too_few_sections_raise():
    a = SOSCoefficients((0.5, 0.0, 0.0), (0.0, 0.0))
    with pytest.raises(ValueError):
        SOSFilter(2, [a])


def test_negative_section_count_raises():
    with pytest.raises(ValueError):
        SOSFilter(-1)


def test_coefficient_lengths_are_checked():
    with pytest.raises(ValueError):
        SOSCoefficients((1.0, 2.0), (0.0, 0.0))
    with pytest.raises(ValueError):
        SOSCoefficients((1.0, 2.0, 3.0), (0.0,))
import pytest

from eurosim.streams.audio_cv_meter import AudioCvMeter


def test_starts_as_audio_with_zero_peak():
    meter = AudioCvMeter()
    assert meter.cv() is False
    assert meter.peak() == 0


def test_steady_signal_is_detected_as_cv():
    meter = AudioCvMeter()
    for _ in range(5000):
        meter.process(1000, 250)
    assert meter.cv() is True


def test_oscillating_signal_returns_to_audio():
    meter = AudioCvMeter()
    for _ in range(5000):
        meter.process(1000, 250)
    assert meter.cv() is True
    for i in range(200):
        meter.process(1000 if i % 2 else -1000, 250)
    assert meter.cv() is False


def test_fast_audio_never_becomes_cv():
    meter = AudioCvMeter()
    for i in range(10000):
        meter.process(2000 if i % 2 else -2000, 250)
        assert meter.cv() is False


def test_peak_rises_monotonically_and_stays_bounded():
    meter = AudioCvMeter()
    previous = meter.peak()
    for _ in range(500):
        meter.process(1000, 250)
        current = meter.peak()
        assert previous <= current <= 1000
        previous = current
    assert meter.peak() > 500


def test_peak_uses_absolute_value():
    positive = AudioCvMeter()
    negative = AudioCvMeter()
    for _ in range(100):
        positive.process(3000, 250)
        negative.process(-3000, 250)
    assert positive.peak() == negative.peak()


def test_peak_decays_after_signal_stops():
    meter = AudioCvMeter()
    for _ in range(1000):
        meter.process(8000, 250)
    high = meter.peak()
    for _ in range(1000):
        meter.process(0, 250)
    assert meter.peak() < high


def test_faster_timestep_tracks_more_slowly_per_sample():
    slow = AudioCvMeter()
    fast = AudioCvMeter()
    for _ in range(20):
        slow.process(10000, 250)
        fast.process(10000, 125)
    assert fast.peak() < slow.peak()


@pytest.mark.parametrize("timestep", [0, -1])
def test_non_positive_timestep_is_rejected(timestep):
    with pytest.raises(ValueError):
        AudioCvMeter().process(100, timestep)
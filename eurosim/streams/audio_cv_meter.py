"""Tell audio from CV on an input and track its peak level."""

from __future__ import annotations

# The hardware refreshes its LEDs every 250 us; other rates are scaled so
# that the meter behaves the same.
HARDWARE_TIMESTEP_US = 250


class AudioCvMeter:
    """Classifies a signal as audio or CV from its zero-crossing rate."""

    def __init__(self) -> None:
        self._peak = 0
        self._zero_crossing_interval = 0
        self._average_zero_crossing_interval = 0
        self._previous_sample = 0
        self._cv = False

    def process(self, sample: int, timestep_us: int) -> None:
        """Feed one sample taken ``timestep_us`` microseconds after the last."""
        if timestep_us <= 0:
            raise ValueError("timestep must be positive")

        max_interval = (4096 * HARDWARE_TIMESTEP_US) // timestep_us
        crossed = (sample >> 1) * self._previous_sample < 0
        if crossed or self._zero_crossing_interval >= max_interval:
            error = self._zero_crossing_interval - self._average_zero_crossing_interval
            self._average_zero_crossing_interval += error >> 3
            self._zero_crossing_interval = 0
        else:
            self._zero_crossing_interval += 1

        average = self._average_zero_crossing_interval
        if self._cv and average < (200 * HARDWARE_TIMESTEP_US) // timestep_us:
            self._cv = False
        elif not self._cv and average > (400 * HARDWARE_TIMESTEP_US) // timestep_us:
            self._cv = True

        self._previous_sample = sample

        error = abs(sample) - self._peak
        # 10 ms attack, 250 ms release at 1 kHz.
        coefficient = 809 if error > 0 else 33
        coefficient = (coefficient * timestep_us) // HARDWARE_TIMESTEP_US
        self._peak += (error * coefficient) >> 15

    def cv(self) -> bool:
        """True while the signal looks like a slow control voltage."""
        return self._cv

    def peak(self) -> int:
        """Smoothed absolute peak level."""
        return self._peak
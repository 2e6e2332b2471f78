"""Two banks of four bicolour LEDs used as level meters."""

from __future__ import annotations

NUM_LEDS = 8
_FULL = 255


class LedsEmulator:
    """Red and green 8-bit intensities for each LED."""

    def __init__(self) -> None:
        self._red = [0] * NUM_LEDS
        self._green = [0] * NUM_LEDS

    @staticmethod
    def _check(led: int) -> None:
        if not 0 <= led < NUM_LEDS:
            raise IndexError(f"led index {led} out of range 0..{NUM_LEDS - 1}")

    def set(self, led: int, red: int, green: int) -> None:
        """Set both colours of one LED (values are taken modulo 256)."""
        self._check(led)
        self._red[led] = red & 0xFF
        self._green[led] = green & 0xFF

    def intensity_red(self, led: int) -> float:
        self._check(led)
        return self._red[led] / 255.0

    def intensity_green(self, led: int) -> float:
        self._check(led)
        return self._green[led] / 255.0

    def clear(self) -> None:
        """Turn every LED off."""
        self._red = [0] * NUM_LEDS
        self._green = [0] * NUM_LEDS

    def paint_bar(self, start: int, direction: int, db: int) -> None:
        """Draw a four-segment level bar from ``start`` stepping by ``direction``."""
        if db < 0:
            return
        db = min(db, 32767) << 1
        seg = [start + k * direction for k in range(4)]

        if db >= 49152:
            self.set(seg[0], (db - 49152) >> 6, 0)
            self.set(seg[1], _FULL, _FULL)
            self.set(seg[2], 0, _FULL)
            self.set(seg[3], 0, _FULL)
        elif db >= 32768:
            level = (db - 32768) >> 6
            self.set(seg[1], level, level)
            self.set(seg[2], 0, _FULL)
            self.set(seg[3], 0, _FULL)
        elif db >= 16384:
            self.set(seg[2], 0, (db - 16384) >> 6)
            self.set(seg[3], 0, _FULL)
        else:
            self.set(seg[3], 0, db >> 6)

    def paint_positive_bar(self, channel: int, db: int) -> None:
        self.paint_bar(channel * 4, +1, db)

    def paint_negative_bar(self, channel: int, db: int) -> None:
        self.paint_bar(channel * 4 + 3, -1, -db)

    def paint_cv(self, channel: int, cv: int) -> None:
        """Show a bipolar CV: green for positive, red for negative."""
        bank = channel * 4
        flip = cv < 0
        cv = abs(cv)
        if cv < 1024:
            cv = 0
        cv = min(cv, 32767)

        for i in range(4):
            residual = min(max(cv - (3 - i) * 8192, 0), 8191)
            if flip:
                self.set(bank + i, residual >> 5, 0)
            else:
                self.set(bank + i, 0, residual >> 5)
"""Cascaded second-order sections (biquad) IIR filter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class SOSCoefficients:
    """Coefficients of one second-order section.

    ``b`` holds the three feed-forward taps and ``a`` the two feedback taps
    (the leading ``a0`` is implicitly 1).
    """

    b: tuple[float, float, float]
    a: tuple[float, float]

    def __post_init__(self) -> None:
        b = tuple(float(v) for v in self.b)
        a = tuple(float(v) for v in self.a)
        if len(b) != 3:
            raise ValueError(f"a section needs 3 b coefficients, got {len(b)}")
        if len(a) != 2:
            raise ValueError(f"a section needs 2 a coefficients, got {len(a)}")
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "a", a)


_ZERO_SECTION = SOSCoefficients((0.0, 0.0, 0.0), (0.0, 0.0))


class SOSFilter:
    """A cascade of second-order sections.

    The filter works on any value supporting arithmetic with floats, so both
    plain floats and numpy arrays (processed element-wise) may be fed in.
    """

    def __init__(
        self,
        num_sections: int = 0,
        sections: Iterable[SOSCoefficients] | None = None,
    ) -> None:
        self._num_sections = 0
        self._sections: list[SOSCoefficients] = []
        self._state: list[list[Any]] = []
        self.init(num_sections, sections)

    @property
    def num_sections(self) -> int:
        return self._num_sections

    @property
    def sections(self) -> tuple[SOSCoefficients, ...]:
        return tuple(self._sections)

    def init(
        self,
        num_sections: int,
        sections: Iterable[SOSCoefficients] | None = None,
    ) -> None:
        """Set the number of sections, clear the state and load coefficients."""
        if num_sections < 0:
            raise ValueError("number of sections must not be negative")
        self._num_sections = num_sections
        self._sections = [_ZERO_SECTION] * num_sections
        self.reset()
        if sections is not None:
            self.set_coefficients(sections)

    def reset(self) -> None:
        """Clear the filter history."""
        self._state = [[0.0, 0.0, 0.0] for _ in range(self._num_sections + 1)]

    def set_coefficients(self, sections: Iterable[SOSCoefficients]) -> None:
        """Load the coefficients of the first ``num_sections`` sections."""
        loaded = list(sections)
        if len(loaded) < self._num_sections:
            raise ValueError(
                f"expected at least {self._num_sections} sections, got {len(loaded)}"
            )
        self._sections = loaded[: self._num_sections]

    def process(self, value: Any) -> Any:
        """Filter one sample and return the output sample."""
        for coeffs, x, y in zip(self._sections, self._state, self._state[1:]):
            x[2] = x[1]
            x[1] = x[0]
            x[0] = value
            b0, b1, b2 = coeffs.b
            a1, a2 = coeffs.a
            value = b0 * x[0] + b1 * x[1] + b2 * x[2] - a1 * y[0] - a2 * y[1]

        last = self._state[-1]
        last[2] = last[1]
        last[1] = last[0]
        last[0] = value
        return value
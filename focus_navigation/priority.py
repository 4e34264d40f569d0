"""Reading-order priority keys derived from screen positions.

Priorities interleave the bits of X and Y (a Morton / Z-order code) with Y in
the odd, higher-order slot of each bit pair, so ascending keys walk the screen
top-to-bottom at coarse granularity and left-to-right within a band.
"""

from __future__ import annotations

from typing import Optional, Tuple

Point = Tuple[float, float]


def _clamp_coordinate(value: float, bits: int) -> int:
    limit = (1 << bits) - 1
    return max(0, min(limit, int(round(value))))


def interleave_bits(x: int, y: int, bits: int = 16) -> int:
    """Return the Morton code of ``x`` and ``y`` using ``bits`` bits of each."""
    code = 0
    for i in range(bits):
        code |= ((x >> i) & 1) << (2 * i)
        code |= ((y >> i) & 1) << (2 * i + 1)
    return code


class PriorityCalculator:
    """Turns ``(x, y)`` positions into integer navigation priorities.

    ``screen_height`` is only needed for hosts whose Y axis points up; Y is then
    flipped to ``screen_height - y`` so that the top of the screen sorts first.
    """

    def __init__(self, *, bits: int = 16, screen_height: Optional[float] = None) -> None:
        if bits < 1:
            raise ValueError("bits must be positive")
        self.bits = bits
        self.screen_height = screen_height

    def priority(self, position: Point) -> int:
        x, y = position
        if self.screen_height is not None:
            y = self.screen_height - y
        return interleave_bits(
            _clamp_coordinate(x, self.bits),
            _clamp_coordinate(y, self.bits),
            self.bits,
        )

    __call__ = priority

"""
Coordinate scales for placing buckets and cells in chart space.

BandScale maps ordinal keys (periods, activity types) to evenly spaced bands.
LinearScale maps numeric values (counts, trends) onto a pixel range and
supplies axis ticks.
"""

import math
from typing import Sequence

MAX_TICKS = 6


class BandScale:
    """Ordinal scale that divides a range into uniform bands."""

    def __init__(
        self,
        domain: Sequence[str],
        range_max: float,
        padding: float = 0.1,
        range_min: float = 0.0,
        align: float = 0.5,
    ):
        """
        Initialize the band scale.

        Args:
            domain: Ordered keys; duplicates keep their first position
            range_max: End of the output range in pixels
            padding: Fraction of each step left empty, used for both the
                gaps between bands and the outer edges
            range_min: Start of the output range in pixels
            align: Where the outer padding goes (0 = left, 0.5 = centered)
        """
        self.domain = list(dict.fromkeys(domain))
        self.range = (range_min, range_max)
        self.padding = padding
        self._index = {key: i for i, key in enumerate(self.domain)}

        n = len(self.domain)
        extent = range_max - range_min
        self.step = extent / max(1, n - padding + padding * 2)
        self.start = range_min + (extent - self.step * (n - padding)) * align
        self.bandwidth = self.step * (1 - padding)

    def __call__(self, key: str) -> float | None:
        return self.scale(key)

    def scale(self, key: str) -> float | None:
        """Start position of the band for a key, or None for unknown keys."""
        index = self._index.get(key)
        if index is None:
            return None
        return self.start + self.step * index

    def center(self, key: str) -> float | None:
        position = self.scale(key)
        if position is None:
            return None
        return position + self.bandwidth / 2


class LinearScale:
    """Continuous scale mapping a numeric domain onto a numeric range."""

    def __init__(self, domain: Sequence[float], range: Sequence[float]):
        """
        Initialize the linear scale.

        Args:
            domain: (min, max) input values
            range: (start, end) output positions; pass (height, 0) to plot
                larger values higher on screen
        """
        self.domain = (domain[0], domain[1])
        self.range = (range[0], range[1])

    def __call__(self, value: float) -> float:
        return self.scale(value)

    def scale(self, value: float) -> float:
        """Map a domain value to its position."""
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            # Degenerate domain maps everything to the middle of the range
            return r0 + (r1 - r0) * 0.5
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, position: float) -> float:
        """Map a position back to a domain value."""
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return d0 + (d1 - d0) * 0.5
        return d0 + (position - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, max_count: int = MAX_TICKS) -> list[float]:
        """
        Evenly spaced, round tick values within the domain.

        Steps are 1, 2, or 5 times a power of ten, picked as the smallest that
        keeps the number of ticks at or below max_count.

        Args:
            max_count: Upper bound on the number of ticks (at least 1)

        Returns:
            Ascending tick values; ints when the step is a whole number
        """
        return nice_ticks(self.domain[0], self.domain[1], max_count)


def nice_ticks(lo: float, hi: float, max_count: int = MAX_TICKS) -> list[float]:
    """Round tick values spanning [lo, hi], at most max_count of them."""
    lo, hi = min(lo, hi), max(lo, hi)
    max_count = max(1, max_count)
    if lo == hi:
        return [lo]

    magnitude = 10 ** math.floor(math.log10((hi - lo) / max_count))
    for multiplier in (1, 2, 5, 10):
        step = magnitude * multiplier
        first = math.ceil(lo / step - 1e-9)
        last = math.floor(hi / step + 1e-9)
        if last - first + 1 <= max_count:
            break

    if step >= 1 and float(step).is_integer():
        step = int(step)
        return [i * step for i in range(first, last + 1)]

    decimals = max(0, -math.floor(math.log10(step)))
    return [round(i * step, decimals) for i in range(first, last + 1)]

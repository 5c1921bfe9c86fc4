"""
Calculate period-over-period trends for aggregated buckets.
"""

import math
from dataclasses import replace

from event_pulse.models import TREND_DOWN, TREND_STABLE, TREND_UP, Bucket


def calculate_trend(current_total: int, previous_total: int) -> int:
    """
    Percentage change from the previous period to the current one.

    The previous total is clamped to at least 1 so an empty previous period
    yields +100% per event instead of a division error.

    Args:
        current_total: Events in the current period
        previous_total: Events in the previous period

    Returns:
        Change in percent, rounded half up
    """
    raw = (current_total - previous_total) / max(previous_total, 1) * 100
    return math.floor(raw + 0.5)


def trend_direction(trend_percent: int) -> str:
    """Classify a trend as up, down, or stable."""
    if trend_percent > 0:
        return TREND_UP
    elif trend_percent < 0:
        return TREND_DOWN
    return TREND_STABLE


def with_trend(buckets: list[Bucket]) -> list[Bucket]:
    """
    Populate trend_percent and trend_direction on each bucket.

    The first bucket has no predecessor and is always 0% / stable.

    Args:
        buckets: Chronologically ordered buckets from aggregate()

    Returns:
        New list of buckets; the input is left unchanged
    """
    result = []
    for i, bucket in enumerate(buckets):
        if i == 0:
            trend = 0
        else:
            trend = calculate_trend(bucket.total, buckets[i - 1].total)
        result.append(
            replace(bucket, trend_percent=trend, trend_direction=trend_direction(trend))
        )
    return result


def max_abs_trend(buckets: list[Bucket]) -> int:
    """Largest trend magnitude in the sequence, 0 when empty."""
    return max((abs(bucket.trend_percent) for bucket in buckets), default=0)

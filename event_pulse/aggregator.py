"""
Aggregate activity events into per-period buckets.

Builds the ordered bucket sequence behind the stacked bar chart: one bucket per
period with a total and a count for each status.
"""

import logging
from typing import Iterable

from event_pulse.models import Bucket, Event, Granularity, empty_status_counts
from event_pulse.period_binner import (
    DEFAULT_WEEK_START,
    assign_period,
    period_keys,
    period_label,
    to_granularity,
)

logger = logging.getLogger(__name__)


def valid_events(events: Iterable[Event]) -> list[Event]:
    """
    Drop events that cannot be assigned to a period.

    Events missing a date, activity type, or status are skipped rather than
    failing the whole pass.
    """
    kept = []
    skipped = 0
    for event in events:
        if event is None or not event.is_valid:
            skipped += 1
            continue
        kept.append(event)

    if skipped:
        logger.debug("Skipped %d malformed events", skipped)
    return kept


def aggregate(
    events: Iterable[Event],
    granularity: Granularity | str,
    start_weekday: int = DEFAULT_WEEK_START,
    fill_gaps: bool = False,
) -> list[Bucket]:
    """
    Fold events into chronologically ordered buckets.

    Args:
        events: Activity events (malformed ones are skipped)
        granularity: daily, weekly, or monthly
        start_weekday: First day of the week for weekly buckets (Monday=0)
        fill_gaps: Include empty calendar months for monthly buckets

    Returns:
        List of Bucket with trend fields left at their defaults; empty when
        there are no usable events
    """
    granularity = to_granularity(granularity)
    events = valid_events(events)
    if not events:
        return []

    keys = period_keys(
        (event.date for event in events),
        granularity,
        start_weekday=start_weekday,
        fill_gaps=fill_gaps,
    )

    # key -> status counts
    tallies: dict[str, dict] = {key: empty_status_counts() for key in keys}
    for event in events:
        key, _ = assign_period(event.date, granularity, start_weekday)
        tallies[key][event.status] += 1

    buckets = []
    for key in sorted(tallies):
        counts = tallies[key]
        buckets.append(
            Bucket(
                key=key,
                label=period_label(key, granularity),
                total=sum(counts.values()),
                counts_by_status=counts,
            )
        )

    logger.info(
        "Aggregated %d events into %d %s buckets",
        len(events),
        len(buckets),
        granularity.value,
    )
    return buckets


def bucket_totals(buckets: Iterable[Bucket]) -> int:
    """Sum of totals across buckets."""
    return sum(bucket.total for bucket in buckets)

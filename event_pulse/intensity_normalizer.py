"""
Build heatmap cells with normalized intensity and dominant status.

Each cell covers one (activity type, period) pair. Intensity is the cell's
count relative to the busiest comparable cell:

    - daily and monthly: the busiest period for the same activity type
    - weekly: the busiest (activity type, week) across all activity types

The weekly scope differs from the other granularities on purpose so that the
heatmap matches the existing dashboard's shading.
"""

from typing import Iterable

from event_pulse.aggregator import valid_events
from event_pulse.models import (
    STATUS_PRIORITY,
    Bucket,
    Cell,
    Event,
    Granularity,
    Status,
)
from event_pulse.period_binner import DEFAULT_WEEK_START, assign_period, to_granularity


def activity_types_of(events: Iterable[Event]) -> list[str]:
    """Distinct activity types in the order they first appear."""
    seen: dict[str, None] = {}
    for event in events:
        if event is not None and event.activity_type:
            seen.setdefault(event.activity_type, None)
    return list(seen)


def dominant_status(events: Iterable[Event]) -> Status | None:
    """
    Pick the status that represents a group of events.

    Returns:
        The first status in STATUS_PRIORITY present in the events, or None
        when there are no events
    """
    present = {event.status for event in events}
    for status in STATUS_PRIORITY:
        if status in present:
            return status
    return None


def _partition(
    events: list[Event], granularity: Granularity, start_weekday: int
) -> dict[tuple[str, str], list[Event]]:
    """Group events by (activity type, period key), keeping input order."""
    groups: dict[tuple[str, str], list[Event]] = {}
    for event in events:
        key, _ = assign_period(event.date, granularity, start_weekday)
        groups.setdefault((event.activity_type, key), []).append(event)
    return groups


def cells_for(
    activity_types: list[str],
    buckets: list[Bucket],
    events: Iterable[Event],
    granularity: Granularity | str,
    start_weekday: int = DEFAULT_WEEK_START,
) -> list[Cell]:
    """
    Build one cell per (activity type, bucket) pair, including empty cells.

    Args:
        activity_types: Heatmap rows, in display order
        buckets: Heatmap columns from aggregate()
        events: The same events the buckets were built from
        granularity: Granularity the buckets were built with
        start_weekday: First day of the week for weekly buckets (Monday=0)

    Returns:
        Cells ordered by activity type, then by bucket
    """
    granularity = to_granularity(granularity)
    groups = _partition(valid_events(events), granularity, start_weekday)
    periods = [bucket.key for bucket in buckets]

    def count(activity_type: str, period: str) -> int:
        return len(groups.get((activity_type, period), ()))

    if granularity == Granularity.WEEKLY:
        global_max = max(
            (count(t, p) for t in activity_types for p in periods), default=0
        )
        denominators = {t: max(global_max, 1) for t in activity_types}
    else:
        denominators = {
            t: max(max((count(t, p) for p in periods), default=0), 1)
            for t in activity_types
        }

    cells = []
    for activity_type in activity_types:
        for bucket in buckets:
            cell_events = groups.get((activity_type, bucket.key), [])
            cell_count = len(cell_events)
            cells.append(
                Cell(
                    activity_type=activity_type,
                    period=bucket.key,
                    label=bucket.label,
                    count=cell_count,
                    dominant_status=dominant_status(cell_events),
                    intensity=cell_count / denominators[activity_type],
                    events=tuple(cell_events),
                )
            )
    return cells


def find_cell(cells: Iterable[Cell], activity_type: str, period: str) -> Cell | None:
    """Look up the cell for an (activity type, period) pair."""
    for cell in cells:
        if cell.activity_type == activity_type and cell.period == period:
            return cell
    return None

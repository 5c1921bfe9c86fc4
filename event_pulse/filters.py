"""
Pre-filters applied to events before aggregation.

Filters narrow the input; they never post-filter buckets or cells.
"""

from typing import Iterable

from event_pulse.event_parser import parse_status
from event_pulse.models import Event, Status

# Stat card names as shown on the dashboard -> status they select
STAT_CARD_STATUSES = {
    "total": None,
    "success": Status.SUCCESS,
    "warning": Status.WARNING,
    "failed": Status.FAIL,
    "fail": Status.FAIL,
}


def _status_set(statuses: Iterable[Status | str] | None) -> set[Status]:
    if not statuses:
        return set()
    parsed = set()
    for value in statuses:
        status = parse_status(value)
        if status is None:
            raise ValueError(f"Unknown status '{value}'")
        parsed.add(status)
    return parsed


def _card_status(stat_card: str | None) -> Status | None:
    if not stat_card:
        return None
    if stat_card not in STAT_CARD_STATUSES:
        raise ValueError(f"Unknown stat card '{stat_card}'")
    return STAT_CARD_STATUSES[stat_card]


def apply_filters(
    events: Iterable[Event],
    activity_types: Iterable[str] | None = None,
    statuses: Iterable[Status | str] | None = None,
    stat_card: str | None = None,
) -> list[Event]:
    """
    Keep only events matching the active filters.

    An empty or missing filter set means "no filter" for that dimension.

    Args:
        events: Events to filter
        activity_types: Activity types to keep
        statuses: Statuses to keep
        stat_card: Selected stat card (total, success, warning, failed)

    Returns:
        Matching events in input order

    Raises:
        ValueError: If a status or stat_card is not a known name
    """
    type_set = set(activity_types or ())
    status_set = _status_set(statuses)

    card_status = _card_status(stat_card)

    if not type_set and not status_set and card_status is None:
        return list(events)

    result = []
    for event in events:
        if type_set and event.activity_type not in type_set:
            continue
        if status_set and event.status not in status_set:
            continue
        if card_status is not None and event.status != card_status:
            continue
        result.append(event)
    return result


def search_activity_types(activity_types: Iterable[str], term: str | None) -> list[str]:
    """Case-insensitive substring search over activity type names."""
    if not term:
        return list(activity_types)
    needle = term.lower()
    return [t for t in activity_types if needle in t.lower()]


def filter_signature(
    activity_types: Iterable[str] | None = None,
    statuses: Iterable[Status | str] | None = None,
    stat_card: str | None = None,
) -> tuple:
    """
    Hashable, order-independent key describing a filter selection.

    Raises:
        ValueError: If a status or stat_card is not a known name
    """
    card_status = _card_status(stat_card)
    return (
        tuple(sorted(set(activity_types or ()))),
        tuple(sorted(s.value for s in _status_set(statuses))),
        card_status.value if card_status else None,
    )

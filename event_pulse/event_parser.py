"""
Parse activity events from raw dataset records.
"""

import logging
from datetime import datetime

from event_pulse.models import Event, Status

logger = logging.getLogger(__name__)


def parse_date(value) -> datetime | None:
    """
    Parse an event date.

    Accepts YYYY-MM-DD, full ISO datetimes, and a trailing 'Z' for UTC.

    Returns:
        The parsed datetime, or None if the value is missing or invalid
    """
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_status(value) -> Status | None:
    """Parse a status string, or None if it is not success/warning/fail."""
    if isinstance(value, Status):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Status(value.strip().lower())
    except ValueError:
        return None


def parse_event(raw: dict) -> Event | None:
    """
    Parse a single dataset record.

    Args:
        raw: Dict with date, activityType, status, user, and device keys

    Returns:
        An Event, or None if the record is missing a usable date, activity
        type, or status
    """
    if not isinstance(raw, dict):
        return None

    date = parse_date(raw.get("date"))
    activity_type = raw.get("activityType") or raw.get("activity_type")
    status = parse_status(raw.get("status"))

    if date is None or not activity_type or status is None:
        return None

    return Event(
        date=date,
        activity_type=str(activity_type),
        status=status,
        user=str(raw.get("user") or ""),
        device=str(raw.get("device") or ""),
    )


def parse_events(raw_events: list[dict]) -> list[Event]:
    """
    Parse dataset records into events, skipping malformed ones.

    Args:
        raw_events: List of dataset record dicts

    Returns:
        List of Event in input order
    """
    events = []
    for raw in raw_events:
        event = parse_event(raw)
        if event is None:
            logger.debug("Skipping malformed event record: %r", raw)
            continue
        events.append(event)

    if len(events) != len(raw_events):
        logger.info(
            "Parsed %d of %d event records", len(events), len(raw_events)
        )
    return events

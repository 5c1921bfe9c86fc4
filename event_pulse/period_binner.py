"""
Assign event dates to daily, weekly, or monthly periods.

Period keys are ISO-style strings (YYYY-MM-DD or YYYY-MM) so that sorting the
keys as strings gives chronological order.
"""

from datetime import date, datetime, timedelta
from typing import Iterable

from event_pulse.models import Granularity

# Python weekday() numbering: Monday=0 ... Sunday=6
SUNDAY = 6
DEFAULT_WEEK_START = SUNDAY


def to_granularity(value: Granularity | str) -> Granularity:
    """
    Coerce a string to a Granularity.

    Raises:
        ValueError: If the value is not daily, weekly, or monthly
    """
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).lower())
    except ValueError:
        valid = ", ".join(g.value for g in Granularity)
        raise ValueError(f"Unsupported granularity '{value}'. Expected one of: {valid}")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(day: date | datetime, start_weekday: int = DEFAULT_WEEK_START) -> date:
    """Return the first day of the week containing the given day."""
    day = _as_date(day)
    offset = (day.weekday() - start_weekday) % 7
    return day - timedelta(days=offset)


def assign_period(
    when: date | datetime,
    granularity: Granularity | str,
    start_weekday: int = DEFAULT_WEEK_START,
) -> tuple[str, str]:
    """
    Assign a date to its period.

    Args:
        when: Event date or datetime
        granularity: daily, weekly, or monthly
        start_weekday: First day of the week for weekly periods (Monday=0)

    Returns:
        Tuple of (key, label), e.g. ("2024-01-07", "Jan 07") for a week
        or ("2024-01", "Jan 2024") for a month
    """
    granularity = to_granularity(granularity)
    day = _as_date(when)

    if granularity == Granularity.DAILY:
        return day.isoformat(), day.strftime("%b %d")

    if granularity == Granularity.WEEKLY:
        start = week_start(day, start_weekday)
        return start.isoformat(), start.strftime("%b %d")

    first = day.replace(day=1)
    return first.strftime("%Y-%m"), first.strftime("%b %Y")


def period_label(key: str, granularity: Granularity | str) -> str:
    """Build the human-readable label for an existing period key."""
    granularity = to_granularity(granularity)
    if granularity == Granularity.MONTHLY:
        return datetime.strptime(key, "%Y-%m").strftime("%b %Y")
    return datetime.strptime(key, "%Y-%m-%d").strftime("%b %d")


def _next_month(day: date) -> date:
    if day.month == 12:
        return day.replace(year=day.year + 1, month=1, day=1)
    return day.replace(month=day.month + 1, day=1)


def period_keys(
    dates: Iterable[date | datetime],
    granularity: Granularity | str,
    start_weekday: int = DEFAULT_WEEK_START,
    fill_gaps: bool = False,
) -> list[str]:
    """
    Build the canonical, chronologically ordered period sequence for a dataset.

    Daily and weekly sequences always cover every period between the first
    and last observed date. Monthly sequences only include months that hold
    at least one date unless fill_gaps is set.

    Args:
        dates: Observed event dates
        granularity: daily, weekly, or monthly
        start_weekday: First day of the week for weekly periods (Monday=0)
        fill_gaps: Emit every calendar month in range for monthly sequences

    Returns:
        List of period keys; empty when no dates are given
    """
    granularity = to_granularity(granularity)
    days = sorted({_as_date(d) for d in dates})
    if not days:
        return []

    first, last = days[0], days[-1]

    if granularity == Granularity.DAILY:
        span = (last - first).days
        return [(first + timedelta(days=i)).isoformat() for i in range(span + 1)]

    if granularity == Granularity.WEEKLY:
        keys = []
        current = week_start(first, start_weekday)
        while current <= last:
            keys.append(current.isoformat())
            current += timedelta(weeks=1)
        return keys

    if not fill_gaps:
        return sorted({d.strftime("%Y-%m") for d in days})

    keys = []
    current = first.replace(day=1)
    while current <= last:
        keys.append(current.strftime("%Y-%m"))
        current = _next_month(current)
    return keys

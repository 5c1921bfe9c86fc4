"""
Data model for event-pulse.

Events are the raw input; Buckets and Cells are derived, render-ready summaries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Status(str, Enum):
    """Outcome of a single activity event."""

    SUCCESS = "success"
    WARNING = "warning"
    FAIL = "fail"


class Granularity(str, Enum):
    """Time unit used to bin events."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# Checked in order: a single failure anywhere in a bin flags the whole bin.
STATUS_PRIORITY = [Status.FAIL, Status.WARNING, Status.SUCCESS]

TREND_UP = "up"
TREND_DOWN = "down"
TREND_STABLE = "stable"


def empty_status_counts() -> dict[Status, int]:
    """Zero-filled counts for every status."""
    return {status: 0 for status in Status}


@dataclass(frozen=True)
class Event:
    """A single timestamped activity event."""

    date: datetime | None
    activity_type: str | None
    status: Status | None
    user: str = ""
    device: str = ""

    @property
    def is_valid(self) -> bool:
        """True when the event can be assigned to a period."""
        return (
            self.date is not None
            and bool(self.activity_type)
            and self.status is not None
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat() if self.date else None,
            "activityType": self.activity_type,
            "status": self.status.value if self.status else None,
            "user": self.user,
            "device": self.device,
        }


@dataclass(frozen=True)
class Bucket:
    """Aggregated summary of all events within one period."""

    key: str
    label: str
    total: int = 0
    counts_by_status: dict[Status, int] = field(default_factory=empty_status_counts)
    trend_percent: int = 0
    trend_direction: str = TREND_STABLE

    def to_dict(self) -> dict:
        return {
            "period": self.key,
            "periodLabel": self.label,
            "total": self.total,
            "success": self.counts_by_status[Status.SUCCESS],
            "warning": self.counts_by_status[Status.WARNING],
            "fail": self.counts_by_status[Status.FAIL],
            "trend": self.trend_percent,
            "trendDirection": self.trend_direction,
        }


@dataclass(frozen=True)
class Cell:
    """One heatmap cell: a bucket narrowed to a single activity type."""

    activity_type: str
    period: str
    label: str
    count: int = 0
    dominant_status: Status | None = None
    intensity: float = 0.0
    events: tuple[Event, ...] = ()

    def to_dict(self, include_events: bool = False) -> dict:
        data = {
            "activityType": self.activity_type,
            "period": self.period,
            "periodLabel": self.label,
            "count": self.count,
            "status": self.dominant_status.value if self.dominant_status else None,
            "intensity": self.intensity,
        }
        if include_events:
            data["events"] = [event.to_dict() for event in self.events]
        return data

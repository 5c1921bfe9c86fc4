"""
event-pulse: activity event heatmap and trend dashboard

Console entry point.
"""

import sys

from event_pulse.aggregator import aggregate
from event_pulse.cli import display_buckets, display_heatmap, display_stats
from event_pulse.config import (
    DATA_PATH,
    DATA_URL,
    DEFAULT_GRANULARITY,
    configure_logging,
    validate_config,
)
from event_pulse.event_source import EventSourceClient, EventSourceError, load_events
from event_pulse.intensity_normalizer import activity_types_of, cells_for
from event_pulse.models import Event
from event_pulse.period_binner import to_granularity
from event_pulse.stats_calculator import calculate_stats
from event_pulse.trend_calculator import with_trend


def load_configured_events() -> list[Event]:
    """
    Load events from the configured file, falling back to the URL.

    Raises:
        EventSourceError: If the source cannot be read
    """
    if DATA_PATH:
        return load_events(DATA_PATH)
    return EventSourceClient(DATA_URL).fetch()


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    print("event-pulse - Activity trends at a glance")
    print("-" * 50)

    configure_logging()

    try:
        validate_config()
        granularity = to_granularity(argv[0] if argv else DEFAULT_GRANULARITY)
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    try:
        events = load_configured_events()
    except EventSourceError as e:
        print(f"\nError: {e}")
        return 1

    if not events:
        print("No events found.")
        return 0

    print(f"\nLoaded {len(events)} events ({granularity.value} view)\n")

    display_stats(calculate_stats(events))

    buckets = aggregate(events, granularity)
    display_buckets(with_trend(buckets))

    cells = cells_for(activity_types_of(events), buckets, events, granularity)
    display_heatmap(cells)

    return 0


if __name__ == "__main__":
    exit(main())

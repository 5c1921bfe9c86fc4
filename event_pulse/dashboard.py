"""
Render-ready dashboard views.

Combines filtering, aggregation, trends, intensity, and scales into the data
the heatmap and bar chart renderers consume. Dashboard memoizes views per
(events version, granularity, view, size, filter selection) so interactive
filter changes do not rescan the full event list every time.
"""

import copy
import logging
import math

from event_pulse.aggregator import aggregate, valid_events
from event_pulse.filters import apply_filters, filter_signature, search_activity_types
from event_pulse.intensity_normalizer import activity_types_of, cells_for, find_cell
from event_pulse.models import Cell, Event, Granularity, Status
from event_pulse.period_binner import DEFAULT_WEEK_START, to_granularity
from event_pulse.scale_mapper import BandScale, LinearScale
from event_pulse.stats_calculator import calculate_stats
from event_pulse.trend_calculator import max_abs_trend, with_trend

logger = logging.getLogger(__name__)

BAR_MARGIN = {"top": 40, "right": 60, "bottom": 80, "left": 80}
HEATMAP_MARGIN = {"top": 80, "right": 40, "bottom": 60, "left": 220}
BAR_PADDING = 0.2
HEATMAP_PADDING = 0.1
MAX_X_LABELS = 8

# Stacking order from the top of each bar down
SEGMENT_ORDER = [Status.FAIL, Status.WARNING, Status.SUCCESS]


def _inner_size(width: float, height: float, margin: dict) -> tuple[float, float]:
    x_max = max(width - margin["left"] - margin["right"], 0)
    y_max = max(height - margin["top"] - margin["bottom"], 0)
    return x_max, y_max


def build_bar_view(
    events: list[Event],
    granularity: Granularity | str,
    width: int = 800,
    height: int = 400,
    start_weekday: int = DEFAULT_WEEK_START,
) -> dict:
    """
    Build the stacked bar chart view.

    Args:
        events: Filtered events
        granularity: daily, weekly, or monthly
        width: Chart width in pixels, margins included
        height: Chart height in pixels, margins included
        start_weekday: First day of the week for weekly buckets (Monday=0)

    Returns:
        Dictionary with buckets (trend populated), bars (geometry), y_ticks,
        and the count and trend axis domains
    """
    granularity = to_granularity(granularity)
    buckets = with_trend(aggregate(events, granularity, start_weekday=start_weekday))
    x_max, y_max = _inner_size(width, height, BAR_MARGIN)

    x_scale = BandScale([b.key for b in buckets], x_max, padding=BAR_PADDING)
    max_total = max((b.total for b in buckets), default=0)
    y_scale = LinearScale([0, max(max_total, 1)], [y_max, 0])
    max_trend = max_abs_trend(buckets)
    trend_scale = LinearScale([-max_trend, max_trend], [y_max, 0])

    label_every = math.ceil(len(buckets) / MAX_X_LABELS) if buckets else 1

    bars = []
    for i, bucket in enumerate(buckets):
        top = y_scale(bucket.total)
        bar_height = y_max - top

        segments = []
        if bucket.total > 0:
            y = top
            for status in SEGMENT_ORDER:
                value = bucket.counts_by_status[status]
                segment_height = value / bucket.total * bar_height
                if value > 0:
                    segments.append({
                        "status": status.value,
                        "value": value,
                        "y": y,
                        "height": segment_height,
                    })
                y += segment_height

        bars.append({
            "period": bucket.key,
            "x": x_scale(bucket.key),
            "width": x_scale.bandwidth,
            "y": top,
            "height": bar_height,
            "segments": segments,
            "trend_y": trend_scale(bucket.trend_percent),
            "show_label": i % label_every == 0,
        })

    return {
        "granularity": granularity.value,
        "width": width,
        "height": height,
        "margin": BAR_MARGIN,
        "buckets": [b.to_dict() for b in buckets],
        "bars": bars,
        "y_ticks": y_scale.ticks(),
        "count_domain": list(y_scale.domain),
        "trend_domain": list(trend_scale.domain),
    }


def build_heatmap_view(
    events: list[Event],
    granularity: Granularity | str,
    width: int = 800,
    height: int = 500,
    start_weekday: int = DEFAULT_WEEK_START,
) -> dict:
    """
    Build the activity heatmap view.

    Args:
        events: Filtered events
        granularity: daily, weekly, or monthly
        width: Chart width in pixels, margins included
        height: Chart height in pixels, margins included
        start_weekday: First day of the week for weekly buckets (Monday=0)

    Returns:
        Dictionary with activity_types (rows), periods (columns) and cells,
        each cell carrying its rectangle
    """
    granularity = to_granularity(granularity)
    events = valid_events(events)
    buckets = aggregate(events, granularity, start_weekday=start_weekday)
    activity_types = activity_types_of(events)
    cells = cells_for(activity_types, buckets, events, granularity, start_weekday)

    x_max, y_max = _inner_size(width, height, HEATMAP_MARGIN)
    x_scale = BandScale([b.key for b in buckets], x_max, padding=HEATMAP_PADDING)
    y_scale = BandScale(activity_types, y_max, padding=HEATMAP_PADDING)

    cell_data = []
    for cell in cells:
        data = cell.to_dict()
        data.update({
            "x": x_scale(cell.period),
            "y": y_scale(cell.activity_type),
            "width": x_scale.bandwidth,
            "height": y_scale.bandwidth,
        })
        cell_data.append(data)

    return {
        "granularity": granularity.value,
        "width": width,
        "height": height,
        "margin": HEATMAP_MARGIN,
        "activity_types": activity_types,
        "periods": [{"period": b.key, "periodLabel": b.label} for b in buckets],
        "cells": cell_data,
    }


class Dashboard:
    """Holds the loaded events and serves memoized, filtered views."""

    MAX_CACHE_ENTRIES = 64

    def __init__(self, events: list[Event] | None = None, start_weekday: int = DEFAULT_WEEK_START):
        """
        Initialize the dashboard.

        Args:
            events: Loaded events
            start_weekday: First day of the week for weekly buckets (Monday=0)
        """
        self.events = list(events or [])
        self.start_weekday = start_weekday
        self.version = 0
        self._cache: dict[tuple, object] = {}

    def replace_events(self, events: list[Event]) -> None:
        """Swap in a new event collection and invalidate cached views."""
        self.events = list(events)
        self.version += 1
        self._cache.clear()
        logger.info("Replaced events (%d), dashboard version %d", len(self.events), self.version)

    def _memo(self, key: tuple, compute):
        """Cached value for key, computing it on a miss. Callers get a copy."""
        key = (self.version,) + key
        if key in self._cache:
            return copy.deepcopy(self._cache[key])

        value = compute()
        if len(self._cache) >= self.MAX_CACHE_ENTRIES:
            # Drop the oldest entry
            evicted = next(iter(self._cache))
            self._cache.pop(evicted)
            logger.debug("Evicted cached view %s", evicted)
        self._cache[key] = value
        return copy.deepcopy(value)

    def filtered(self, activity_types=None, statuses=None, stat_card=None) -> list[Event]:
        """Events matching the filter selection."""
        signature = filter_signature(activity_types, statuses, stat_card)
        return self._memo(
            ("events", signature),
            lambda: apply_filters(self.events, activity_types, statuses, stat_card),
        )

    def bar_view(
        self,
        granularity: Granularity | str,
        width: int = 800,
        height: int = 400,
        **filters,
    ) -> dict:
        granularity = to_granularity(granularity)
        key = ("bar", granularity, width, height, filter_signature(**filters))
        return self._memo(
            key,
            lambda: build_bar_view(
                self.filtered(**filters), granularity, width, height, self.start_weekday
            ),
        )

    def heatmap_view(
        self,
        granularity: Granularity | str,
        width: int = 800,
        height: int = 500,
        **filters,
    ) -> dict:
        granularity = to_granularity(granularity)
        key = ("heatmap", granularity, width, height, filter_signature(**filters))
        return self._memo(
            key,
            lambda: build_heatmap_view(
                self.filtered(**filters), granularity, width, height, self.start_weekday
            ),
        )

    def cells(self, granularity: Granularity | str, **filters) -> list[Cell]:
        """Heatmap cells for the filter selection, addressable by (type, period)."""
        granularity = to_granularity(granularity)

        def compute():
            events = valid_events(self.filtered(**filters))
            buckets = aggregate(events, granularity, start_weekday=self.start_weekday)
            return cells_for(
                activity_types_of(events), buckets, events, granularity, self.start_weekday
            )

        return self._memo(("cells", granularity, filter_signature(**filters)), compute)

    def cell(
        self, activity_type: str, period: str, granularity: Granularity | str, **filters
    ) -> Cell | None:
        """The cell a user selected, or None if it does not exist."""
        return find_cell(self.cells(granularity, **filters), activity_type, period)

    def stats(self, **filters) -> dict:
        return calculate_stats(self.filtered(**filters))

    def activity_types(self, search: str | None = None) -> list[str]:
        """All activity types in the loaded data, optionally searched."""
        return search_activity_types(activity_types_of(self.events), search)

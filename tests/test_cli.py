"""
Tests for CLI display functions and the console entry point.
"""

import io
from contextlib import redirect_stdout
from datetime import datetime
from unittest.mock import patch

from event_pulse.cli import (
    display_buckets,
    display_heatmap,
    display_stats,
    format_bucket,
    format_trend,
)
from event_pulse.event_source import EventSourceError
from event_pulse.main import main
from event_pulse.models import Bucket, Cell, Event, Status


def _capture(func, *args) -> str:
    output = io.StringIO()
    with redirect_stdout(output):
        func(*args)
    return output.getvalue()


def _bucket(total: int, trend: int, direction: str) -> Bucket:
    return Bucket(
        key="2024-01-07",
        label="Jan 07",
        total=total,
        counts_by_status={Status.SUCCESS: total, Status.WARNING: 0, Status.FAIL: 0},
        trend_percent=trend,
        trend_direction=direction,
    )


class TestFormatTrend:
    """Tests for trend formatting."""

    def test_up(self):
        assert format_trend(_bucket(3, 50, "up")) == "📈 +50%"

    def test_down(self):
        assert format_trend(_bucket(1, -25, "down")) == "📉 -25%"

    def test_stable(self):
        assert format_trend(_bucket(1, 0, "stable")) == "➡️ 0%"


class TestFormatBucket:
    """Tests for bucket row formatting."""

    def test_contains_label_counts_and_trend(self):
        row = format_bucket(_bucket(4, 100, "up"))

        assert "Jan 07" in row
        assert "4" in row
        assert "+100%" in row


class TestDisplayBuckets:
    """Tests for the bucket table."""

    def test_empty(self):
        assert "No events to display." in _capture(display_buckets, [])

    def test_table(self):
        result = _capture(display_buckets, [_bucket(2, 0, "stable"), _bucket(4, 100, "up")])

        assert "Activity Trends" in result
        assert "PERIOD" in result
        assert result.count("Jan 07") == 2


class TestDisplayStats:
    """Tests for stats display."""

    def test_singular_event(self):
        stats = {
            "devices": 1,
            "users": 1,
            "total_events": 1,
            "success_events": 1,
            "warning_events": 0,
            "failed_events": 0,
            "success_rate": 100.0,
        }
        result = _capture(display_stats, stats)

        assert "1 event" in result
        assert "1 events" not in result
        assert "Success rate: 100.0%" in result

    def test_plural_events(self):
        stats = {
            "devices": 2,
            "users": 3,
            "total_events": 5,
            "success_events": 3,
            "warning_events": 1,
            "failed_events": 1,
            "success_rate": 60.0,
        }
        result = _capture(display_stats, stats)

        assert "5 events" in result
        assert "Users:        3" in result
        assert "Devices:      2" in result


class TestDisplayHeatmap:
    """Tests for the text heatmap."""

    def test_empty(self):
        assert "No heatmap data." in _capture(display_heatmap, [])

    def test_rows_and_glyphs(self):
        cells = [
            Cell("Login", "2024-01-01", "Jan 01", 2, Status.FAIL, 1.0),
            Cell("Login", "2024-01-02", "Jan 02", 0, None, 0.0),
            Cell("Upload", "2024-01-01", "Jan 01", 1, Status.SUCCESS, 1.0),
            Cell("Upload", "2024-01-02", "Jan 02", 1, Status.WARNING, 1.0),
        ]
        lines = _capture(display_heatmap, cells).splitlines()

        login_row = next(line for line in lines if "Login" in line)
        upload_row = next(line for line in lines if "Upload" in line)
        assert login_row.endswith("F .")
        assert upload_row.endswith("s w")
        assert any("Jan 01 .. Jan 02" in line for line in lines)


class TestMain:
    """Tests for the console entry point."""

    def _events(self):
        return [
            Event(datetime(2024, 1, 1), "Login", Status.SUCCESS, "alice", "laptop"),
            Event(datetime(2024, 1, 9), "Login", Status.FAIL, "bob", "phone"),
        ]

    @patch("event_pulse.main.configure_logging")
    @patch("event_pulse.main.validate_config")
    @patch("event_pulse.main.load_configured_events")
    def test_success(self, mock_load, mock_validate, mock_logging):
        mock_load.return_value = self._events()

        output = io.StringIO()
        with redirect_stdout(output):
            code = main(["daily"])

        assert code == 0
        result = output.getvalue()
        assert "Loaded 2 events (daily view)" in result
        assert "Activity Trends" in result
        assert "Activity Heatmap" in result

    @patch("event_pulse.main.configure_logging")
    @patch("event_pulse.main.validate_config")
    def test_invalid_granularity_argument(self, mock_validate, mock_logging):
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(["hourly"])

        assert code == 1
        assert "Configuration Error" in output.getvalue()

    @patch("event_pulse.main.configure_logging")
    @patch("event_pulse.main.validate_config")
    @patch("event_pulse.main.load_configured_events")
    def test_source_error(self, mock_load, mock_validate, mock_logging):
        mock_load.side_effect = EventSourceError("Event data file not found: x.json")

        output = io.StringIO()
        with redirect_stdout(output):
            code = main(["weekly"])

        assert code == 1
        assert "not found" in output.getvalue()

    @patch("event_pulse.main.configure_logging")
    @patch("event_pulse.main.validate_config")
    @patch("event_pulse.main.load_configured_events")
    def test_no_events(self, mock_load, mock_validate, mock_logging):
        mock_load.return_value = []

        output = io.StringIO()
        with redirect_stdout(output):
            code = main(["weekly"])

        assert code == 0
        assert "No events found." in output.getvalue()

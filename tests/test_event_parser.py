"""
Tests for the event parser module.
"""

from datetime import datetime, timezone

import pytest

from event_pulse.event_parser import parse_date, parse_event, parse_events, parse_status
from event_pulse.models import Event, Status


@pytest.fixture
def raw_record():
    """A well-formed dataset record."""
    return {
        "date": "2024-01-05T14:30:00",
        "activityType": "Payment Transfer",
        "status": "warning",
        "user": "dave",
        "device": "desktop-04",
    }


class TestParseDate:
    """Tests for parse_date."""

    def test_plain_date(self):
        assert parse_date("2024-01-05") == datetime(2024, 1, 5)

    def test_iso_datetime(self):
        assert parse_date("2024-01-05T14:30:00") == datetime(2024, 1, 5, 14, 30)

    def test_trailing_z_is_utc(self):
        parsed = parse_date("2024-01-05T14:30:00Z")
        assert parsed == datetime(2024, 1, 5, 14, 30, tzinfo=timezone.utc)

    def test_datetime_passthrough(self):
        value = datetime(2024, 1, 5)
        assert parse_date(value) is value

    def test_invalid_values(self):
        assert parse_date("not a date") is None
        assert parse_date("2024-13-45") is None
        assert parse_date("") is None
        assert parse_date(None) is None
        assert parse_date(20240105) is None


class TestParseStatus:
    """Tests for parse_status."""

    def test_known_statuses(self):
        assert parse_status("success") == Status.SUCCESS
        assert parse_status("warning") == Status.WARNING
        assert parse_status("fail") == Status.FAIL

    def test_case_and_whitespace_insensitive(self):
        assert parse_status(" FAIL ") == Status.FAIL

    def test_enum_passthrough(self):
        assert parse_status(Status.WARNING) == Status.WARNING

    def test_unknown_status(self):
        assert parse_status("failed") is None
        assert parse_status(None) is None
        assert parse_status(1) is None


class TestParseEvent:
    """Tests for parse_event."""

    def test_parses_all_fields(self, raw_record):
        event = parse_event(raw_record)

        assert event == Event(
            date=datetime(2024, 1, 5, 14, 30),
            activity_type="Payment Transfer",
            status=Status.WARNING,
            user="dave",
            device="desktop-04",
        )

    def test_accepts_snake_case_activity_type(self, raw_record):
        raw_record["activity_type"] = raw_record.pop("activityType")
        assert parse_event(raw_record).activity_type == "Payment Transfer"

    def test_user_and_device_are_optional(self, raw_record):
        del raw_record["user"]
        raw_record["device"] = None
        event = parse_event(raw_record)

        assert event.user == ""
        assert event.device == ""

    @pytest.mark.parametrize("field", ["date", "activityType", "status"])
    def test_missing_required_field(self, raw_record, field):
        del raw_record[field]
        assert parse_event(raw_record) is None

    def test_invalid_date(self, raw_record):
        raw_record["date"] = "yesterday"
        assert parse_event(raw_record) is None

    def test_non_dict_record(self):
        assert parse_event(None) is None
        assert parse_event(["2024-01-05"]) is None


class TestParseEvents:
    """Tests for parse_events."""

    def test_skips_malformed_records(self, raw_record):
        records = [
            raw_record,
            {"date": "bad", "activityType": "Login", "status": "success"},
            {"activityType": "Login", "status": "success"},
            dict(raw_record, status="fail"),
        ]
        events = parse_events(records)

        assert len(events) == 2
        assert [e.status for e in events] == [Status.WARNING, Status.FAIL]

    def test_empty_input(self):
        assert parse_events([]) == []

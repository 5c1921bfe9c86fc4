"""
Load raw activity event records from a JSON file or an HTTP endpoint.
"""

import json
import logging
from pathlib import Path

import requests

from event_pulse.event_parser import parse_events
from event_pulse.models import Event

logger = logging.getLogger(__name__)


class EventSourceError(Exception):
    """Raised when event records cannot be loaded."""

    pass


def _ensure_record_list(data, origin: str) -> list[dict]:
    # Accept either a bare array or {"events": [...]}
    if isinstance(data, dict):
        data = data.get("events")
    if not isinstance(data, list):
        raise EventSourceError(f"Expected a JSON array of events from {origin}")
    return data


def load_raw_events(path: str | Path) -> list[dict]:
    """
    Read raw event records from a JSON file.

    Args:
        path: Path to a JSON file holding an array of event records

    Returns:
        List of raw record dicts

    Raises:
        EventSourceError: If the file is missing or not a JSON array
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise EventSourceError(f"Event data file not found: {path}")
    except json.JSONDecodeError as e:
        raise EventSourceError(f"Invalid JSON in {path}: {e}")

    return _ensure_record_list(data, str(path))


def load_events(path: str | Path) -> list[Event]:
    """Read and parse events from a JSON file."""
    return parse_events(load_raw_events(path))


class EventSourceClient:
    """Client for fetching event records from an HTTP endpoint."""

    def __init__(self, url: str, timeout: float = 10.0):
        """
        Initialize the event source client.

        Args:
            url: URL returning a JSON array of event records
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def fetch_raw(self) -> list[dict]:
        """
        Fetch raw event records.

        Returns:
            List of raw record dicts

        Raises:
            EventSourceError: If the request fails or the body is not an array
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Event source request failed: %s", e)
            raise EventSourceError(f"Could not reach event source: {e}")

        if response.status_code == 404:
            raise EventSourceError(f"Event source not found: {self.url}")
        elif not response.ok:
            raise EventSourceError(
                f"Event source error: {response.status_code} - {response.text}"
            )

        try:
            data = response.json()
        except ValueError:
            raise EventSourceError(f"Event source returned invalid JSON: {self.url}")

        return _ensure_record_list(data, self.url)

    def fetch(self) -> list[Event]:
        """Fetch and parse events."""
        return parse_events(self.fetch_raw())

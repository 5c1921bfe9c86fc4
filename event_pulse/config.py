"""
Configuration management for event-pulse.

Loads the event data source and display defaults from environment variables.
"""

import logging
import os
from dotenv import load_dotenv

from event_pulse.models import Granularity

# Load .env file from project root
load_dotenv()

DATA_PATH = os.getenv("EVENT_PULSE_DATA_PATH")
DATA_URL = os.getenv("EVENT_PULSE_DATA_URL")
DEFAULT_GRANULARITY = os.getenv("EVENT_PULSE_GRANULARITY", "weekly")
LOG_LEVEL = os.getenv("EVENT_PULSE_LOG_LEVEL", "WARNING")


def validate_config():
    """Validate that the configuration is usable."""
    problems = []

    if not DATA_PATH and not DATA_URL:
        problems.append("EVENT_PULSE_DATA_PATH or EVENT_PULSE_DATA_URL must be set")

    if DEFAULT_GRANULARITY not in {g.value for g in Granularity}:
        problems.append(
            f"EVENT_PULSE_GRANULARITY must be daily, weekly, or monthly "
            f"(got '{DEFAULT_GRANULARITY}')"
        )

    if not isinstance(logging.getLevelName(str(LOG_LEVEL).upper()), int):
        problems.append(f"EVENT_PULSE_LOG_LEVEL is not a logging level: '{LOG_LEVEL}'")

    if problems:
        raise ValueError(
            "Invalid configuration:\n  "
            + "\n  ".join(problems)
            + "\nPlease copy .env.example to .env and fill in your values."
        )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from EVENT_PULSE_LOG_LEVEL."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

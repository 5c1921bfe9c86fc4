"""
Calculate summary statistics for events and heatmap cells.
"""

import math

from event_pulse.models import Cell, Event, Status


def calculate_stats(events: list[Event]) -> dict:
    """
    Calculate dashboard statistics for a set of events.

    Args:
        events: Events after filters have been applied

    Returns:
        Dictionary with:
        - devices: Distinct non-empty devices
        - users: Distinct non-empty users
        - total_events: Number of events
        - success_events / warning_events / failed_events: Per-status counts
        - success_rate: Percent of successful events, one decimal (0 when empty)
    """
    devices = set()
    users = set()
    counts = {status: 0 for status in Status}

    for event in events:
        if event.device:
            devices.add(event.device)
        if event.user:
            users.add(event.user)
        if event.status in counts:
            counts[event.status] += 1

    total = len(events)
    success_rate = round(counts[Status.SUCCESS] / total * 100, 1) if total else 0

    return {
        "devices": len(devices),
        "users": len(users),
        "total_events": total,
        "success_events": counts[Status.SUCCESS],
        "warning_events": counts[Status.WARNING],
        "failed_events": counts[Status.FAIL],
        "success_rate": success_rate,
    }


def summarize_cell(cell: Cell) -> dict:
    """
    Summarize a selected heatmap cell for its detail view.

    Returns:
        Dictionary with total_events, dominant_status, intensity_percent and
        unique_users
    """
    return {
        "total_events": cell.count,
        "dominant_status": cell.dominant_status.value if cell.dominant_status else None,
        "intensity_percent": math.floor(cell.intensity * 100 + 0.5),
        "unique_users": len({event.user for event in cell.events if event.user}),
    }

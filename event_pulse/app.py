"""
FastAPI web application for event-pulse.

Serves the render-ready heatmap, bar chart, and statistics data for the
dashboard front end.
"""

import logging
from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from event_pulse.config import validate_config
from event_pulse.dashboard import Dashboard
from event_pulse.event_source import EventSourceError
from event_pulse.main import load_configured_events
from event_pulse.stats_calculator import summarize_cell

logger = logging.getLogger(__name__)

app = FastAPI(
    title="event-pulse",
    description="Activity event heatmap and trend dashboard",
    version="0.1.0",
)

GranularityParam = Literal["daily", "weekly", "monthly"]
StatusParam = Literal["success", "warning", "fail"]
StatCardParam = Literal["total", "success", "warning", "failed"]

_dashboard: Dashboard | None = None


class ViewRequest(BaseModel):
    """Request model for a chart view with the UI's current selection."""

    view: Literal["heatmap", "bargraph"] = Field("heatmap", description="Chart type")
    granularity: GranularityParam = Field("weekly", description="Time bucket size")
    activity_types: list[str] = Field(default_factory=list, description="Activity types to keep")
    statuses: list[StatusParam] = Field(default_factory=list, description="Statuses to keep")
    stat_card: StatCardParam | None = Field(None, description="Selected stat card")
    width: int = Field(800, ge=100, le=4000, description="Chart width in pixels")
    height: int = Field(500, ge=100, le=4000, description="Chart height in pixels")


def get_dashboard() -> Dashboard:
    """
    Get the shared dashboard, loading events on first use.

    Raises:
        HTTPException: on configuration or event source errors
    """
    global _dashboard
    if _dashboard is not None:
        return _dashboard

    try:
        validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    try:
        events = load_configured_events()
    except EventSourceError as e:
        logger.warning("Failed to load events: %s", e)
        raise HTTPException(status_code=502, detail=str(e))

    _dashboard = Dashboard(events)
    return _dashboard


def _filters(activity_type: list[str], status: list[str], stat_card: str | None) -> dict:
    return {"activity_types": activity_type, "statuses": status, "stat_card": stat_card}


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/stats")
def get_stats(
    activity_type: list[str] = Query(default=[]),
    status: list[StatusParam] = Query(default=[]),
    stat_card: StatCardParam | None = None,
):
    """
    Get summary statistics for the filtered events.

    Returns:
        JSON with device, user, per-status counts and success rate
    """
    dashboard = get_dashboard()
    return dashboard.stats(**_filters(activity_type, status, stat_card))


@app.get("/api/bars")
def get_bars(
    granularity: GranularityParam = "weekly",
    activity_type: list[str] = Query(default=[]),
    status: list[StatusParam] = Query(default=[]),
    stat_card: StatCardParam | None = None,
    width: int = Query(800, ge=100, le=4000),
    height: int = Query(400, ge=100, le=4000),
):
    """
    Get the stacked bar chart view.

    Returns:
        JSON with buckets (including trends), bar geometry and axis ticks
    """
    dashboard = get_dashboard()
    return dashboard.bar_view(
        granularity, width, height, **_filters(activity_type, status, stat_card)
    )


@app.get("/api/heatmap")
def get_heatmap(
    granularity: GranularityParam = "weekly",
    activity_type: list[str] = Query(default=[]),
    status: list[StatusParam] = Query(default=[]),
    stat_card: StatCardParam | None = None,
    width: int = Query(800, ge=100, le=4000),
    height: int = Query(500, ge=100, le=4000),
):
    """
    Get the activity heatmap view.

    Returns:
        JSON with activity types, periods and positioned cells
    """
    dashboard = get_dashboard()
    return dashboard.heatmap_view(
        granularity, width, height, **_filters(activity_type, status, stat_card)
    )


@app.post("/api/views")
def post_view(request: ViewRequest):
    """
    Get a chart view for a full UI selection.

    Args:
        request: ViewRequest with chart type, granularity, filters and size

    Returns:
        JSON for the heatmap or bar chart view
    """
    dashboard = get_dashboard()
    filters = _filters(request.activity_types, request.statuses, request.stat_card)

    if request.view == "bargraph":
        return dashboard.bar_view(request.granularity, request.width, request.height, **filters)
    return dashboard.heatmap_view(request.granularity, request.width, request.height, **filters)


@app.get("/api/cells/{activity_type}/{period}")
def get_cell(
    activity_type: str,
    period: str,
    granularity: GranularityParam = "weekly",
    types: list[str] = Query(default=[]),
    status: list[StatusParam] = Query(default=[]),
    stat_card: StatCardParam | None = None,
):
    """
    Get a single heatmap cell with its events and summary.

    Args:
        activity_type: Heatmap row
        period: Period key, e.g. 2024-01-07 or 2024-01

    Returns:
        JSON with the cell, its events and a detail summary
    """
    dashboard = get_dashboard()
    cell = dashboard.cell(
        activity_type,
        period,
        granularity,
        **_filters(types, status, stat_card),
    )
    if cell is None:
        raise HTTPException(status_code=404, detail="Cell not found")

    return {
        "cell": cell.to_dict(include_events=True),
        "summary": summarize_cell(cell),
    }


@app.get("/api/activity-types")
def get_activity_types(search: str | None = None):
    """
    List activity types in the loaded data.

    Args:
        search: Optional case-insensitive substring filter

    Returns:
        JSON with the matching activity types
    """
    dashboard = get_dashboard()
    return {"activity_types": dashboard.activity_types(search)}

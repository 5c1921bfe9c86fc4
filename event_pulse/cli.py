"""
CLI display functions for event-pulse.
"""

from event_pulse.models import TREND_DOWN, TREND_UP, Bucket, Cell, Status

STATUS_ICONS = {
    Status.SUCCESS: "✅",
    Status.WARNING: "⚠️",
    Status.FAIL: "❌",
}

# Heatmap glyphs by dominant status; empty cells are dots
HEATMAP_GLYPHS = {
    Status.SUCCESS: "s",
    Status.WARNING: "w",
    Status.FAIL: "F",
}


def format_trend(bucket: Bucket) -> str:
    """
    Format a bucket's trend for display.

    Returns:
        String like "📈 +50%", "📉 -25%" or "➡️ 0%"
    """
    if bucket.trend_direction == TREND_UP:
        return f"📈 +{bucket.trend_percent}%"
    elif bucket.trend_direction == TREND_DOWN:
        return f"📉 {bucket.trend_percent}%"
    return f"➡️ {bucket.trend_percent}%"


def format_bucket(bucket: Bucket) -> str:
    """Format one bucket as a table row."""
    counts = bucket.counts_by_status
    return (
        f"  {bucket.label:<10} {bucket.total:>6} "
        f"{counts[Status.SUCCESS]:>8} {counts[Status.WARNING]:>8} {counts[Status.FAIL]:>6}"
        f"   {format_trend(bucket)}"
    )


def display_buckets(buckets: list[Bucket]) -> None:
    """
    Display the bar chart data as a table.

    Args:
        buckets: Buckets with trend fields populated
    """
    if not buckets:
        print("No events to display.")
        print()
        return

    print("📊 Activity Trends:")
    print("  PERIOD      TOTAL  SUCCESS  WARNING   FAIL   TREND")
    print("  " + "-" * 60)
    for bucket in buckets:
        print(format_bucket(bucket))
    print()


def display_stats(stats: dict) -> None:
    """
    Display event statistics to the console.

    Args:
        stats: Dictionary from calculate_stats()
    """
    total = stats["total_events"]
    event_label = "event" if total == 1 else "events"

    print("📈 Event Stats:")
    print(f"   Total:        {total} {event_label}")
    print(f"   {STATUS_ICONS[Status.SUCCESS]} Success:    {stats['success_events']}")
    print(f"   {STATUS_ICONS[Status.WARNING]} Warning:    {stats['warning_events']}")
    print(f"   {STATUS_ICONS[Status.FAIL]} Failed:     {stats['failed_events']}")
    print(f"   Success rate: {stats['success_rate']}%")
    print(f"   Users:        {stats['users']}")
    print(f"   Devices:      {stats['devices']}")
    print()


def display_heatmap(cells: list[Cell], name_width: int = 24) -> None:
    """
    Display a text heatmap, one row per activity type.

    Each cell shows the dominant status glyph (F/w/s) or a dot when empty.

    Args:
        cells: Cells from cells_for(), ordered by activity type then period
        name_width: Width of the activity type column
    """
    if not cells:
        print("No heatmap data.")
        print()
        return

    rows: dict[str, list[Cell]] = {}
    for cell in cells:
        rows.setdefault(cell.activity_type, []).append(cell)

    print("Activity Heatmap:")
    for activity_type, row in rows.items():
        name = activity_type[:name_width]
        glyphs = " ".join(
            HEATMAP_GLYPHS[cell.dominant_status] if cell.dominant_status else "."
            for cell in row
        )
        print(f"  {name:<{name_width}} {glyphs}")

    first_row = next(iter(rows.values()))
    print(f"  {'':<{name_width}} {first_row[0].label} .. {first_row[-1].label}")
    print()

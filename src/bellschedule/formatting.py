"""Text formatting for the schedule viewer."""

import math
from datetime import datetime, timedelta

from bellschedule.models import CalendarEvent, DayView


def human_duration(delta: timedelta) -> str:
    """Countdown text: "1h 5m 3s", "5m 3s" or "3s". Negative clamps to 0s."""
    total = max(0, math.floor(delta.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def clock_time(value: datetime) -> str:
    """Wall-clock time like 7:50am."""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value.minute:02d}{suffix}"


def long_date(value: datetime) -> str:
    """Header date like Tuesday, September 2, 2025."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def teacher_last(name: str | None) -> str:
    parts = (name or "").split()
    return parts[-1] if parts else ""


def status_line(view: DayView) -> str:
    """Header status, e.g. "A Day · Regular" or "No School · Wed"."""
    rotation = view.classification.rotation
    day = f"{rotation} Day" if rotation else "No School"
    table = f"{view.now:%a}" if view.table == "reduced" else "Regular"
    return f"{day} · {table}"


def event_time_text(event: CalendarEvent) -> str:
    if event.is_all_day:
        return "All Day"
    if event.end == event.start:
        return clock_time(event.start)
    return f"{clock_time(event.start)}–{clock_time(event.end)}"

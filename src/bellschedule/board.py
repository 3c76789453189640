"""Compose the engine into one view per render tick."""

from datetime import datetime

from bellschedule.bells import WEDNESDAY, build_periods, select_table
from bellschedule.clock import require_aware
from bellschedule.days import classify
from bellschedule.events import resolve_events
from bellschedule.models import CalendarData, DayView, ScheduleData


def build_day_view(
    now: datetime,
    data: ScheduleData,
    calendar: CalendarData,
    *,
    reduced_weekday: int = WEDNESDAY,
) -> DayView:
    """Everything the display shows at `now`.

    Classifier, selector, matcher and event resolver all run against the
    same `now`. On a day without school the period list is empty and the
    view reports no school; events are still resolved.

    Raises:
        ValueError: `now` is naive.
    """
    require_aware(now)
    classification = classify(now, data, calendar.overrides)
    table, rows = select_table(now, data.schedules, reduced_weekday)

    periods = ()
    if classification.rotation is not None:
        periods = build_periods(now, rows, classification.rotation, data.classes)

    current = next((p for p in periods if p.status == "active"), None)
    upcoming = next((p for p in periods if p.status == "next"), None)

    return DayView(
        now=now,
        has_data=data.has_data,
        classification=classification,
        table=table,
        periods=periods,
        current=current,
        next=upcoming,
        events=resolve_events(now, calendar.events),
    )

"""Calendar events for the current day.

An event belongs to a day if it starts on that day, or if it started on an
earlier day and is still running when the day begins. Multi-day events thus
show up on every day they cover.
"""

from collections.abc import Iterable
from datetime import datetime

from bellschedule.clock import start_of_day
from bellschedule.models import CalendarEvent, EventStatus, EventView


def occurs_on_day(now: datetime, event: CalendarEvent) -> bool:
    day_start = start_of_day(now.date(), now.tzinfo)
    if event.start.astimezone(now.tzinfo).date() == now.date():
        return True
    return event.start < day_start and event.end > day_start


def events_on_day(now: datetime, events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """Events occurring on the local date of `now`, earliest start first.

    Rotation marker events ("A Day") are not removed here; see visible_events().
    """
    todays = [event for event in events if occurs_on_day(now, event)]
    return sorted(todays, key=lambda event: event.start)


def event_status(now: datetime, event: CalendarEvent) -> EventStatus:
    if event.is_all_day:
        return "all_day"
    if event.start <= now <= event.end:
        return "active"
    if now > event.end:
        return "passed"
    return "upcoming"


def resolve_events(now: datetime, events: Iterable[CalendarEvent]) -> tuple[EventView, ...]:
    return tuple(
        EventView(event=event, status=event_status(now, event))
        for event in events_on_day(now, events)
    )


def visible_events(
    views: Iterable[EventView], hidden_titles: Iterable[str]
) -> list[EventView]:
    """Drop events a display shows elsewhere, like the "A Day" marker."""
    hidden = set(hidden_titles)
    return [view for view in views if view.event.title not in hidden]

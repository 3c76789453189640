"""Import the school's iCalendar feed.

One pass over the feed produces two things: the list of events shown on the
display, and the rotation overrides. An event titled exactly "A Day" or
"B Day" marks its start date as an A or B day, which beats the computed
parity for that date.

The import never raises. A feed that does not parse at all yields empty
results with `error` set; a single broken VEVENT is skipped.
"""

from datetime import date, datetime, timedelta, tzinfo

from icalendar import Calendar

from bellschedule.clock import localize, start_of_day
from bellschedule.logging import get_logger
from bellschedule.models import CalendarData, CalendarEvent, Rotation

log = get_logger(__name__)

DEFAULT_A_DAY_TITLE = "A Day"
DEFAULT_B_DAY_TITLE = "B Day"


def _instant(value: date, tz: tzinfo) -> datetime:
    if isinstance(value, datetime):
        return localize(value, tz)
    return start_of_day(value, tz)


def _property_value(component, name: str) -> date | timedelta | None:
    prop = component.get(name)
    if prop is None:
        return None
    value = getattr(prop, "dt", None)
    if not isinstance(value, (date, timedelta)):
        raise ValueError(f"unreadable {name}: {prop!r}")
    return value


def _event_times(component, tz: tzinfo) -> tuple[datetime, datetime, bool, date]:
    """Start, end, all-day flag and the feed's own start date of a VEVENT.

    End falls back to DTSTART + DURATION, then to one day for date-only
    events and to the start itself for timed events.
    """
    start_value = _property_value(component, "DTSTART")
    if not isinstance(start_value, date):
        raise ValueError("missing DTSTART")
    is_all_day = not isinstance(start_value, datetime)

    end_value = _property_value(component, "DTEND")
    if end_value is None:
        duration = _property_value(component, "DURATION")
        if isinstance(duration, timedelta):
            end_value = start_value + duration
        elif is_all_day:
            end_value = start_value + timedelta(days=1)
        else:
            end_value = start_value
    if not isinstance(end_value, date):
        raise ValueError(f"unreadable DTEND: {end_value!r}")

    start = _instant(start_value, tz)
    end = _instant(end_value, tz)
    if end < start:
        raise ValueError(f"event ends before it starts: {start} > {end}")

    feed_day = start_value.date() if isinstance(start_value, datetime) else start_value
    return start, end, is_all_day, feed_day


def parse_calendar(
    text: str | bytes,
    tz: tzinfo,
    *,
    a_day_title: str = DEFAULT_A_DAY_TITLE,
    b_day_title: str = DEFAULT_B_DAY_TITLE,
) -> CalendarData:
    """Parse iCalendar text into rotation overrides and events.

    Args:
        text: Raw feed content.
        tz: School timezone; event instants are converted into it.
        a_day_title: Exact event title marking an A day.
        b_day_title: Exact event title marking a B day.

    Returns:
        CalendarData with overrides keyed by the event's start date as
        written in the feed. On a top-level parse failure, empty data with
        `error` set.
    """
    try:
        calendar = Calendar.from_ical(text)
    except Exception as e:
        log.error("calendar_parse_failed", error=str(e), type=type(e).__name__)
        return CalendarData(error=f"calendar feed could not be parsed: {e}")

    sentinels: dict[str, Rotation] = {a_day_title: "A", b_day_title: "B"}
    overrides: dict[date, Rotation] = {}
    events: list[CalendarEvent] = []

    for component in calendar.walk("VEVENT"):
        title = str(component.get("SUMMARY", ""))
        try:
            start, end, is_all_day, feed_day = _event_times(component, tz)
        except (ValueError, TypeError) as e:
            log.warning("calendar_event_skipped", title=title, error=str(e))
            continue

        events.append(
            CalendarEvent(
                title=title,
                start=start,
                end=end,
                location=str(component.get("LOCATION", "")),
                is_all_day=is_all_day,
            )
        )

        rotation = sentinels.get(title)
        if rotation is not None:
            overrides[feed_day] = rotation

    log.info("calendar_imported", events=len(events), overrides=len(overrides))
    return CalendarData(overrides=overrides, events=tuple(events))

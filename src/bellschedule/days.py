"""Day classification: is a date a school day, and is it an A or B day.

All comparisons are by calendar date in the school timezone. The school-year
bounds are reduced to their local dates, so any instant on the last day of
the year counts as in range even after the configured end time-of-day.
"""

from collections.abc import Callable, Mapping
from datetime import date, datetime, timedelta, tzinfo

from bellschedule.clock import localize, require_aware
from bellschedule.models import DayClassification, Rotation, ScheduleData

SATURDAY = 5
SUNDAY = 6


def _year_bounds(data: ScheduleData, tz: tzinfo) -> tuple[date, date] | None:
    year = data.school_year
    if year is None:
        return None
    return localize(year.start, tz).date(), localize(year.end, tz).date()


def is_weekend(day: date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def is_school_day(day: date, data: ScheduleData, tz: tzinfo) -> bool:
    """Whether `day` is inside the school year, a weekday, and not an off day."""
    bounds = _year_bounds(data, tz)
    if bounds is None:
        return False
    first, last = bounds
    return first <= day <= last and not is_weekend(day) and day not in data.off_days


def school_day_number(day: date, data: ScheduleData, tz: tzinfo) -> int:
    """1-based position of `day` among the school days of the year.

    Counts every school day from the first day of the year through `day`
    inclusive. Returns 0 when no school day precedes or equals `day`.
    """
    bounds = _year_bounds(data, tz)
    if bounds is None:
        return 0
    count = 0
    cursor = bounds[0]
    while cursor <= day:
        if is_school_day(cursor, data, tz):
            count += 1
        cursor += timedelta(days=1)
    return count


def computed_rotation(day: date, data: ScheduleData, tz: tzinfo) -> Rotation:
    """Rotation by parity: the first school day of the year is an A day."""
    return "A" if school_day_number(day, data, tz) % 2 == 1 else "B"


def resolve_rotation(
    day: date,
    overrides: Mapping[date, Rotation],
    fallback: Callable[[date], Rotation],
) -> Rotation:
    """Calendar override for `day` if there is one, else the fallback."""
    rotation = overrides.get(day)
    if rotation is not None:
        return rotation
    return fallback(day)


def classify(
    when: datetime,
    data: ScheduleData,
    overrides: Mapping[date, Rotation] | None = None,
) -> DayClassification:
    """Classify the local date of `when`.

    `when` must be timezone-aware in the school timezone (see
    clock.resolve_now); its date is what gets classified.

    Raises:
        ValueError: `when` is naive.
    """
    tz = require_aware(when).tzinfo
    day = when.date()
    if not is_school_day(day, data, tz):
        return DayClassification(is_school_day=False, rotation=None)

    rotation = resolve_rotation(
        day,
        overrides or {},
        lambda d: computed_rotation(d, data, tz),
    )
    return DayClassification(is_school_day=True, rotation=rotation)

"""Resolve the instant a render cycle runs at."""

from datetime import date, datetime, time, tzinfo
from zoneinfo import ZoneInfo


def school_timezone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Express a datetime in the school timezone.

    Naive values are taken as already being school-local wall time.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def require_aware(value: datetime) -> datetime:
    """Reject naive datetimes; imported events are always timezone-aware."""
    if value.tzinfo is None:
        raise ValueError(
            f"expected a timezone-aware datetime, got naive {value.isoformat()}; "
            "use clock.resolve_now() or clock.localize()"
        )
    return value


def resolve_now(tz: tzinfo, simulated: datetime | None = None) -> datetime:
    """Return the instant for one render cycle.

    Call once per cycle and pass the result to every computation, so the
    classifier, matcher and event resolver all see the same instant.
    """
    if simulated is not None:
        return localize(simulated, tz)
    return datetime.now(tz)


def start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def at(day: date, clock: time, tz: tzinfo) -> datetime:
    """Local datetime for a bell time on a given day."""
    return datetime.combine(day, clock, tzinfo=tz)

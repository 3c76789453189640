"""Shared test fixtures and data loading for the bell schedule engine.

Test data lives in data/fixtures/: a 2025-26 school year configuration
(first day Wed 2025-08-13, reduced schedule on Wednesdays) and a small
iCalendar feed around the first week of September 2025.

Computed rotation, first days of the year:
    Wed 08-13 A, Thu 08-14 B, Fri 08-15 A, ... Fri 08-29 A,
    Mon 09-01 off (Labor Day), Tue 09-02 B, Wed 09-03 A, Thu 09-04 B.
The feed overrides Tue 09-02 to an A day.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from bellschedule.calendar_import import parse_calendar
from bellschedule.models import (
    BellRow,
    CalendarData,
    CalendarEvent,
    ScheduleData,
    SchoolYear,
)

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCHEDULE_FILE = FIXTURES_DIR / "schedule-data.json"
CALENDAR_FILE = FIXTURES_DIR / "calendar.ics"

DENVER = ZoneInfo("America/Denver")


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def load_schedule() -> ScheduleData:
    with open(SCHEDULE_FILE, encoding="utf-8") as f:
        return ScheduleData.model_validate(json.load(f))


def load_feed_text() -> str:
    return CALENDAR_FILE.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def local(text: str) -> datetime:
    """School-local aware datetime from an ISO string.

    >>> local("2025-09-02T07:50")
    datetime(2025, 9, 2, 7, 50, tzinfo=ZoneInfo("America/Denver"))
    """
    return datetime.fromisoformat(text).replace(tzinfo=DENVER)


def row(start: str, end: str, code) -> BellRow:
    return BellRow(start=time.fromisoformat(start), end=time.fromisoformat(end), code=code)


def make_year(
    start: date, end: date, off_days: tuple[date, ...] = ()
) -> ScheduleData:
    """School year configuration without bell tables."""
    return ScheduleData(
        school_year=SchoolYear(
            start=datetime.combine(start, time.min),
            end=datetime.combine(end, time(23, 59, 59)),
        ),
        off_days=frozenset(off_days),
    )


def event(title: str, start: str, end: str, *, all_day: bool = False, location: str = "") -> CalendarEvent:
    return CalendarEvent(
        title=title,
        start=local(start),
        end=local(end),
        location=location,
        is_all_day=all_day,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def schedule_data() -> ScheduleData:
    return load_schedule()


@pytest.fixture
def feed_text() -> str:
    return load_feed_text()


@pytest.fixture
def calendar_data(feed_text) -> CalendarData:
    return parse_calendar(feed_text, DENVER)

"""Bell schedule engine for a school's A/B rotation day display.

Decides whether today is an A or B day, which bell period is current or next,
and which calendar events fall on today.
"""

from bellschedule.board import build_day_view
from bellschedule.calendar_import import parse_calendar
from bellschedule.clock import resolve_now
from bellschedule.days import classify
from bellschedule.events import events_on_day
from bellschedule.models import CalendarData, DayView, ScheduleData

__all__ = [
    "CalendarData",
    "DayView",
    "ScheduleData",
    "build_day_view",
    "classify",
    "events_on_day",
    "parse_calendar",
    "resolve_now",
]

"""Bell table selection and period matching.

A bell row is current from its start through its end, both inclusive: a
class ending at 09:04 is still current at 09:04:00 and no longer at
09:04:01. When nothing is current, the next period is the first row that
starts strictly after now.
"""

import re
from datetime import datetime

from bellschedule.clock import at
from bellschedule.models import (
    BellRow,
    ClassInfo,
    ClassLists,
    PeriodView,
    Rotation,
    ScheduleTables,
    TableName,
)

WEDNESDAY = 2

# Academic period identifiers are rotation-prefixed: "A1", "B4"
_ACADEMIC_PERIOD = re.compile(r"^[AB]\d")


def select_table(
    when: datetime,
    tables: ScheduleTables,
    reduced_weekday: int = WEDNESDAY,
) -> tuple[TableName, tuple[BellRow, ...]]:
    """Pick the bell table for the weekday of `when`.

    Does not look at school-day status; callers check that separately.
    """
    if when.weekday() == reduced_weekday:
        return "reduced", tables.reduced
    return "standard", tables.standard


def row_bounds(now: datetime, row: BellRow) -> tuple[datetime, datetime]:
    """Start and end of `row` on the local date of `now`."""
    day = now.date()
    return at(day, row.start, now.tzinfo), at(day, row.end, now.tzinfo)


def current_period(now: datetime, rows: tuple[BellRow, ...]) -> int | None:
    """Index of the first row containing `now`, boundaries inclusive."""
    for index, row in enumerate(rows):
        start, end = row_bounds(now, row)
        if start <= now <= end:
            return index
    return None


def next_period(now: datetime, rows: tuple[BellRow, ...]) -> int | None:
    """Index of the first row starting strictly after `now`."""
    for index, row in enumerate(rows):
        start, _ = row_bounds(now, row)
        if start > now:
            return index
    return None


def resolve_label(code: str | tuple[str, str], rotation: Rotation) -> str:
    if isinstance(code, str):
        return code
    return code[0] if rotation == "A" else code[1]


def find_class(label: str, rotation: Rotation, classes: ClassLists) -> ClassInfo | None:
    """Class taught in period `label` on a `rotation` day, if any.

    Non-academic rows (LUNCH, PASSING) never have class info.
    """
    if not _ACADEMIC_PERIOD.match(label):
        return None
    for info in classes.for_rotation(rotation):
        if info.period == label:
            return info
    return None


def build_periods(
    now: datetime,
    rows: tuple[BellRow, ...],
    rotation: Rotation,
    classes: ClassLists,
) -> tuple[PeriodView, ...]:
    """Resolve every row of the day's table for display at `now`.

    Only call this on a school day; there is no period list without a
    rotation.
    """
    current = current_period(now, rows)
    upcoming = next_period(now, rows) if current is None else None

    periods = []
    for index, row in enumerate(rows):
        start, end = row_bounds(now, row)
        label = resolve_label(row.code, rotation)
        remaining = starts_in = None

        if now > end:
            status = "passed"
        elif index == current:
            status = "active"
            remaining = end - now
        elif index == upcoming:
            # Shown with a countdown, not highlighted as active
            status = "next"
            starts_in = start - now
        else:
            status = "upcoming"

        periods.append(
            PeriodView(
                index=index,
                row=row,
                label=label,
                start=start,
                end=end,
                info=find_class(label, rotation, classes),
                status=status,
                remaining=remaining,
                starts_in=starts_in,
            )
        )
    return tuple(periods)

"""Pydantic models for schedule configuration, calendar data and day views.

All data structures use Pydantic v2 for validation and serialization. Models
are frozen: configuration and calendar data are read-only once loaded, and
per-tick views compare by value so a display layer can diff them.
"""

from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from types import MappingProxyType
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

Rotation = Literal["A", "B"]
TableName = Literal["standard", "reduced"]
PeriodStatus = Literal["passed", "active", "next", "upcoming"]
EventStatus = Literal["all_day", "upcoming", "active", "passed"]


class BellRow(BaseModel):
    """One scheduled time block of a bell table.

    `code` is either a single label ("LUNCH") or an (A, B) pair whose
    element is picked by the day's rotation, e.g. ("A1", "B1").
    """

    model_config = ConfigDict(frozen=True)

    start: time  # "07:45" local time
    end: time  # "09:04" local time, inclusive
    code: str | tuple[str, str]

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "BellRow":
        if self.end < self.start:
            raise ValueError(f"bell row ends before it starts: {self.start}-{self.end}")
        return self


class ScheduleTables(BaseModel):
    """Standard and reduced-day bell tables.

    The configuration document may still use the older "regular" and
    "wednesday" keys.
    """

    model_config = ConfigDict(frozen=True)

    standard: tuple[BellRow, ...] = Field(
        default=(), validation_alias=AliasChoices("standard", "regular")
    )
    reduced: tuple[BellRow, ...] = Field(
        default=(), validation_alias=AliasChoices("reduced", "wednesday")
    )

    @field_validator("standard", "reduced")
    @classmethod
    def _ordered_without_overlap(
        cls, rows: tuple[BellRow, ...]
    ) -> tuple[BellRow, ...]:
        for prev, row in zip(rows, rows[1:]):
            if row.start < prev.end:
                raise ValueError(
                    f"bell rows out of order or overlapping: "
                    f"{prev.start}-{prev.end} then {row.start}-{row.end}"
                )
        return rows


class ClassInfo(BaseModel):
    """A class taught in one period slot of a rotation."""

    model_config = ConfigDict(frozen=True)

    period: str  # "A1", "B3"
    name: str = ""
    room: str = ""
    teacher: str = ""


class ClassLists(BaseModel):
    model_config = ConfigDict(frozen=True)

    A: tuple[ClassInfo, ...] = ()
    B: tuple[ClassInfo, ...] = ()

    def for_rotation(self, rotation: Rotation) -> tuple[ClassInfo, ...]:
        return self.A if rotation == "A" else self.B


class SchoolYear(BaseModel):
    """First and last instant of the school year.

    Naive timestamps are read in the configured school timezone.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _start_not_after_end(self) -> "SchoolYear":
        if self.start > self.end:
            raise ValueError(f"school year starts after it ends: {self.start} > {self.end}")
        return self


class ScheduleData(BaseModel):
    """The whole schedule configuration document.

    JSON layout:
        {
          "schoolYear": {"start": "2025-08-13T00:00:00", "end": "2026-05-22T23:59:59"},
          "offDays": ["2025-09-01", ...],
          "schedules": {"standard": [...], "reduced": [...]},
          "classes": {"A": [...], "B": [...]}
        }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    school_year: SchoolYear | None = Field(default=None, alias="schoolYear")
    off_days: frozenset[date] = Field(default=frozenset(), alias="offDays")
    schedules: ScheduleTables = Field(default_factory=ScheduleTables)
    classes: ClassLists = Field(default_factory=ClassLists)

    @classmethod
    def empty(cls) -> "ScheduleData":
        """Minimal valid configuration used when loading fails."""
        return cls()

    @property
    def has_data(self) -> bool:
        return self.school_year is not None


class CalendarEvent(BaseModel):
    """One event from the school calendar feed.

    start/end are timezone-aware and expressed in the school timezone.
    All-day events start at local midnight.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    start: datetime
    end: datetime
    location: str = ""
    is_all_day: bool = False


class CalendarData(BaseModel):
    """Result of one calendar import.

    `error` is set when the feed could not be fetched or parsed; overrides and
    events are then empty and rotation falls back to the computed parity.

    `overrides` is a read-only mapping. The model is not hashable because of it.
    """

    model_config = ConfigDict(frozen=True)

    overrides: Mapping[date, Rotation] = Field(default_factory=dict, validate_default=True)
    events: tuple[CalendarEvent, ...] = ()
    error: str | None = None

    @field_validator("overrides", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[date, Rotation]) -> Mapping[date, Rotation]:
        return MappingProxyType(dict(value))

    @field_serializer("overrides")
    def _dump_overrides(self, value: Mapping[date, Rotation]) -> dict[date, Rotation]:
        return dict(value)

    @property
    def ok(self) -> bool:
        return self.error is None


class DayClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_school_day: bool
    rotation: Rotation | None = None


class PeriodView(BaseModel):
    """A bell row resolved for one tick.

    `remaining` is only set for the active row, `starts_in` only for the next
    row when nothing is active.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    row: BellRow
    label: str
    start: datetime
    end: datetime
    info: ClassInfo | None = None
    status: PeriodStatus
    remaining: timedelta | None = None
    starts_in: timedelta | None = None


class EventView(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: CalendarEvent
    status: EventStatus


class DayView(BaseModel):
    """Everything a display needs for one tick, computed from one instant."""

    model_config = ConfigDict(frozen=True)

    now: datetime
    has_data: bool
    classification: DayClassification
    table: TableName
    periods: tuple[PeriodView, ...] = ()
    current: PeriodView | None = None
    next: PeriodView | None = None
    events: tuple[EventView, ...] = ()

    @property
    def no_school(self) -> bool:
        return self.classification.rotation is None

"""Tests for configuration model validation and the clock helpers."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest
from pydantic import ValidationError

from bellschedule.clock import localize, resolve_now
from bellschedule.models import (
    BellRow,
    CalendarData,
    ScheduleData,
    ScheduleTables,
    SchoolYear,
)
from conftest import DENVER, local, row


class TestBellRow:

    def test_hhmm_strings(self):
        parsed = BellRow.model_validate({"start": "07:45", "end": "09:04", "code": "LUNCH"})
        assert parsed.start == time(7, 45)
        assert parsed.end == time(9, 4)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            BellRow.model_validate({"start": "09:04", "end": "07:45", "code": "A1"})

    def test_zero_length_row_allowed(self):
        assert row("09:00", "09:00", "BELL").start == row("09:00", "09:00", "BELL").end

    def test_frozen(self):
        with pytest.raises(ValidationError):
            row("09:00", "09:04", "X").code = "Y"


class TestScheduleTables:

    def test_overlap_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleTables(standard=(row("09:00", "09:30", "X"), row("09:20", "10:00", "Y")))

    def test_out_of_order_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleTables(reduced=(row("10:00", "10:30", "X"), row("09:00", "09:30", "Y")))

    def test_touching_rows_allowed(self):
        tables = ScheduleTables(standard=(row("09:00", "09:30", "X"), row("09:30", "10:00", "Y")))
        assert len(tables.standard) == 2


class TestScheduleData:

    def test_school_year_order(self):
        with pytest.raises(ValidationError):
            SchoolYear(start=datetime(2026, 5, 22), end=datetime(2025, 8, 13))

    def test_empty_is_valid(self):
        data = ScheduleData.empty()
        assert data.school_year is None
        assert data.off_days == frozenset()
        assert data.schedules.standard == ()
        assert data.classes.A == ()
        assert not data.has_data

    def test_dumped_document_validates_again(self, schedule_data):
        assert schedule_data == ScheduleData.model_validate(schedule_data.model_dump(by_alias=True))


class TestCalendarData:

    def test_overrides_are_read_only(self, calendar_data):
        with pytest.raises(TypeError):
            calendar_data.overrides[date(2025, 9, 3)] = "B"
        assert date(2025, 9, 3) not in calendar_data.overrides

    def test_source_dict_is_copied(self):
        source = {date(2025, 9, 2): "A"}
        data = CalendarData(overrides=source)
        source[date(2025, 9, 4)] = "B"
        assert data.overrides == {date(2025, 9, 2): "A"}

    def test_overrides_dump_as_dict(self, calendar_data):
        assert calendar_data.model_dump()["overrides"] == {
            date(2025, 9, 2): "A",
            date(2025, 9, 4): "B",
        }


class TestClock:

    def test_simulated_naive_is_school_local(self):
        assert resolve_now(DENVER, datetime(2025, 9, 2, 7, 50)) == local("2025-09-02T07:50")

    def test_simulated_aware_is_converted(self):
        now = resolve_now(DENVER, datetime(2025, 9, 2, 13, 50, tzinfo=timezone.utc))
        assert now == local("2025-09-02T07:50")
        assert now.hour == 7

    def test_wall_clock_is_aware(self):
        now = resolve_now(DENVER)
        assert now.tzinfo is not None
        assert abs(now - datetime.now(timezone.utc)) < timedelta(minutes=1)

    def test_localize_keeps_wall_time_for_naive(self):
        assert localize(datetime(2025, 12, 1, 8, 0), DENVER).utcoffset() == timedelta(hours=-7)

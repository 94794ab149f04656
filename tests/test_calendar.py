"""Tests für den Aufbau des Wochenkalenders."""

import logging

import pytest

from config.schema import CalendarConfig, GridConfig, TimeSlotConfig
from grid.calendar import build_weekly_calendar
from grid.colors import DEFAULT_COLOR, DEPARTMENT_COLORS
from models.course import Course
from models.department import Department
from models.schedule import ScheduleEntry
from models.schedule_data import ScheduleData
from models.teacher import Teacher
from models.timeslot import DayOfWeek


def _small_config(**grid_kw) -> CalendarConfig:
    """Raster 08:00–10:00 in 30 min, Mo–Fr."""
    return CalendarConfig(grid=GridConfig(
        time_slots=TimeSlotConfig(start_hour=8, end_hour=10, interval_minutes=30),
        day_names=list(DayOfWeek)[:5],
        **grid_kw,
    ))


def _entry(entry_id, start, end, day="Monday", dept="d1", teacher="t1") -> ScheduleEntry:
    return ScheduleEntry(id=entry_id, department_ref=dept, course_ref="c1",
                         teacher_ref=teacher, day=day, start_time=start, end_time=end)


@pytest.fixture
def data() -> ScheduleData:
    return ScheduleData(
        schedules=[
            _entry("a", "08:30", "09:30"),
            _entry("b", "08:00", "09:00", day="Tuesday", dept="d2", teacher="t2"),
        ],
        departments=[Department(id="d1", name="Computer Science"),
                     Department(id="d2", name="Languages")],
        courses=[Course(id="c1", name="Algorithms", code="CS101")],
        teachers=[Teacher(id="t1", firstname="Ada", lastname="Lovelace")],
    )


class TestBuildWeeklyCalendar:
    def test_slots_and_days(self, data):
        cal = build_weekly_calendar(data, _small_config())
        assert cal.slots == ["08:00", "08:30", "09:00", "09:30", "10:00"]
        assert [d.day for d in cal.days] == list(DayOfWeek)[:5]
        assert cal.interval_minutes == 30

    def test_cell_occupancy(self, data):
        """08:30–09:30 belegt 08:30 und 09:00, nicht 09:30."""
        cal = build_weekly_calendar(data, _small_config())
        monday = DayOfWeek.MONDAY
        assert [e.id for e in cal.cell(monday, "08:30")] == ["a"]
        assert [e.id for e in cal.cell(monday, "09:00")] == ["a"]
        assert cal.cell(monday, "09:30") == []
        assert cal.cell(DayOfWeek.SATURDAY, "08:30") == []

    def test_each_entry_placed_once(self, data):
        cal = build_weekly_calendar(data, _small_config())
        assert sorted(p.entry_id for p in cal.placements) == ["a", "b"]
        a = next(p for p in cal.placements if p.entry_id == "a")
        assert a.slot == "08:30"
        assert a.row_index == 1
        assert a.span == 2
        assert a.color == DEPARTMENT_COLORS["Computer Science"]
        assert a.details.teacher_name == "Ada Lovelace"

    def test_unknown_department_default_color_and_tba(self, data):
        cal = build_weekly_calendar(data, _small_config())
        b = next(p for p in cal.placements if p.entry_id == "b")
        assert b.color == DEFAULT_COLOR
        assert b.details.teacher_name == "TBA"

    def test_span_uses_grid_interval(self, data):
        config = CalendarConfig(grid=GridConfig(
            time_slots=TimeSlotConfig(start_hour=8, end_hour=10, interval_minutes=60)))
        data.schedules = [_entry("a", "08:00", "10:00")]
        cal = build_weekly_calendar(data, config)
        assert cal.placements[0].span == 2

    def test_department_filter(self, data):
        cal = build_weekly_calendar(data, _small_config(), department_filter="d2")
        assert [p.entry_id for p in cal.placements] == ["b"]
        assert cal.cell(DayOfWeek.MONDAY, "08:30") == []
        # Kennzahlen beziehen sich auf den ganzen Datensatz
        assert cal.stats.total_classes == 2

    def test_off_grid_entry_unplaced(self, data, caplog):
        data.schedules.append(_entry("c", "09:15", "09:45", day="Wednesday"))
        with caplog.at_level(logging.WARNING, logger="grid.calendar"):
            cal = build_weekly_calendar(data, _small_config())
        assert [e.id for e in cal.unplaced] == ["c"]
        assert "c" not in {p.entry_id for p in cal.placements}
        # Belegt trotzdem die Zelle 09:30
        assert [e.id for e in cal.cell(DayOfWeek.WEDNESDAY, "09:30")] == ["c"]
        assert "beginnt nicht auf einem Raster-Label" in caplog.text

    def test_overlapping_entries_share_cell(self, data):
        data.schedules.append(_entry("z", "08:30", "09:00", teacher="t3"))
        cal = build_weekly_calendar(data, _small_config())
        assert {e.id for e in cal.cell(DayOfWeek.MONDAY, "08:30")} == {"a", "z"}
        starts = [p.entry_id for p in cal.placements_for(DayOfWeek.MONDAY)]
        assert starts == ["a", "z"]

    def test_empty_interval_not_placed(self, data):
        data.schedules = [_entry("a", "08:30", "08:30")]
        cal = build_weekly_calendar(data, _small_config())
        # Leeres Intervall belegt keine Zelle und wird daher nicht platziert
        assert cal.placements == []
        assert [e.id for e in cal.unplaced] == ["a"]

    def test_lenient_config(self, data):
        data.schedules = [_entry("a", "kaputt", "09:00")]
        cal = build_weekly_calendar(data, _small_config(lenient_times=True))
        assert [e.id for e in cal.cell(DayOfWeek.MONDAY, "08:00")] == ["a"]

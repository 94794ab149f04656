"""Tests für Zellenbelegung, Start-Erkennung und Spannweite."""

import random
from collections import deque

import pytest

from grid.errors import ConfigurationError, InvalidTimeFormat
from grid.occupancy import is_class_start, occupies_slot, schedules_for_slot, time_slot_span
from grid.time_slots import generate_time_slots
from grid.timeutils import format_minutes
from models.department import Department
from models.schedule import ScheduleEntry
from models.timeslot import DayOfWeek


def _entry(start="08:30", end="09:30", day=DayOfWeek.MONDAY, dept="d1", **kw) -> ScheduleEntry:
    return ScheduleEntry(
        id=kw.pop("id", "e1"),
        department_ref=dept,
        course_ref=kw.pop("course", "c1"),
        teacher_ref=kw.pop("teacher", "t1"),
        day=day,
        start_time=start,
        end_time=end,
        **kw,
    )


# ─── BELEGUNG ─────────────────────────────────────────────────────────────────

class TestSchedulesForSlot:
    def test_half_open_interval(self):
        """08:30–09:30 belegt 08:30 und 09:00, aber nicht 09:30."""
        e = _entry()
        occupied = [s for s in generate_time_slots(8, 10, 30)
                    if schedules_for_slot([e], DayOfWeek.MONDAY, s)]
        assert occupied == ["08:30", "09:00"]

    def test_other_day_excluded(self):
        e = _entry(day=DayOfWeek.TUESDAY)
        assert schedules_for_slot([e], DayOfWeek.MONDAY, "08:30") == []
        assert schedules_for_slot([e], "Tuesday", "08:30") == [e]

    def test_department_filter_string_and_embedded(self):
        """Filter greift für ID-Referenz und eingebettetes Objekt gleich."""
        dept = Department(id="d2", name="Science")
        a = _entry(dept="d1", id="a")
        b = _entry(dept=dept, id="b")
        assert schedules_for_slot([a, b], DayOfWeek.MONDAY, "09:00", "d2") == [b]
        assert schedules_for_slot([a, b], DayOfWeek.MONDAY, "09:00", "d1") == [a]
        assert schedules_for_slot([a, b], DayOfWeek.MONDAY, "09:00", "") == [a, b]

    def test_none_input(self):
        assert schedules_for_slot(None, DayOfWeek.MONDAY, "09:00") == []

    def test_any_iterable(self):
        """Tupel, deque und Generator liefern dasselbe wie eine Liste."""
        a = _entry("09:00", "10:00", id="a")
        b = _entry("09:00", "10:00", day=DayOfWeek.TUESDAY, id="b")
        expected = schedules_for_slot([a, b], DayOfWeek.MONDAY, "09:30")
        assert expected == [a]
        assert schedules_for_slot((a, b), DayOfWeek.MONDAY, "09:30") == expected
        assert schedules_for_slot(deque([a, b]), DayOfWeek.MONDAY, "09:30") == expected
        assert schedules_for_slot((e for e in [a, b]), DayOfWeek.MONDAY, "09:30") == expected

    def test_invalid_day(self):
        with pytest.raises(ValueError):
            schedules_for_slot([_entry()], "Sunday", "09:00")

    def test_strict_invalid_time_raises(self):
        e = _entry(start="9:00")
        with pytest.raises(InvalidTimeFormat):
            schedules_for_slot([e], DayOfWeek.MONDAY, "09:00")

    def test_lenient_invalid_time_is_midnight(self):
        """Toleranter Modus: kaputter Beginn = 00:00, Eintrag belegt den Vormittag."""
        e = _entry(start="kaputt", end="09:00")
        assert schedules_for_slot([e], DayOfWeek.MONDAY, "08:00", lenient=True) == [e]

    def test_random_half_open_property(self):
        """Belegt genau dann, wenn start <= slot < end."""
        rng = random.Random(7)
        for _ in range(300):
            start = rng.randrange(0, 24 * 60, 5)
            end = rng.randrange(0, 24 * 60 + 1, 5)
            slot = rng.randrange(0, 24 * 60, 5)
            e = _entry(start=format_minutes(start), end=format_minutes(end))
            expected = start <= slot < end
            assert occupies_slot(e, format_minutes(slot)) is expected


# ─── START & SPANNWEITE ───────────────────────────────────────────────────────

class TestStartAndSpan:
    def test_is_class_start(self):
        e = _entry()
        assert is_class_start(e, "08:30")
        assert not is_class_start(e, "09:00")

    def test_off_grid_start_never_matches(self):
        """09:15 ist auf einem 30-Minuten-Raster nie ein Start."""
        e = _entry(start="09:15", end="10:15")
        assert not any(is_class_start(e, s) for s in generate_time_slots())

    def test_span_basic(self):
        assert time_slot_span("08:30", "09:30") == 2
        assert time_slot_span("08:00", "08:30") == 1
        assert time_slot_span("08:00", "10:00") == 4

    def test_span_rounds_up(self):
        assert time_slot_span("08:00", "08:45") == 2
        assert time_slot_span("08:00", "08:01") == 1

    def test_span_uses_interval(self):
        assert time_slot_span("08:00", "10:00", 60) == 2
        assert time_slot_span("08:00", "09:00", 15) == 4

    def test_span_empty_or_negative(self):
        assert time_slot_span("09:00", "09:00") == 0
        assert time_slot_span("10:00", "09:00") == -2

    def test_span_invalid_interval(self):
        with pytest.raises(ConfigurationError):
            time_slot_span("08:00", "09:00", 0)

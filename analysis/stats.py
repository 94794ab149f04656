"""Kennzahlen und Filter über eine Menge von Stundenplan-Einträgen."""

from collections import Counter
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel

from models.course import Course
from models.department import Department
from models.reference import resolve_reference
from models.schedule import ScheduleEntry
from models.teacher import Teacher
from models.timeslot import DayOfWeek


class ScheduleStats(BaseModel):
    """Übersichtszahlen für die Kopfzeile des Kalenders."""

    total_classes: int = 0
    active_departments: int = 0
    active_courses: int = 0
    active_teachers: int = 0
    classes_by_day: dict[str, int] = {}
    classes_by_department: dict[str, int] = {}


def schedule_stats(
    entries: Optional[Iterable[ScheduleEntry]],
    departments: Optional[Sequence[Department]] = None,
) -> ScheduleStats:
    """Zählt Einträge gesamt, je Tag und je Fachbereich sowie aktive Entitäten.

    "Aktiv" = mindestens ein Eintrag verweist auf die ID. Fachbereiche ohne
    auflösbaren Namen werden unter "Unknown" gezählt.
    """
    if entries is None:
        return ScheduleStats()
    entries = list(entries)

    by_day: Counter = Counter()
    by_department: Counter = Counter()
    for e in entries:
        by_day[e.day.value] += 1
        dept = resolve_reference(e.department_ref, departments)
        by_department[dept.name if dept else "Unknown"] += 1

    return ScheduleStats(
        total_classes=len(entries),
        active_departments=len({e.department_id for e in entries if e.department_id}),
        active_courses=len({e.course_id for e in entries if e.course_id}),
        active_teachers=len({e.teacher_id for e in entries if e.teacher_id}),
        classes_by_day=dict(by_day),
        classes_by_department=dict(by_department),
    )


# ─── Filter ───────────────────────────────────────────────────────────────────

class ScheduleFilters(BaseModel):
    """Filterleiste der Stundenplan-Übersicht. Leere Felder filtern nicht."""

    department: Optional[str] = None   # Fachbereichs-ID
    day: Optional[DayOfWeek] = None
    semester: Optional[str] = None
    teacher: Optional[str] = None      # Lehrkraft-ID
    search_term: Optional[str] = None  # Kursname, Kurscode oder Lehrkraft


def filter_schedules(
    entries: Optional[Iterable[ScheduleEntry]],
    filters: ScheduleFilters,
    courses: Optional[Sequence[Course]] = None,
    teachers: Optional[Sequence[Teacher]] = None,
) -> list[ScheduleEntry]:
    """Wendet alle gesetzten Filter an (UND-verknüpft).

    Semester: Semester des Kurses, sonst das Semester des Eintrags.
    Suche: Groß-/Kleinschreibung egal, Teilstring in Kursname, Kurscode
    oder "Vorname Nachname" der Lehrkraft.
    """
    if entries is None:
        return []

    term = (filters.search_term or "").strip().lower()
    result: list[ScheduleEntry] = []
    for e in entries:
        if filters.department and e.department_id != filters.department:
            continue
        if filters.day and e.day != filters.day:
            continue
        if filters.teacher and e.teacher_id != filters.teacher:
            continue

        course = resolve_reference(e.course_ref, courses)
        if filters.semester:
            semester = (course.semester if course else None) or e.semester
            if semester != filters.semester:
                continue

        if term:
            teacher = resolve_reference(e.teacher_ref, teachers)
            haystack = [
                course.name if course else (e.course_name or ""),
                course.code if course else (e.course_code or ""),
                teacher.full_name if teacher else (e.teacher_name or ""),
            ]
            if not any(term in h.lower() for h in haystack):
                continue

        result.append(e)
    return result

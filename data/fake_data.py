"""Testdaten-Generator für den Wochenkalender.

Erzeugt einen reproduzierbaren, konfliktfreien Datensatz:
  - sechs Fachbereiche mit bekannter Farbe plus einer ohne (Standardfarbe)
  - je Fachbereich 3 Kurse und 2 Lehrkräfte
  - je Kurs zwei Termine pro Woche auf dem konfigurierten Raster
Ein Teil der Einträge trägt eingebettete Objekte statt IDs, wie es die
API nach einem populate liefert.
"""

import logging
import random
from typing import Optional

from analysis.conflicts import find_conflicts
from config.schema import CalendarConfig
from grid.time_slots import generate_time_slots_for
from grid.timeutils import format_minutes, to_minutes
from models.course import Course
from models.department import Department
from models.schedule import ScheduleEntry
from models.schedule_data import ScheduleData
from models.teacher import Teacher

logger = logging.getLogger(__name__)

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Ben", "Clara", "David", "Eva", "Felix", "Grace", "Hannah",
    "Ian", "Julia", "Karl", "Lena", "Maria", "Noah", "Olivia", "Paul",
]

_LAST_NAMES = [
    "Müller", "Smith", "Schneider", "Garcia", "Weber", "Johnson",
    "Becker", "Brown", "Koch", "Davis", "Wolf", "Miller", "Klein", "Wilson",
]

# Fachbereich → (Kürzel, Kurse)
_DEPARTMENTS: dict[str, tuple[str, list[str]]] = {
    "Computer Science":        ("CS",  ["Algorithms", "Databases", "Operating Systems"]),
    "Business Administration": ("BA",  ["Accounting", "Marketing", "Management"]),
    "Engineering":             ("ENG", ["Statics", "Thermodynamics", "Circuits"]),
    "Arts & Humanities":       ("AH",  ["Art History", "Philosophy", "Literature"]),
    "Mathematics":             ("MATH", ["Calculus", "Linear Algebra", "Statistics"]),
    "Science":                 ("SCI", ["Physics", "Chemistry", "Biology"]),
    "Languages":               ("LANG", ["Spanish", "French", "German"]),
}

_SEMESTERS = ["Fall 2024", "Spring 2025"]
_DURATIONS = [60, 90, 120]
_ROOMS = ["A101", "A102", "B201", "B202", "C301", "Lab 1", "Lab 2"]


class DemoDataGenerator:
    """Erzeugt einen Demo-Datensatz passend zur Kalender-Konfiguration."""

    SESSIONS_PER_COURSE = 2
    MAX_ATTEMPTS = 50

    def __init__(self, config: CalendarConfig, seed: int = 42):
        self.config = config
        self.rng = random.Random(seed)

    def _object_id(self) -> str:
        return f"{self.rng.getrandbits(96):024x}"

    def generate(self) -> ScheduleData:
        departments: list[Department] = []
        courses: list[Course] = []
        teachers: list[Teacher] = []
        first_names = list(_FIRST_NAMES)
        self.rng.shuffle(first_names)

        for i, (name, (code, course_names)) in enumerate(_DEPARTMENTS.items()):
            dept = Department(id=self._object_id(), name=name, code=code)
            departments.append(dept)
            for j, course_name in enumerate(course_names, 1):
                courses.append(Course(
                    id=self._object_id(),
                    name=course_name,
                    code=f"{code}{100 + j * 10 + i}",
                    department_id=dept.id,
                    semester=self.rng.choice(_SEMESTERS),
                    credits=self.rng.choice([3, 4, 5]),
                ))
            for _ in range(2):
                first = first_names[len(teachers) % len(first_names)]
                last = self.rng.choice(_LAST_NAMES)
                teachers.append(Teacher(
                    id=self._object_id(),
                    firstname=first,
                    lastname=last,
                    username=f"{first}.{last}".lower(),
                    email=f"{first}.{last}@school.example".lower(),
                    department=dept.id,
                ))

        schedules = self._generate_schedules(departments, courses, teachers)
        logger.info(
            f"Demo-Daten: {len(departments)} Fachbereiche, {len(courses)} Kurse, "
            f"{len(teachers)} Lehrkräfte, {len(schedules)} Einträge"
        )
        return ScheduleData(
            schedules=schedules,
            departments=departments,
            courses=courses,
            teachers=teachers,
        )

    def _generate_schedules(
        self,
        departments: list[Department],
        courses: list[Course],
        teachers: list[Teacher],
    ) -> list[ScheduleEntry]:
        ts = self.config.grid.time_slots
        # Letztes Label ist die Schlusskante → kein Beginn
        starts = generate_time_slots_for(ts)[:-1]
        grid_end = ts.end_hour * 60
        days = list(self.config.grid.day_names)
        dept_map = {d.id: d for d in departments}
        schedules: list[ScheduleEntry] = []

        for course in courses:
            dept_teachers = [t for t in teachers if t.department == course.department_id]
            for _ in range(self.SESSIONS_PER_COURSE):
                entry = self._place(course, dept_teachers, dept_map[course.department_id],
                                    starts, days, grid_end, schedules)
                if entry is None:
                    logger.warning(f"Kein freier Termin für Kurs {course.code}")
                    continue
                schedules.append(entry)
        return schedules

    def _place(
        self,
        course: Course,
        dept_teachers: list[Teacher],
        department: Department,
        starts: list[str],
        days: list,
        grid_end: int,
        existing: list[ScheduleEntry],
    ) -> Optional[ScheduleEntry]:
        """Sucht zufällig einen konfliktfreien Termin (None nach MAX_ATTEMPTS)."""
        for _ in range(self.MAX_ATTEMPTS):
            start = self.rng.choice(starts)
            duration = self.rng.choice(_DURATIONS)
            end = to_minutes(start) + duration
            if end > grid_end:
                continue
            teacher = self.rng.choice(dept_teachers)
            embedded = self.rng.random() < 0.3
            candidate = ScheduleEntry(
                id=self._object_id(),
                department_ref=department if embedded else department.id,
                course_ref=course if embedded else course.id,
                teacher_ref=teacher if embedded else teacher.id,
                day=self.rng.choice(days),
                start_time=start,
                end_time=format_minutes(end),
                semester=course.semester or "",
                room=self.rng.choice(_ROOMS),
            )
            if not find_conflicts(candidate, existing):
                return candidate
        return None

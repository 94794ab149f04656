"""Auflösung der Anzeigedetails eines Eintrags (Kurs, Lehrkraft, Fachbereich)."""

from typing import Optional, Sequence

from pydantic import BaseModel

from models.course import Course
from models.department import Department
from models.reference import resolve_reference
from models.schedule import ScheduleEntry
from models.teacher import Teacher

# Platzhalter sind für Nutzer sichtbar und je Feld verschieden.
FALLBACK_COURSE_CODE = "N/A"
FALLBACK_COURSE_NAME = "Unknown Course"
FALLBACK_TEACHER_NAME = "TBA"
FALLBACK_DEPARTMENT_NAME = "Unknown Dept"
FALLBACK_SEMESTER = "N/A"


class ScheduleDetails(BaseModel):
    """Aufgelöstes Anzeige-Bündel eines Eintrags (wird nie gespeichert)."""

    course_code: str
    course_name: str
    teacher_name: str
    department_name: str
    semester: str
    time_range: str


def _first(*values: Optional[str], fallback: str) -> str:
    return next((v for v in values if v), fallback)


def resolve_details(
    entry: ScheduleEntry,
    courses: Optional[Sequence[Course]],
    teachers: Optional[Sequence[Teacher]],
    departments: Optional[Sequence[Department]],
) -> ScheduleDetails:
    """Baut die ScheduleDetails eines Eintrags.

    Vorrang je Feld: denormalisiertes Feld > eingebettetes Objekt >
    nachgeschlagenes Objekt > Platzhalter. Nicht auflösbare Referenzen
    führen nie zu einem Fehler.
    """
    course = resolve_reference(entry.course_ref, courses)
    teacher = resolve_reference(entry.teacher_ref, teachers)
    department = resolve_reference(entry.department_ref, departments)

    return ScheduleDetails(
        course_code=_first(entry.course_code, course and course.code,
                           fallback=FALLBACK_COURSE_CODE),
        course_name=_first(entry.course_name, course and course.name,
                           fallback=FALLBACK_COURSE_NAME),
        teacher_name=_first(entry.teacher_name, teacher and teacher.full_name,
                            fallback=FALLBACK_TEACHER_NAME),
        department_name=_first(entry.department_name, department and department.name,
                               fallback=FALLBACK_DEPARTMENT_NAME),
        semester=_first(entry.semester, course and course.semester,
                        fallback=FALLBACK_SEMESTER),
        time_range=entry.time_range,
    )

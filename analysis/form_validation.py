"""Prüfung des Formulars "Neuer Stundenplan-Eintrag" vor dem Absenden."""

import re
from typing import Optional, Sequence

from pydantic import BaseModel

from grid.timeutils import is_valid_time, to_minutes
from models.course import Course
from models.schedule import ScheduleEntry
from models.teacher import Teacher
from models.timeslot import DayOfWeek

# IDs der Datenbank sind 24-stellige Hex-ObjectIds
OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

_REQUIRED = {
    "department": "Department is required",
    "course": "Course is required",
    "teacher": "Teacher is required",
    "day": "Day is required",
    "start_time": "Start time is required",
    "end_time": "End time is required",
}


class ScheduleForm(BaseModel):
    """Formularwerte wie sie aus der Oberfläche kommen (alles Strings)."""

    department: str = ""
    course: str = ""
    teacher: str = ""
    day: str = ""
    start_time: str = ""
    end_time: str = ""

    def to_entry(
        self,
        courses: Optional[Sequence[Course]] = None,
        default_semester: str = "Spring 2025",
    ) -> ScheduleEntry:
        """Baut den Eintrag für die API; Semester kommt vom gewählten Kurs."""
        course = next((c for c in courses or [] if c.id == self.course), None)
        return ScheduleEntry(
            department_ref=self.department,
            course_ref=self.course,
            teacher_ref=self.teacher,
            day=DayOfWeek(self.day),
            start_time=self.start_time,
            end_time=self.end_time,
            semester=(course.semester if course else None) or default_semester,
        )


def validate_schedule_form(
    form: ScheduleForm, teachers: Sequence[Teacher]
) -> dict[str, str]:
    """Gibt {feld: Fehlermeldung} zurück; leer = Formular gültig.

    Pro Feld wird nur die letzte zutreffende Meldung behalten.
    """
    errors: dict[str, str] = {}

    for field, message in _REQUIRED.items():
        if not getattr(form, field):
            errors[field] = message

    if form.department and not OBJECT_ID_RE.match(form.department):
        errors["department"] = "Invalid department ID format"
    if form.course and not OBJECT_ID_RE.match(form.course):
        errors["course"] = "Invalid course ID format"

    if form.teacher:
        # Lehrkraft muss in der Auswahl stehen; ObjectId-Format nur bei 24 Zeichen prüfen
        if not any(t.id == form.teacher for t in teachers):
            errors["teacher"] = "Please select a valid teacher"
        elif len(form.teacher) == 24 and not OBJECT_ID_RE.match(form.teacher):
            errors["teacher"] = "Invalid teacher ID format"

    if form.day and form.day not in {d.value for d in DayOfWeek}:
        errors["day"] = "Invalid day"

    for field in ("start_time", "end_time"):
        value = getattr(form, field)
        if value and not is_valid_time(value):
            errors[field] = "Invalid time format (HH:MM)"

    if ("start_time" not in errors and "end_time" not in errors
            and form.start_time and form.end_time):
        if to_minutes(form.start_time) >= to_minutes(form.end_time):
            errors["end_time"] = "End time must be after start time"

    return errors

"""Datenmodell für einen Stundenplan-Eintrag (Pydantic v2)."""

from typing import Optional

from pydantic import Field

from models.base import ApiModel
from models.reference import CourseRef, DepartmentRef, TeacherRef, reference_id
from models.timeslot import DayOfWeek


class ScheduleEntry(ApiModel):
    """Eine wöchentlich stattfindende Unterrichtseinheit.

    Fachbereich, Kurs und Lehrkraft sind Referenzen (ID oder eingebettet).
    Die optionalen ``*_name``/``course_code``-Felder sind denormalisierte
    Anzeigewerte der API und haben bei der Anzeige Vorrang.
    """

    id: str = Field("", alias="_id")          # leer = noch nicht gespeichert
    department_ref: DepartmentRef = Field(alias="departmentId")
    course_ref: CourseRef = Field(alias="courseId")
    teacher_ref: TeacherRef = Field(alias="teacherId")
    day: DayOfWeek
    start_time: str                            # "HH:MM"
    end_time: str                              # "HH:MM"
    semester: str = ""
    room: Optional[str] = None
    link: Optional[str] = None
    is_live: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    # Denormalisierte Anzeigefelder
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    teacher_name: Optional[str] = None
    department_name: Optional[str] = None

    @property
    def department_id(self) -> Optional[str]:
        return reference_id(self.department_ref)

    @property
    def course_id(self) -> Optional[str]:
        return reference_id(self.course_ref)

    @property
    def teacher_id(self) -> Optional[str]:
        return reference_id(self.teacher_ref)

    @property
    def time_range(self) -> str:
        """Anzeige "08:30 - 09:30" (nicht lokalisiert)."""
        return f"{self.start_time} - {self.end_time}"

    def __str__(self) -> str:
        return f"{self.id or '(neu)'} {self.day.value} {self.time_range}"

"""ScheduleData: alle Sammlungen der REST-API in einem Datensatz (Pydantic v2)."""

from collections import Counter

from pydantic import BaseModel

from models.course import Course
from models.department import Department
from models.schedule import ScheduleEntry
from models.teacher import Teacher


class ScheduleData(BaseModel):
    """Stundenplan-Einträge plus die Nachschlage-Tabellen, auf die sie verweisen."""

    schedules: list[ScheduleEntry] = []
    departments: list[Department] = []
    courses: list[Course] = []
    teachers: list[Teacher] = []

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        by_day = Counter(e.day.value for e in self.schedules)
        days = ", ".join(f"{d[:3]} {n}" for d, n in by_day.items())
        lines = [
            f"Einträge: {len(self.schedules)}" + (f" ({days})" if days else ""),
            f"Fachbereiche: {len(self.departments)}",
            f"Kurse: {len(self.courses)}",
            f"Lehrkräfte: {len(self.teachers)}",
        ]
        return "\n".join(lines)

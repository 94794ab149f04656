"""Wochentage des Wochenkalenders."""

from enum import Enum


class DayOfWeek(str, Enum):
    """Unterrichtstage (Sonntag wird nicht geplant)."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @property
    def short(self) -> str:
        """Abgekürzter Tagesname ("Mon")."""
        return self.value[:3]


WEEKDAYS: tuple[DayOfWeek, ...] = tuple(DayOfWeek)

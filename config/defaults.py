from config.schema import (
    CalendarConfig,
    ColorConfig,
    ConflictConfig,
    GridConfig,
    TimeSlotConfig,
)
from models.timeslot import DayOfWeek


def default_time_slots() -> TimeSlotConfig:
    """Standard-Raster der Oberfläche: 08:00 bis 18:00 in 30-Minuten-Schritten.

    Ergibt 21 Labels; 18:00 ist die Schlusskante.
    """
    return TimeSlotConfig(start_hour=8, end_hour=18, interval_minutes=30)


def default_grid() -> GridConfig:
    """Montag bis Samstag, strikte Uhrzeit-Prüfung."""
    return GridConfig(
        time_slots=default_time_slots(),
        day_names=[
            DayOfWeek.MONDAY,
            DayOfWeek.TUESDAY,
            DayOfWeek.WEDNESDAY,
            DayOfWeek.THURSDAY,
            DayOfWeek.FRIDAY,
            DayOfWeek.SATURDAY,
        ],
        lenient_times=False,
        default_semester="Spring 2025",
    )


def default_calendar_config() -> CalendarConfig:
    """Vollständige Default-Konfiguration."""
    return CalendarConfig(
        institution_name="Demo School",
        grid=default_grid(),
        colors=ColorConfig(),
        conflicts=ConflictConfig(check_rooms=True),
    )

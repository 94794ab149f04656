"""Wochenplan-Raster: reine Funktionen ohne Zustand."""

from .errors import (
    ScheduleGridError, ConfigurationError, InvalidTimeFormat,
    SchedulingConflictError, ScheduleImportError, InvalidScheduleEntry,
)
from .timeutils import to_minutes
from .time_slots import generate_time_slots, generate_time_slots_for
from .occupancy import schedules_for_slot, is_class_start, time_slot_span
from .details import ScheduleDetails, resolve_details
from .colors import color_class_for
from .calendar import WeeklyCalendar, build_weekly_calendar

__all__ = [
    "ScheduleGridError",
    "ConfigurationError",
    "InvalidTimeFormat",
    "SchedulingConflictError",
    "ScheduleImportError",
    "InvalidScheduleEntry",
    "to_minutes",
    "generate_time_slots",
    "generate_time_slots_for",
    "schedules_for_slot",
    "is_class_start",
    "time_slot_span",
    "ScheduleDetails",
    "resolve_details",
    "color_class_for",
    "WeeklyCalendar",
    "build_weekly_calendar",
]

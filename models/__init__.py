from models.timeslot import DayOfWeek, WEEKDAYS
from models.department import Department
from models.course import Course
from models.teacher import Teacher
from models.reference import reference_id, resolve_reference
from models.schedule import ScheduleEntry
from models.schedule_data import ScheduleData

__all__ = [
    "DayOfWeek",
    "WEEKDAYS",
    "Department",
    "Course",
    "Teacher",
    "reference_id",
    "resolve_reference",
    "ScheduleEntry",
    "ScheduleData",
]

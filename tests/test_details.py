"""Tests für Referenz-Auflösung und Anzeigedetails."""

from grid.details import resolve_details
from models.course import Course
from models.department import Department
from models.reference import reference_id, resolve_reference
from models.schedule import ScheduleEntry
from models.teacher import Teacher


DEPT = Department(id="d1", name="Computer Science", code="CS")
COURSE = Course(id="c1", name="Algorithms", code="CS101", department_id="d1", semester="Fall 2024")
TEACHER = Teacher(id="t1", firstname="Ada", lastname="Lovelace")


def _entry(**kw) -> ScheduleEntry:
    data = dict(id="e1", department_ref="d1", course_ref="c1", teacher_ref="t1",
                day="Monday", start_time="08:00", end_time="09:00")
    data.update(kw)
    return ScheduleEntry(**data)


class TestReference:
    def test_reference_id(self):
        assert reference_id("d1") == "d1"
        assert reference_id(DEPT) == "d1"
        assert reference_id("") is None
        assert reference_id(None) is None

    def test_resolve_reference(self):
        assert resolve_reference("d1", [DEPT]) is DEPT
        assert resolve_reference(DEPT, None) is DEPT
        assert resolve_reference("zz", [DEPT]) is None
        assert resolve_reference("d1", None) is None

    def test_entry_parses_api_payload(self):
        """camelCase-Payload mit eingebettetem Fachbereich wird gelesen."""
        e = ScheduleEntry.model_validate({
            "_id": "e9",
            "departmentId": {"_id": "d1", "name": "Computer Science"},
            "courseId": "c1",
            "teacherId": "t1",
            "day": "Friday",
            "startTime": "10:00",
            "endTime": "11:30",
            "unknownField": 1,
        })
        assert isinstance(e.department_ref, Department)
        assert e.department_id == "d1"
        assert e.course_id == "c1"
        assert e.time_range == "10:00 - 11:30"
        assert e.to_api()["departmentId"]["_id"] == "d1"


class TestResolveDetails:
    def test_lookup(self):
        d = resolve_details(_entry(), [COURSE], [TEACHER], [DEPT])
        assert d.course_code == "CS101"
        assert d.course_name == "Algorithms"
        assert d.teacher_name == "Ada Lovelace"
        assert d.department_name == "Computer Science"
        assert d.semester == "Fall 2024"
        assert d.time_range == "08:00 - 09:00"

    def test_missing_teacher_is_tba(self):
        """Lehrkraft-ID ohne Treffer in der Tabelle → "TBA"."""
        d = resolve_details(_entry(), [COURSE], [], [DEPT])
        assert d.teacher_name == "TBA"

    def test_all_fallbacks(self):
        d = resolve_details(_entry(), None, None, None)
        assert d.course_code == "N/A"
        assert d.course_name == "Unknown Course"
        assert d.teacher_name == "TBA"
        assert d.department_name == "Unknown Dept"
        assert d.semester == "N/A"

    def test_embedded_equals_lookup(self):
        """Eingebettete Objekte liefern dasselbe wie ID + Tabelle."""
        by_id = resolve_details(_entry(), [COURSE], [TEACHER], [DEPT])
        embedded = resolve_details(
            _entry(department_ref=DEPT, course_ref=COURSE, teacher_ref=TEACHER),
            None, None, None,
        )
        assert by_id == embedded

    def test_denormalized_fields_win(self):
        e = _entry(course_name="Override", teacher_name="Dr. X", semester="Spring 2025")
        d = resolve_details(e, [COURSE], [TEACHER], [DEPT])
        assert d.course_name == "Override"
        assert d.teacher_name == "Dr. X"
        assert d.semester == "Spring 2025"
        assert d.course_code == "CS101"

"""Tests für den Import/Export der JSON-Sammlungen."""

import json

import pytest

from config.defaults import default_calendar_config
from data.fake_data import DemoDataGenerator
from data.json_import import (
    load_collection,
    load_schedule_data,
    save_schedule_data,
    unwrap_response,
)
from grid.errors import ScheduleImportError
from models.department import Department
from models.schedule import ScheduleEntry


SCHEDULE = {
    "_id": "e1",
    "departmentId": "d1",
    "courseId": {"_id": "c1", "name": "Algorithms", "code": "CS101"},
    "teacherId": "t1",
    "day": "Monday",
    "startTime": "08:30",
    "endTime": "09:30",
    "semester": "Fall 2024",
}


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestUnwrapResponse:
    def test_plain_list(self):
        assert unwrap_response([1, 2]) == [1, 2]

    def test_envelope(self):
        assert unwrap_response({"success": True, "data": [1]}) == [1]

    def test_api_error(self):
        with pytest.raises(ScheduleImportError, match="kaputt"):
            unwrap_response({"success": False, "data": [], "message": "kaputt"})

    def test_wrong_shape(self):
        with pytest.raises(ScheduleImportError):
            unwrap_response({"items": []})


class TestLoadScheduleData:
    def test_only_schedules(self, tmp_path):
        """Fehlende Nachschlage-Dateien ergeben leere Listen."""
        _write(tmp_path / "schedules.json", {"success": True, "data": [SCHEDULE]})
        data = load_schedule_data(tmp_path)
        assert len(data.schedules) == 1
        assert data.departments == [] and data.teachers == []
        entry = data.schedules[0]
        assert entry.course_id == "c1"
        assert entry.start_time == "08:30"

    def test_all_collections(self, tmp_path):
        _write(tmp_path / "schedules.json", [SCHEDULE])
        _write(tmp_path / "departments.json", [{"_id": "d1", "name": "Computer Science"}])
        _write(tmp_path / "teachers.json",
               [{"_id": "t1", "firstname": " Ada ", "lastname": "Lovelace"}])
        _write(tmp_path / "courses.json", [])
        data = load_schedule_data(tmp_path)
        assert data.departments[0].name == "Computer Science"
        assert data.teachers[0].full_name == "Ada Lovelace"

    def test_missing_schedules(self, tmp_path):
        with pytest.raises(ScheduleImportError, match="schedules.json"):
            load_schedule_data(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ScheduleImportError):
            load_schedule_data(tmp_path / "gibt_es_nicht")

    def test_invalid_json(self, tmp_path):
        (tmp_path / "schedules.json").write_text("{kein json", encoding="utf-8")
        with pytest.raises(ScheduleImportError, match="kein gültiges JSON"):
            load_schedule_data(tmp_path)

    def test_invalid_record(self, tmp_path):
        _write(tmp_path / "schedules.json", [{**SCHEDULE, "day": "Sunday"}])
        with pytest.raises(ScheduleImportError, match="Datensatz 0"):
            load_collection(tmp_path / "schedules.json", ScheduleEntry)


class TestSaveScheduleData:
    def test_envelope_and_aliases(self, tmp_path):
        data = DemoDataGenerator(default_calendar_config(), seed=1).generate()
        save_schedule_data(data, tmp_path)
        raw = json.loads((tmp_path / "schedules.json").read_text(encoding="utf-8"))
        assert raw["success"] is True
        first = raw["data"][0]
        assert "_id" in first and "startTime" in first

        loaded = load_schedule_data(tmp_path)
        assert len(loaded.schedules) == len(data.schedules)
        assert {e.id for e in loaded.schedules} == {e.id for e in data.schedules}
        assert load_collection(tmp_path / "departments.json", Department)[0].name \
            == data.departments[0].name

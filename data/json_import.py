"""Import der JSON-Sammlungen, wie sie die REST-API ausliefert.

Erwartete Dateien in einem Verzeichnis:
  schedules.json     (Pflicht)
  departments.json   (optional)
  courses.json       (optional)
  teachers.json      (optional)

Jede Datei ist entweder ein JSON-Array oder die API-Hülle
``{"success": true, "data": [...]}``.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from grid.errors import ScheduleImportError
from models.course import Course
from models.department import Department
from models.schedule import ScheduleEntry
from models.schedule_data import ScheduleData
from models.teacher import Teacher

logger = logging.getLogger(__name__)

COLLECTION_FILES: dict[str, tuple[str, type[BaseModel]]] = {
    "schedules":   ("schedules.json", ScheduleEntry),
    "departments": ("departments.json", Department),
    "courses":     ("courses.json", Course),
    "teachers":    ("teachers.json", Teacher),
}


def unwrap_response(payload, source: str = "<payload>") -> list:
    """Entfernt die API-Hülle und gibt die Liste der Datensätze zurück."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "data" in payload:
        if payload.get("success") is False:
            raise ScheduleImportError(
                f"{source}: API meldet Fehler: {payload.get('message', 'ohne Meldung')}")
        data = payload["data"]
        if isinstance(data, list):
            return data
    raise ScheduleImportError(
        f"{source}: erwartet JSON-Array oder {{\"success\": ..., \"data\": [...]}}")


def load_collection(path: Path, model: type[BaseModel]) -> list:
    """Liest eine Sammlung und validiert jeden Datensatz gegen model."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ScheduleImportError(f"{path}: kein gültiges JSON ({e})") from e

    items = []
    for index, raw in enumerate(unwrap_response(payload, str(path))):
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            raise ScheduleImportError(
                f"{path}: Datensatz {index} ungültig:\n{e}") from e
    logger.info(f"{path.name}: {len(items)} Datensätze gelesen")
    return items


def load_schedule_data(directory: Path) -> ScheduleData:
    """Liest alle Sammlungen aus directory zu einem ScheduleData-Datensatz."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ScheduleImportError(f"Verzeichnis nicht gefunden: {directory}")

    collections: dict[str, list] = {}
    for key, (filename, model) in COLLECTION_FILES.items():
        path = directory / filename
        if not path.exists():
            if key == "schedules":
                raise ScheduleImportError(f"Pflichtdatei fehlt: {path}")
            logger.warning(f"{filename} fehlt – Anzeige nutzt Platzhalter")
            collections[key] = []
            continue
        collections[key] = load_collection(path, model)
    return ScheduleData(**collections)


def save_schedule_data(data: ScheduleData, directory: Path) -> None:
    """Schreibt die Sammlungen im API-Format (eine Datei je Sammlung)."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    for key, (filename, _model) in COLLECTION_FILES.items():
        records = [item.to_api() for item in getattr(data, key)]
        with open(directory / filename, "w", encoding="utf-8") as f:
            json.dump({"success": True, "data": records}, f, indent=2, ensure_ascii=False)

"""Fremdschlüssel, die entweder als ID oder als eingebettetes Objekt kommen.

Die REST-API liefert z.B. ``departmentId`` mal als String, mal (nach einem
populate) als vollständigen Fachbereich. Alle Zugriffe laufen über die
beiden Funktionen hier, nirgends sonst wird auf den Typ verzweigt.
"""

from typing import Iterable, Optional, TypeVar, Union

from models.course import Course
from models.department import Department
from models.teacher import Teacher

T = TypeVar("T", Department, Course, Teacher)

DepartmentRef = Union[Department, str]
CourseRef = Union[Course, str]
TeacherRef = Union[Teacher, str]


def reference_id(ref) -> Optional[str]:
    """Gibt die ID hinter einer Referenz zurück (None wenn leer)."""
    if ref is None:
        return None
    if isinstance(ref, str):
        return ref or None
    return ref.id


def resolve_reference(
    ref: Union[T, str, None], lookup: Optional[Iterable[T]]
) -> Optional[T]:
    """Löst eine Referenz auf.

    Eingebettetes Objekt → direkt; ID → Suche per ``id`` in lookup;
    nicht gefunden oder leer → None (nie ein Fehler).
    """
    if ref is None:
        return None
    if not isinstance(ref, str):
        return ref
    if not ref or not lookup:
        return None
    return next((item for item in lookup if item.id == ref), None)

"""Farbzuordnung der Fachbereiche für die Kalenderblöcke."""

import hashlib
from typing import Mapping, Optional, Sequence, Union

from models.department import Department
from models.reference import resolve_reference

DEFAULT_COLOR = "bg-gray-50 border-gray-200 text-gray-800"

# Namensbasierte Standardtabelle der alten Oberfläche
DEPARTMENT_COLORS: dict[str, str] = {
    "Computer Science":        "bg-blue-50 border-blue-200 text-blue-800",
    "Business Administration": "bg-green-50 border-green-200 text-green-800",
    "Engineering":             "bg-purple-50 border-purple-200 text-purple-800",
    "Arts & Humanities":       "bg-yellow-50 border-yellow-200 text-yellow-800",
    "Mathematics":             "bg-red-50 border-red-200 text-red-800",
    "Science":                 "bg-indigo-50 border-indigo-200 text-indigo-800",
}

# Palette für hash_fallback; Reihenfolge nie ändern (verschiebt sonst alle Farben)
HASH_PALETTE: tuple[str, ...] = (
    "bg-blue-50 border-blue-200 text-blue-800",
    "bg-green-50 border-green-200 text-green-800",
    "bg-purple-50 border-purple-200 text-purple-800",
    "bg-yellow-50 border-yellow-200 text-yellow-800",
    "bg-red-50 border-red-200 text-red-800",
    "bg-indigo-50 border-indigo-200 text-indigo-800",
    "bg-pink-50 border-pink-200 text-pink-800",
    "bg-teal-50 border-teal-200 text-teal-800",
)

# Füllfarbe (RRGGBB, ohne #) je Farbname für Excel und Terminal
BUCKET_HEX: dict[str, str] = {
    "blue":   "DBEAFE",
    "green":  "DCFCE7",
    "purple": "F3E8FF",
    "yellow": "FEF9C3",
    "red":    "FEE2E2",
    "indigo": "E0E7FF",
    "pink":   "FCE7F3",
    "teal":   "CCFBF1",
    "gray":   "F3F4F6",
}


def bucket_name(token: str) -> str:
    """Farbname eines Stil-Tokens ("bg-blue-50 ..." → "blue")."""
    for part in token.split():
        if part.startswith("bg-"):
            pieces = part.split("-")
            if len(pieces) >= 2:
                return pieces[1]
    return "gray"


def hash_bucket(key: str, palette: Sequence[str] = HASH_PALETTE) -> str:
    """Stabile Palettenfarbe für key (gleich über Prozesse hinweg)."""
    digest = hashlib.sha1(key.encode("utf-8")).digest()
    return palette[int.from_bytes(digest[:4], "big") % len(palette)]


def color_class_for(
    department_ref: Union[Department, str, None],
    departments: Optional[Sequence[Department]],
    *,
    id_colors: Optional[Mapping[str, str]] = None,
    name_colors: Mapping[str, str] = DEPARTMENT_COLORS,
    default: str = DEFAULT_COLOR,
    hash_fallback: bool = False,
) -> str:
    """Stil-Token für einen Fachbereich.

    Reihenfolge: ID-Tabelle > Namens-Tabelle > (optional) Hash der ID >
    default. Unbekannte oder nur ähnlich geschriebene Namen landen beim
    default.
    """
    department = resolve_reference(department_ref, departments)
    dept_id = department.id if department else (
        department_ref if isinstance(department_ref, str) else None)
    name = department.name if department else "Unknown"

    if id_colors and dept_id and dept_id in id_colors:
        return id_colors[dept_id]
    if name in name_colors:
        return name_colors[name]
    if hash_fallback and dept_id:
        return hash_bucket(dept_id)
    return default

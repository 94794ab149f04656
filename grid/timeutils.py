"""Umrechnung von "HH:MM"-Uhrzeiten in Minuten seit Mitternacht."""

import re

from grid.errors import InvalidTimeFormat

_TIME_RE = re.compile(r"^([01]\d|2[0-4]):([0-5]\d)$")


def to_minutes(value: str, lenient: bool = False) -> int:
    """Wandelt "HH:MM" in Minuten seit Mitternacht um.

    Strikt (Standard): alles außer "00:00".."24:00" → InvalidTimeFormat.
    lenient=True verhält sich wie die alte Web-Oberfläche: fehlende oder
    nicht-numerische Teile zählen als 0, Nicht-Strings ergeben 0.
    """
    if lenient:
        return _to_minutes_lenient(value)
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)
    match = _TIME_RE.match(value)
    if match is None:
        raise InvalidTimeFormat(value)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours == 24 and minutes != 0:
        raise InvalidTimeFormat(value)
    return hours * 60 + minutes


def _to_minutes_lenient(value) -> int:
    if not value or not isinstance(value, str):
        return 0
    parts = value.split(":")
    hours = _int_or_zero(parts[0])
    minutes = _int_or_zero(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def _int_or_zero(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def format_minutes(total: int) -> str:
    """Minuten seit Mitternacht → "HH:MM"."""
    return f"{total // 60:02d}:{total % 60:02d}"


def is_valid_time(value) -> bool:
    """True wenn value eine gültige "HH:MM"-Uhrzeit ist."""
    try:
        to_minutes(value)
    except InvalidTimeFormat:
        return False
    return True

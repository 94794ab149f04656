"""Belegung der Rasterzellen: welche Einträge liegen in welchem Slot."""

import math
from typing import Iterable, Optional

from grid.errors import ConfigurationError
from grid.timeutils import to_minutes
from models.schedule import ScheduleEntry
from models.timeslot import DayOfWeek


def occupies_slot(entry: ScheduleEntry, slot: str, lenient: bool = False) -> bool:
    """True wenn slot im halboffenen Intervall [start, end) des Eintrags liegt."""
    slot_minutes = to_minutes(slot, lenient)
    start = to_minutes(entry.start_time, lenient)
    end = to_minutes(entry.end_time, lenient)
    return start <= slot_minutes < end


def schedules_for_slot(
    entries: Optional[Iterable[ScheduleEntry]],
    day: DayOfWeek,
    slot: str,
    department_filter: Optional[str] = None,
    *,
    lenient: bool = False,
) -> list[ScheduleEntry]:
    """Gibt alle Einträge zurück, die am Tag day den Slot belegen.

    Ein Eintrag, der genau auf der Slot-Kante endet, belegt diesen Slot
    nicht (halboffen). department_filter vergleicht gegen die aufgelöste
    Fachbereichs-ID (String- oder eingebettete Referenz).

    entries darf ein beliebiges Iterable sein (Liste, Tupel, Generator);
    None ergibt eine leere Liste.
    """
    if entries is None:
        return []
    day = DayOfWeek(day)
    return [
        e for e in entries
        if e.day == day
        and (not department_filter or e.department_id == department_filter)
        and occupies_slot(e, slot, lenient)
    ]


def is_class_start(entry: ScheduleEntry, slot: str) -> bool:
    """True wenn der Eintrag in diesem Slot beginnt.

    Bewusst exakter String-Vergleich: "09:15" auf einem 30-Minuten-Raster
    ist nie ein Start und wird im Raster nicht dargestellt.
    """
    return entry.start_time == slot


def time_slot_span(
    start_time: str,
    end_time: str,
    interval_minutes: int = 30,
    *,
    lenient: bool = False,
) -> int:
    """Anzahl Rasterzeilen, die ein Block von start_time bis end_time belegt."""
    if interval_minutes <= 0:
        raise ConfigurationError(
            f"interval_minutes muss > 0 sein, nicht {interval_minutes}")
    duration = to_minutes(end_time, lenient) - to_minutes(start_time, lenient)
    return math.ceil(duration / interval_minutes)

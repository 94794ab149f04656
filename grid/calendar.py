"""Aufbau des Wochenkalenders: Raster, Zellenbelegung und Block-Platzierung."""

import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from analysis.stats import ScheduleStats, schedule_stats
from grid.colors import color_class_for
from grid.details import ScheduleDetails, resolve_details
from grid.occupancy import is_class_start, schedules_for_slot, time_slot_span
from grid.time_slots import generate_time_slots_for
from models.schedule import ScheduleEntry
from models.timeslot import DayOfWeek

if TYPE_CHECKING:
    from config.schema import CalendarConfig
    from models.schedule_data import ScheduleData

logger = logging.getLogger(__name__)


class CalendarTimeSlot(BaseModel):
    """Eine Rasterzelle eines Tages mit allen Einträgen, die sie belegen."""

    time: str
    schedules: list[ScheduleEntry]


class CalendarDay(BaseModel):
    day: DayOfWeek
    time_slots: list[CalendarTimeSlot]


class CalendarPlacement(BaseModel):
    """Ein zu zeichnender Block: beginnt in slot und reicht über span Zeilen."""

    entry_id: str
    day: DayOfWeek
    slot: str
    row_index: int
    span: int
    color: str
    details: ScheduleDetails


class WeeklyCalendar(BaseModel):
    """Ergebnis von build_weekly_calendar, Eingabe für alle Renderer."""

    slots: list[str]
    interval_minutes: int
    days: list[CalendarDay]
    placements: list[CalendarPlacement]
    # Einträge, deren Beginn kein Raster-Label ist (werden nicht gezeichnet)
    unplaced: list[ScheduleEntry] = []
    stats: ScheduleStats

    def placements_for(self, day: DayOfWeek) -> list[CalendarPlacement]:
        """Alle Blöcke eines Tages, nach Zeile sortiert."""
        return sorted(
            (p for p in self.placements if p.day == day),
            key=lambda p: (p.row_index, p.entry_id),
        )

    def cell(self, day: DayOfWeek, slot: str) -> list[ScheduleEntry]:
        """Einträge in der Zelle (day, slot); leer wenn nicht im Raster."""
        for d in self.days:
            if d.day == day:
                for ts in d.time_slots:
                    if ts.time == slot:
                        return ts.schedules
        return []


def build_weekly_calendar(
    data: "ScheduleData",
    config: "CalendarConfig",
    department_filter: Optional[str] = None,
) -> WeeklyCalendar:
    """Rechnet die Einträge aus data auf das konfigurierte Wochenraster um.

    Jeder Eintrag wird genau einmal platziert, im Slot in dem er beginnt.
    Die Spannweite nutzt das Raster-Intervall der Konfiguration.
    """
    grid_cfg = config.grid
    lenient = grid_cfg.lenient_times
    interval = grid_cfg.time_slots.interval_minutes
    slots = generate_time_slots_for(grid_cfg.time_slots)
    slot_index = {s: i for i, s in enumerate(slots)}
    entries = list(data.schedules)

    days: list[CalendarDay] = []
    placements: list[CalendarPlacement] = []
    placed_ids: set[int] = set()

    for day in grid_cfg.day_names:
        time_slots: list[CalendarTimeSlot] = []
        for slot in slots:
            occupants = schedules_for_slot(
                entries, day, slot, department_filter, lenient=lenient
            )
            time_slots.append(CalendarTimeSlot(time=slot, schedules=occupants))
            for entry in occupants:
                if not is_class_start(entry, slot):
                    continue
                placed_ids.add(id(entry))
                placements.append(CalendarPlacement(
                    entry_id=entry.id,
                    day=day,
                    slot=slot,
                    row_index=slot_index[slot],
                    span=max(1, time_slot_span(
                        entry.start_time, entry.end_time, interval, lenient=lenient)),
                    color=color_class_for(
                        entry.department_ref, data.departments,
                        id_colors=config.colors.department_id_colors,
                        name_colors=config.colors.department_colors,
                        default=config.colors.default_color,
                        hash_fallback=config.colors.hash_fallback,
                    ),
                    details=resolve_details(
                        entry, data.courses, data.teachers, data.departments),
                ))
        days.append(CalendarDay(day=day, time_slots=time_slots))

    unplaced = [
        e for e in entries
        if id(e) not in placed_ids
        and e.day in grid_cfg.day_names
        and (not department_filter or e.department_id == department_filter)
    ]
    for e in unplaced:
        logger.warning(
            f"Eintrag {e.id or '(neu)'} ({e.day.value} {e.time_range}) "
            f"beginnt nicht auf einem Raster-Label und wird nicht angezeigt"
        )
    logger.debug(
        f"Wochenkalender: {len(placements)} Blöcke, {len(unplaced)} nicht platziert, "
        f"{len(slots)} Zeilen × {len(days)} Tage"
    )

    return WeeklyCalendar(
        slots=slots,
        interval_minutes=interval,
        days=days,
        placements=placements,
        unplaced=unplaced,
        stats=schedule_stats(entries, data.departments),
    )

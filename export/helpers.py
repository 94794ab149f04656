"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Ausgabe."""

from datetime import date

from grid.calendar import CalendarPlacement, WeeklyCalendar
from grid.colors import BUCKET_HEX, bucket_name
from models.timeslot import DayOfWeek

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "free":    "FFFFFF",
    "header":  "4472C4",
    "time":    "F5F5F5",
    "overlap": "FF9999",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def placement_fill(placement: CalendarPlacement) -> str:
    """Hex-Füllfarbe eines Blocks anhand seines Stil-Tokens."""
    return BUCKET_HEX.get(bucket_name(placement.color), BUCKET_HEX["gray"])


# ─── Tages-Layout ─────────────────────────────────────────────────────────────

def starts_by_row(
    calendar: WeeklyCalendar, day: DayOfWeek
) -> dict[int, list[CalendarPlacement]]:
    """Gibt {row_index: [Blöcke, die dort beginnen]} für einen Tag zurück."""
    rows: dict[int, list[CalendarPlacement]] = {}
    for p in calendar.placements_for(day):
        rows.setdefault(p.row_index, []).append(p)
    return rows


def covered_rows(calendar: WeeklyCalendar, day: DayOfWeek) -> dict[int, int]:
    """Gibt {row_index: Anzahl Blöcke} für alle Zeilen zurück, die belegt sind.

    Die Spannweite wird am Rasterende abgeschnitten.
    """
    last = len(calendar.slots) - 1
    covered: dict[int, int] = {}
    for p in calendar.placements_for(day):
        for row in range(p.row_index, min(p.row_index + p.span, last + 1)):
            covered[row] = covered.get(row, 0) + 1
    return covered


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_placement(placement: CalendarPlacement, compact: bool = False) -> str:
    """Formatiert einen Block als Zelleninhalt.

    compact=True:  "CODE\\nLehrkraft"
    compact=False: "CODE Kursname\\nLehrkraft\\nZeitraum"
    """
    d = placement.details
    if compact:
        return f"{d.course_code}\n{d.teacher_name}"
    return f"{d.course_code} {d.course_name}\n{d.teacher_name}\n{d.time_range}"


def format_placements(placements: list[CalendarPlacement], compact: bool = False) -> str:
    """Mehrere Blöcke in einer Zelle, getrennt durch ──."""
    if not placements:
        return ""
    return "\n──\n".join(format_placement(p, compact) for p in placements)

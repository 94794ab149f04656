"""Terminal-Darstellung des Wochenkalenders (Rich)."""

from typing import TYPE_CHECKING, Optional

from grid.calendar import WeeklyCalendar
from export.helpers import covered_rows, format_placements, placement_fill, starts_by_row

if TYPE_CHECKING:
    from rich.console import Console


def render_week_rows(calendar: WeeklyCalendar, compact: bool = True) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Wochenkalender zurück.

    Jede Zeile: [slot, Mo, Di, ...]. Beginnt ein Block, steht dort sein Text;
    Folgezeilen eines Blocks zeigen "│", freie Zellen "—".
    """
    day_layout = [
        (starts_by_row(calendar, d.day), covered_rows(calendar, d.day))
        for d in calendar.days
    ]
    rows: list[list[str]] = []
    for index, slot in enumerate(calendar.slots):
        cells = [slot]
        for starts, covered in day_layout:
            if index in starts:
                cells.append(format_placements(starts[index], compact))
            elif index in covered:
                cells.append("│")
            else:
                cells.append("—")
        rows.append(cells)
    return rows


def print_week(calendar: WeeklyCalendar, title: str = "Wochenplan",
               console: Optional["Console"] = None) -> None:
    """Gibt den Wochenkalender als Rich-Tabelle aus."""
    from rich.console import Console
    from rich.table import Table
    from rich.text import Text
    from rich import box

    console = console or Console()
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold", no_wrap=True)
    for d in calendar.days:
        table.add_column(d.day.short, min_width=12)

    day_starts = [starts_by_row(calendar, d.day) for d in calendar.days]
    for index, row in enumerate(render_week_rows(calendar)):
        cells = [row[0]]
        for col, text in enumerate(row[1:]):
            starts = day_starts[col].get(index)
            if starts:
                style = "black on #" + placement_fill(starts[0]).lower()
                if len(starts) > 1:
                    style = "bold red"
                cells.append(Text(text, style=style))
            else:
                cells.append(Text(text, style="dim"))
        table.add_row(*cells)
    console.print(table)

    if calendar.unplaced:
        console.print(
            f"[yellow]{len(calendar.unplaced)} Einträge beginnen nicht auf dem Raster "
            f"und fehlen in der Ansicht:[/yellow] "
            + ", ".join(e.id or "(neu)" for e in calendar.unplaced)
        )

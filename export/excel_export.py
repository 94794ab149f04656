"""Excel-Export für den Wochenkalender (openpyxl)."""

from pathlib import Path

from config.schema import CalendarConfig
from grid.calendar import WeeklyCalendar

from export.helpers import (
    COLORS, format_placements, placement_fill, starts_by_row, today_str,
)


class ExcelExporter:
    """Exportiert einen WeeklyCalendar in eine Excel-Datei mit 3 Sheets."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 8
    COL_DAY_W  = 24

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_SLOT_H   = 30

    def __init__(self, calendar: WeeklyCalendar, config: CalendarConfig):
        self.calendar = calendar
        self.config   = config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei: Woche, Übersicht, Einträge."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_woche(wb)
        self._sheet_uebersicht(wb)
        self._sheet_eintraege(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header(self, ws, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[1].height = self.ROW_HEADER_H

    # ─── Sheet: Woche ─────────────────────────────────────────────────────────

    def _sheet_woche(self, wb) -> None:
        """Raster mit einer Zeile je Slot; Blöcke werden über ihre Spannweite verbunden.

        Überschneiden sich Blöcke an einem Tag, landet der spätere Text in der
        Ankerzelle des laufenden Blocks und die Zelle wird rot markiert.
        """
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        cal = self.calendar
        ws = wb.create_sheet(title="Woche")
        self._write_header(ws, ["Zeit"] + [d.day.value for d in cal.days])
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(cal.days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        border = self._thin_border()
        first_row = 2
        last_row = first_row + len(cal.slots) - 1

        for i, slot in enumerate(cal.slots):
            row = first_row + i
            c = ws.cell(row=row, column=1, value=slot)
            c.fill = self._fill(COLORS["time"])
            c.font = Font(bold=True, size=9)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            ws.row_dimensions[row].height = self.ROW_SLOT_H

        for col_offset, day in enumerate(cal.days):
            col = 2 + col_offset
            anchor_row = None      # Ankerzeile des laufenden Blocks
            merged_until = 0       # letzte Zeile des laufenden Blocks
            for index, placements in sorted(starts_by_row(cal, day.day).items()):
                row = first_row + index
                text = format_placements(placements)
                span = max(p.span for p in placements)
                overlap = len(placements) > 1

                if anchor_row is not None and row <= merged_until:
                    anchor = ws.cell(row=anchor_row, column=col)
                    anchor.value = f"{anchor.value}\n──\n{text}"
                    anchor.fill = self._fill(COLORS["overlap"])
                    continue

                c = ws.cell(row=row, column=col, value=text)
                c.fill = self._fill(
                    COLORS["overlap"] if overlap else placement_fill(placements[0]))
                c.alignment = self._center_align()
                c.font = Font(size=8)
                c.border = border

                end_row = min(row + span - 1, last_row)
                if end_row > row:
                    ws.merge_cells(
                        start_row=row, start_column=col,
                        end_row=end_row, end_column=col,
                    )
                anchor_row, merged_until = row, end_row

        ws.freeze_panes = "B2"

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Übersicht")
        stats = self.calendar.stats

        row = 1
        ws.cell(row=row, column=1, value=self.config.institution_name).font = Font(bold=True, size=14)
        row += 1
        ws.cell(row=row, column=1, value=f"Erstellt: {today_str()}")
        row += 2

        for label, value in (
            ("Einträge", stats.total_classes),
            ("Aktive Fachbereiche", stats.active_departments),
            ("Aktive Kurse", stats.active_courses),
            ("Aktive Lehrkräfte", stats.active_teachers),
            ("Nicht im Raster", len(self.calendar.unplaced)),
        ):
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value)
            row += 1
        row += 1

        ws.cell(row=row, column=1, value="Einträge je Tag").font = Font(bold=True)
        row += 1
        for d in self.calendar.days:
            ws.cell(row=row, column=1, value=d.day.value)
            ws.cell(row=row, column=2, value=stats.classes_by_day.get(d.day.value, 0))
            row += 1
        row += 1

        ws.cell(row=row, column=1, value="Einträge je Fachbereich").font = Font(bold=True)
        row += 1
        for name, count in sorted(stats.classes_by_department.items()):
            ws.cell(row=row, column=1, value=name)
            ws.cell(row=row, column=2, value=count)
            row += 1

        ws.column_dimensions["A"].width = 28
        ws.column_dimensions["B"].width = 10

    # ─── Sheet: Einträge ──────────────────────────────────────────────────────

    def _sheet_eintraege(self, wb) -> None:
        ws = wb.create_sheet(title="Einträge")
        headers = ["ID", "Tag", "Zeit", "Kurscode", "Kurs", "Lehrkraft",
                   "Fachbereich", "Semester", "Zeilen"]
        self._write_header(ws, headers)
        border = self._thin_border()

        row = 2
        for p in sorted(self.calendar.placements,
                        key=lambda p: ([d.day for d in self.calendar.days].index(p.day),
                                       p.row_index)):
            d = p.details
            values = [p.entry_id, p.day.value, d.time_range, d.course_code,
                      d.course_name, d.teacher_name, d.department_name,
                      d.semester, p.span]
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
            ws.cell(row=row, column=7).fill = self._fill(placement_fill(p))
            row += 1

        for col, width in zip("ABCDEFGHI", (26, 12, 14, 10, 24, 22, 24, 12, 8)):
            ws.column_dimensions[col].width = width

"""Export-Modul: Terminal (Rich) und Excel (openpyxl) für den Wochenkalender."""

from export.excel_export import ExcelExporter
from export.tui_renderer import print_week, render_week_rows

__all__ = ["ExcelExporter", "print_week", "render_week_rows"]

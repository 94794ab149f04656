"""Wochenkalender — Haupt-CLI.

Verwendung:
  python main.py config init              Default-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py slots                    Zeitraster-Labels ausgeben
  python main.py generate                 Demo-Daten erzeugen (JSON)
  python main.py show                     Wochenkalender im Terminal
  python main.py validate                 Doppelbelegungen prüfen
  python main.py stats                    Kennzahlen + gefilterte Einträge
  python main.py export                   Wochenkalender als Excel
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Verzeichnis für die JSON-Sammlungen
DEFAULT_DATA_DIR = Path("output/data")


def _abort(message: str) -> None:
    console.print(f"[red bold]Fehler:[/red bold] {message}")
    sys.exit(1)


def _load_config(ctx: click.Context):
    """Lädt die Konfiguration (oder die Defaults) oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    from grid.errors import ConfigurationError

    mgr = ConfigManager(ctx.obj.get("config_path"))
    try:
        return mgr.load_or_default()
    except ConfigurationError as e:
        _abort(str(e))


def _load_data(config, data_dir: Optional[str]):
    """Lädt die JSON-Sammlungen oder bricht mit Fehlermeldung ab."""
    from data.json_import import load_schedule_data
    from grid.errors import ScheduleImportError

    directory = Path(data_dir or config.data_dir or DEFAULT_DATA_DIR)
    try:
        return load_schedule_data(directory)
    except ScheduleImportError as e:
        console.print(
            "Verwenden Sie [bold]python main.py generate[/bold] für Demo-Daten."
        )
        _abort(str(e))


def _data_dir_option(f):
    return click.option(
        "--data-dir", default=None,
        help="Verzeichnis mit schedules.json, departments.json, courses.json, teachers.json.",
    )(f)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(ctx)
    ts = config.grid.time_slots

    console.print(Panel(
        f"[bold]{config.institution_name}[/bold]  |  "
        f"{ts.start_hour:02d}:00–{ts.end_hour:02d}:00  |  {ts.interval_minutes} min  |  {ts.rows} Zeilen",
        title="Kalenderkonfiguration",
        border_style="cyan",
    ))
    console.print(
        f"[bold]Tage:[/bold] {', '.join(d.value for d in config.grid.day_names)}\n"
        f"[bold]Uhrzeiten:[/bold] {'tolerant (kaputt → 00:00)' if config.grid.lenient_times else 'strikt'}\n"
        f"[bold]Raum-Konflikte:[/bold] {'ja' if config.conflicts.check_rooms else 'nein'}"
    )

    table = Table(title="Fachbereichs-Farben", box=box.ROUNDED)
    table.add_column("Fachbereich", style="bold")
    table.add_column("Stil-Token")
    for name, token in config.colors.department_colors.items():
        table.add_row(name, token)
    for dept_id, token in config.colors.department_id_colors.items():
        table.add_row(f"[dim]id[/dim] {dept_id}", token)
    table.add_row("[italic]sonst[/italic]", config.colors.default_color)
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
@click.pass_context
def config_init(ctx: click.Context, force: bool):
    """Legt die Default-Konfiguration als YAML an."""
    from config.defaults import default_calendar_config
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj.get("config_path"))
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]{mgr.path} existiert bereits.[/yellow] "
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(default_calendar_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── SLOTS ────────────────────────────────────────────────────────────────────

@click.command("slots")
@click.option("--start", "start_hour", type=int, default=None, help="Erste Stunde.")
@click.option("--end", "end_hour", type=int, default=None, help="Letzte Stunde (Schlusskante).")
@click.option("--interval", "interval_minutes", type=int, default=None, help="Intervall in Minuten.")
@click.pass_context
def cmd_slots(ctx: click.Context, start_hour, end_hour, interval_minutes):
    """Gibt die Zeitraster-Labels aus (Defaults aus der Konfiguration)."""
    from grid.errors import ConfigurationError
    from grid.time_slots import generate_time_slots

    ts = _load_config(ctx).grid.time_slots
    try:
        slots = generate_time_slots(
            ts.start_hour if start_hour is None else start_hour,
            ts.end_hour if end_hour is None else end_hour,
            ts.interval_minutes if interval_minutes is None else interval_minutes,
        )
    except ConfigurationError as e:
        _abort(str(e))
    console.print(" ".join(slots))
    console.print(f"[dim]{len(slots)} Labels[/dim]")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--output-dir", default=str(DEFAULT_DATA_DIR),
              help="Zielverzeichnis für die JSON-Sammlungen.")
@click.pass_context
def cmd_generate(ctx: click.Context, seed: int, output_dir: str):
    """Erzeugt Demo-Daten (Fachbereiche, Kurse, Lehrkräfte, Einträge)."""
    from data.fake_data import DemoDataGenerator
    from data.json_import import save_schedule_data

    config = _load_config(ctx)
    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    data = DemoDataGenerator(config, seed=seed).generate()
    console.print(f"\n[dim]{data.summary()}[/dim]")

    save_schedule_data(data, Path(output_dir))
    console.print(f"[green]✓[/green] JSON gespeichert: {output_dir}")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@_data_dir_option
@click.option("--department", default=None, help="Nur diesen Fachbereich (ID) anzeigen.")
@click.pass_context
def cmd_show(ctx: click.Context, data_dir: Optional[str], department: Optional[str]):
    """Zeigt den Wochenkalender im Terminal."""
    from export.tui_renderer import print_week
    from grid.calendar import build_weekly_calendar
    from grid.errors import ScheduleGridError

    config = _load_config(ctx)
    data = _load_data(config, data_dir)
    try:
        calendar = build_weekly_calendar(data, config, department_filter=department)
    except ScheduleGridError as e:
        _abort(str(e))
    print_week(calendar, title=config.institution_name, console=console)


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@_data_dir_option
@click.pass_context
def cmd_validate(ctx: click.Context, data_dir: Optional[str]):
    """Prüft den Datensatz auf Doppelbelegungen und Datenfehler."""
    from analysis.conflicts import ScheduleValidator

    config = _load_config(ctx)
    data = _load_data(config, data_dir)
    console.print(f"\n{data.summary()}\n")
    report = ScheduleValidator(config).validate(data)
    report.print_rich()

    sys.exit(0 if report.is_valid else 1)


# ─── STATS ────────────────────────────────────────────────────────────────────

@click.command("stats")
@_data_dir_option
@click.option("--department", default=None, help="Fachbereichs-ID.")
@click.option("--day", default=None, help="Wochentag (z.B. Monday).")
@click.option("--semester", default=None, help="Semester (z.B. 'Spring 2025').")
@click.option("--teacher", default=None, help="Lehrkraft-ID.")
@click.option("--search", "search_term", default=None,
              help="Suche in Kursname, Kurscode und Lehrkraft.")
@click.pass_context
def cmd_stats(ctx: click.Context, data_dir, department, day, semester, teacher, search_term):
    """Zeigt Kennzahlen und die gefilterten Einträge."""
    from pydantic import ValidationError

    from analysis.stats import ScheduleFilters, filter_schedules, schedule_stats
    from grid.details import resolve_details

    config = _load_config(ctx)
    data = _load_data(config, data_dir)
    try:
        filters = ScheduleFilters(department=department, day=day, semester=semester,
                                  teacher=teacher, search_term=search_term)
    except ValidationError as e:
        _abort(f"Ungültiger Filter: {e}")

    entries = filter_schedules(data.schedules, filters, data.courses, data.teachers)
    stats = schedule_stats(entries, data.departments)

    console.print(Panel(
        f"Einträge: [bold]{stats.total_classes}[/bold]  |  "
        f"Fachbereiche: {stats.active_departments}  |  "
        f"Kurse: {stats.active_courses}  |  Lehrkräfte: {stats.active_teachers}",
        title="Kennzahlen",
        border_style="cyan",
    ))

    table = Table(box=box.ROUNDED)
    for col in ("Tag", "Zeit", "Kurs", "Lehrkraft", "Fachbereich", "Semester"):
        table.add_column(col)
    days = list(config.grid.day_names)
    for e in sorted(entries, key=lambda e: (days.index(e.day) if e.day in days else 99,
                                            e.start_time)):
        d = resolve_details(e, data.courses, data.teachers, data.departments)
        table.add_row(e.day.value, d.time_range, f"{d.course_code} {d.course_name}",
                      d.teacher_name, d.department_name, d.semester)
    console.print(table)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@_data_dir_option
@click.option("--output", "-o", default="output/wochenplan.xlsx",
              help="Ausgabepfad der Excel-Datei.")
@click.option("--department", default=None, help="Nur diesen Fachbereich (ID) exportieren.")
@click.pass_context
def cmd_export(ctx: click.Context, data_dir: Optional[str], output: str,
               department: Optional[str]):
    """Exportiert den Wochenkalender als Excel-Datei."""
    from export.excel_export import ExcelExporter
    from grid.calendar import build_weekly_calendar
    from grid.errors import ScheduleGridError

    config = _load_config(ctx)
    data = _load_data(config, data_dir)
    try:
        calendar = build_weekly_calendar(data, config, department_filter=department)
    except ScheduleGridError as e:
        _abort(str(e))
    path = ExcelExporter(calendar, config).export(Path(output))
    console.print(f"[green]✓[/green] Excel gespeichert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", default=None,
              type=click.Path(path_type=Path),
              help="Pfad zur YAML-Konfiguration (Standard: config/calendar_config.yaml).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliches Logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool):
    """Wochenkalender für den Stundenplan einer Schule.

    Starten Sie mit: python main.py generate && python main.py show
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_slots)
cli.add_command(cmd_generate)
cli.add_command(cmd_show)
cli.add_command(cmd_validate)
cli.add_command(cmd_stats)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()

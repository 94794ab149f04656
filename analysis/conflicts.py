"""Doppelbelegungs-Prüfung für Stundenplan-Einträge.

Zwei Ebenen:
- find_conflicts / check_conflicts: ein Kandidat gegen den Bestand
  (vor dem Anlegen oder Ändern eines Eintrags).
- ScheduleValidator: der komplette Datensatz als Sicherheitsnetz,
  Ergebnis als ValidationReport.
"""

from collections import defaultdict
from itertools import combinations
from typing import TYPE_CHECKING, Literal, Optional, Sequence

from pydantic import BaseModel

from grid.errors import InvalidTimeFormat, SchedulingConflictError
from grid.time_slots import generate_time_slots_for
from grid.timeutils import to_minutes
from models.reference import resolve_reference
from models.schedule import ScheduleEntry
from models.timeslot import DayOfWeek

if TYPE_CHECKING:
    from config.schema import CalendarConfig
    from models.schedule_data import ScheduleData


class ScheduleConflict(BaseModel):
    """Eine Überschneidung zwischen Kandidat und bestehendem Eintrag."""

    candidate_id: str
    existing_id: str
    day: DayOfWeek
    reason: Literal["teacher", "room"]
    resource: str          # teacher_id bzw. Raum
    candidate_range: str
    existing_range: str


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Halboffene Intervalle [a) und [b) überschneiden sich.

    Aneinandergrenzende Intervalle (end_a == start_b) sind überschneidungsfrei.
    """
    return max(start_a, start_b) < min(end_a, end_b)


def _same_entry(a: ScheduleEntry, b: ScheduleEntry) -> bool:
    return a is b or (bool(a.id) and a.id == b.id)


def _entry_overlap(a: ScheduleEntry, b: ScheduleEntry, lenient: bool) -> bool:
    return intervals_overlap(
        to_minutes(a.start_time, lenient), to_minutes(a.end_time, lenient),
        to_minutes(b.start_time, lenient), to_minutes(b.end_time, lenient),
    )


def _shared_resources(
    a: ScheduleEntry, b: ScheduleEntry, check_rooms: bool
) -> list[tuple[str, str]]:
    shared = []
    if a.teacher_id and a.teacher_id == b.teacher_id:
        shared.append(("teacher", a.teacher_id))
    if check_rooms and a.room and a.room == b.room:
        shared.append(("room", a.room))
    return shared


def find_conflicts(
    candidate: ScheduleEntry,
    existing: Sequence[ScheduleEntry],
    *,
    check_rooms: bool = True,
    lenient: bool = False,
) -> list[ScheduleConflict]:
    """Alle bestehenden Einträge, mit denen candidate kollidiert.

    Kollision = gleicher Tag, gleiche Lehrkraft (oder gleicher Raum) und
    überlappende Zeit. Ein Eintrag kollidiert nie mit sich selbst (gleiche ID),
    damit eine Änderung gegen den alten Stand geprüft werden kann.
    """
    conflicts: list[ScheduleConflict] = []
    for other in existing:
        if _same_entry(candidate, other) or other.day != candidate.day:
            continue
        shared = _shared_resources(candidate, other, check_rooms)
        if not shared or not _entry_overlap(candidate, other, lenient):
            continue
        for reason, resource in shared:
            conflicts.append(ScheduleConflict(
                candidate_id=candidate.id,
                existing_id=other.id,
                day=candidate.day,
                reason=reason,
                resource=resource,
                candidate_range=candidate.time_range,
                existing_range=other.time_range,
            ))
    return conflicts


def check_conflicts(
    candidate: ScheduleEntry,
    existing: Sequence[ScheduleEntry],
    *,
    check_rooms: bool = True,
    lenient: bool = False,
) -> None:
    """Wie find_conflicts, wirft aber SchedulingConflictError bei Kollision."""
    conflicts = find_conflicts(
        candidate, existing, check_rooms=check_rooms, lenient=lenient
    )
    if conflicts:
        raise SchedulingConflictError(conflicts)


# ─── Gesamtprüfung ────────────────────────────────────────────────────────────

class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung im Datensatz."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # Eintrags-ID / teacher_id / Raum


class ValidationReport(BaseModel):
    """Ergebnis der Gesamtprüfung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KONFLIKTFREI[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Prüfung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=14)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft einen kompletten Datensatz auf Doppelbelegungen und Datenfehler."""

    def __init__(self, config: Optional["CalendarConfig"] = None):
        self.config = config

    def validate(self, data: "ScheduleData") -> ValidationReport:
        """Führt alle Prüfungen durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        valid, time_violations = self._check_times(data.schedules)
        violations.extend(time_violations)
        violations.extend(self._check_double_booking(valid))
        violations.extend(self._check_grid_alignment(valid))
        violations.extend(self._check_references(data))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    @property
    def _lenient(self) -> bool:
        return bool(self.config and self.config.grid.lenient_times)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_times(
        self, entries: Sequence[ScheduleEntry]
    ) -> tuple[list[ScheduleEntry], list[ValidationViolation]]:
        """Uhrzeiten lesbar und start < end; gibt die prüfbaren Einträge zurück."""
        valid: list[ScheduleEntry] = []
        violations: list[ValidationViolation] = []
        for e in entries:
            try:
                start = to_minutes(e.start_time, self._lenient)
                end = to_minutes(e.end_time, self._lenient)
            except InvalidTimeFormat as exc:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="invalid_time",
                    entity=e.id,
                    description=str(exc),
                ))
                continue
            if start >= end:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="empty_interval",
                    entity=e.id,
                    description=f"{e.day.value} {e.time_range}: Ende liegt nicht nach Beginn.",
                ))
                continue
            valid.append(e)
        return valid, violations

    def _check_double_booking(
        self, entries: Sequence[ScheduleEntry]
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft (und kein Raum) darf sich selbst überschneiden."""
        check_rooms = self.config.conflicts.check_rooms if self.config else True
        by_day: dict[DayOfWeek, list[ScheduleEntry]] = defaultdict(list)
        for e in entries:
            by_day[e.day].append(e)

        violations: list[ValidationViolation] = []
        for day, day_entries in by_day.items():
            day_entries.sort(key=lambda e: to_minutes(e.start_time, self._lenient))
            for a, b in combinations(day_entries, 2):
                if _same_entry(a, b) or not _entry_overlap(a, b, self._lenient):
                    continue
                for reason, resource in _shared_resources(a, b, check_rooms):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint=f"{reason}_double_booking",
                        entity=resource,
                        description=(
                            f"{day.value}: {a.id} ({a.time_range}) überschneidet "
                            f"sich mit {b.id} ({b.time_range})."
                        ),
                    ))
        return violations

    def _check_grid_alignment(
        self, entries: Sequence[ScheduleEntry]
    ) -> list[ValidationViolation]:
        """Einträge, deren Beginn kein Raster-Label ist, erscheinen nicht im Kalender."""
        if self.config is None:
            return []
        slots = set(generate_time_slots_for(self.config.grid.time_slots))
        days = set(self.config.grid.day_names)
        violations: list[ValidationViolation] = []
        for e in entries:
            if e.day not in days:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="day_not_shown",
                    entity=e.id,
                    description=f"{e.day.value} ist im Kalender ausgeblendet.",
                ))
            elif e.start_time not in slots:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="off_grid_start",
                    entity=e.id,
                    description=(
                        f"Beginn {e.start_time} liegt nicht auf dem Raster "
                        f"({self.config.grid.time_slots.interval_minutes} min) – "
                        f"wird nicht angezeigt."
                    ),
                ))
        return violations

    def _check_references(self, data: "ScheduleData") -> list[ValidationViolation]:
        """ID-Referenzen, die in den Nachschlage-Tabellen fehlen."""
        violations: list[ValidationViolation] = []
        for e in data.schedules:
            for label, ref, lookup in (
                ("Fachbereich", e.department_ref, data.departments),
                ("Kurs", e.course_ref, data.courses),
                ("Lehrkraft", e.teacher_ref, data.teachers),
            ):
                if isinstance(ref, str) and resolve_reference(ref, lookup) is None:
                    violations.append(ValidationViolation(
                        severity="warning",
                        constraint="unresolved_reference",
                        entity=e.id,
                        description=f"{label} '{ref}' nicht gefunden – Platzhalter wird angezeigt.",
                    ))
        return violations

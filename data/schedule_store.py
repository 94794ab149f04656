"""In-Memory-Bestand der Stundenplan-Einträge mit Doppelbelegungs-Schutz.

Anlegen und Ändern laufen als Prüfen-dann-Schreiben unter einem Lock je
Eintrags-ID (gestreift) und je (Tag, Lehrkraft) bzw. (Tag, Raum). Zwei
gleichzeitige Anfragen für dieselbe Lehrkraft am selben Tag können so nicht
beide die Prüfung bestehen, und zwei Änderungen desselben Eintrags
überschreiben sich nicht gegenseitig.

Reihenfolge der Locks: erst der ID-Streifen, dann die Ressourcen-Locks
sortiert, der Instanz-Lock nur kurz für Lesen/Schreiben des Dicts.
Eine echte Datenbank braucht zusätzlich eine Constraint an der
Transaktionsgrenze; dieser Bestand ersetzt sie nicht.
"""

import logging
import secrets
import threading
from datetime import datetime, timezone
from typing import Iterable, Optional

from analysis.conflicts import check_conflicts
from grid.errors import InvalidScheduleEntry, SchedulingConflictError
from grid.timeutils import to_minutes
from models.schedule import ScheduleEntry
from models.timeslot import DayOfWeek

logger = logging.getLogger(__name__)

# Anzahl der Lock-Streifen für Eintrags-IDs
ENTRY_LOCK_STRIPES = 64


def _new_id() -> str:
    """24-stellige Hex-ID im Format der Datenbank-ObjectIds."""
    return secrets.token_hex(12)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ScheduleStore:
    """Thread-sicherer Bestand; Zustand gehört allein der Instanz."""

    def __init__(
        self,
        entries: Iterable[ScheduleEntry] = (),
        *,
        check_rooms: bool = True,
        lenient: bool = False,
    ):
        self.check_rooms = check_rooms
        self.lenient = lenient
        self._entries: dict[str, ScheduleEntry] = {}
        self._lock = threading.Lock()
        self._entry_locks = [threading.Lock() for _ in range(ENTRY_LOCK_STRIPES)]
        # Genau ein Lock je (Tag, Lehrkraft) und (Tag, Raum), die je gesehen
        # wurden: höchstens Tage × (Lehrkräfte + Räume). Locks werden nie
        # entfernt, da ein anderer Thread sie bereits geholt haben kann.
        self._resource_locks: dict[tuple, threading.Lock] = {}
        for e in entries:
            entry = e if e.id else e.model_copy(update={"id": _new_id()})
            self._entries[entry.id] = entry

    # ─── Lesen ───

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, entry_id: str) -> Optional[ScheduleEntry]:
        with self._lock:
            return self._entries.get(entry_id)

    def entries(self, day: Optional[DayOfWeek] = None) -> list[ScheduleEntry]:
        """Momentaufnahme aller Einträge (optional nur eines Tages)."""
        with self._lock:
            entries = list(self._entries.values())
        if day is not None:
            entries = [e for e in entries if e.day == day]
        return entries

    # ─── Schreiben ───

    def add(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Legt einen Eintrag an; wirft SchedulingConflictError bei Überschneidung."""
        self._validate_interval(entry)
        now = _now()
        stored = entry.model_copy(update={
            "id": entry.id or _new_id(),
            "created_at": entry.created_at or now,
            "updated_at": now,
        })
        with self._entry_lock(stored.id), self._locked(stored):
            if self.get(stored.id) is not None:
                raise InvalidScheduleEntry(f"Eintrag {stored.id} existiert bereits")
            self._check(stored)
            with self._lock:
                if stored.id in self._entries:
                    raise InvalidScheduleEntry(f"Eintrag {stored.id} existiert bereits")
                self._entries[stored.id] = stored
        logger.info(f"Eintrag angelegt: {stored}")
        return stored

    def update(self, entry_id: str, **changes) -> ScheduleEntry:
        """Ändert Felder eines Eintrags und prüft das Ergebnis gegen alle anderen.

        Lesen, Zusammenführen und Schreiben laufen unter dem Lock der
        Eintrags-ID; gleichzeitige Änderungen verschiedener Felder bleiben
        beide erhalten.
        """
        with self._entry_lock(entry_id):
            current = self.get(entry_id)
            if current is None:
                raise KeyError(entry_id)
            merged = ScheduleEntry.model_validate({
                **current.model_dump(),
                **changes,
                "id": entry_id,
                "updated_at": _now(),
            })
            self._validate_interval(merged)
            with self._locked(merged):
                self._check(merged)
                with self._lock:
                    if entry_id not in self._entries:
                        raise KeyError(entry_id)
                    self._entries[entry_id] = merged
        logger.info(f"Eintrag geändert: {merged}")
        return merged

    def remove(self, entry_id: str) -> ScheduleEntry:
        """Entfernt einen Eintrag (Absage); KeyError wenn unbekannt."""
        with self._entry_lock(entry_id), self._lock:
            removed = self._entries.pop(entry_id)
        logger.info(f"Eintrag entfernt: {removed}")
        return removed

    # ─── Intern ───

    def _validate_interval(self, entry: ScheduleEntry) -> None:
        start = to_minutes(entry.start_time, self.lenient)
        end = to_minutes(entry.end_time, self.lenient)
        if start >= end:
            raise InvalidScheduleEntry(
                f"Ende ({entry.end_time}) muss nach Beginn ({entry.start_time}) liegen")

    def _check(self, entry: ScheduleEntry) -> None:
        others = self.entries(entry.day)
        try:
            check_conflicts(
                entry, others, check_rooms=self.check_rooms, lenient=self.lenient
            )
        except SchedulingConflictError as e:
            logger.warning(f"Eintrag abgelehnt: {e}")
            raise

    def _resource_keys(self, entry: ScheduleEntry) -> list[tuple]:
        keys = []
        if entry.teacher_id:
            keys.append(("teacher", entry.day.value, entry.teacher_id))
        if self.check_rooms and entry.room:
            keys.append(("room", entry.day.value, entry.room))
        return sorted(keys)

    def _entry_lock(self, entry_id: str) -> threading.Lock:
        return self._entry_locks[hash(entry_id) % ENTRY_LOCK_STRIPES]

    def _locked(self, entry: ScheduleEntry) -> "_MultiLock":
        with self._lock:
            locks = [
                self._resource_locks.setdefault(key, threading.Lock())
                for key in self._resource_keys(entry)
            ]
        return _MultiLock(locks)


class _MultiLock:
    """Erwirbt mehrere Locks in fester Reihenfolge (kein Deadlock)."""

    def __init__(self, locks: list[threading.Lock]):
        self.locks = locks

    def __enter__(self):
        for lock in self.locks:
            lock.acquire()
        return self

    def __exit__(self, *exc_info):
        for lock in reversed(self.locks):
            lock.release()
        return False

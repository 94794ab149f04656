"""Fehlertypen des Wochenplan-Rasters."""


class ScheduleGridError(Exception):
    """Basisklasse aller Fehler dieses Projekts."""


class ConfigurationError(ScheduleGridError):
    """Ungültige Raster-Konfiguration (Programmier- oder Config-Fehler)."""


class InvalidTimeFormat(ScheduleGridError, ValueError):
    """Uhrzeit entspricht nicht dem Format "HH:MM"."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Ungültige Uhrzeit {value!r} (erwartet 'HH:MM', 24h)")


class SchedulingConflictError(ScheduleGridError):
    """Ein neuer/geänderter Eintrag überschneidet sich mit einem bestehenden.

    ``conflicts`` enthält alle gefundenen Kollisionen, die Meldung nennt die erste.
    """

    def __init__(self, conflicts):
        self.conflicts = list(conflicts)
        first = self.conflicts[0]
        more = len(self.conflicts) - 1
        msg = (
            f"Eintrag {first.candidate_id or '(neu)'} kollidiert mit "
            f"{first.existing_id} ({first.reason}: {first.day.value} "
            f"{first.existing_range})"
        )
        if more:
            msg += f" und {more} weiteren Einträgen"
        super().__init__(msg)


class ScheduleImportError(ScheduleGridError):
    """JSON-Daten konnten nicht gelesen oder validiert werden."""


class InvalidScheduleEntry(ScheduleGridError, ValueError):
    """Eintrag ist in sich ungültig (z.B. Ende nicht nach Beginn)."""

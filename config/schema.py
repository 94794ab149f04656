from pydantic import BaseModel, Field, model_validator
from typing import Optional

from grid.colors import DEFAULT_COLOR, DEPARTMENT_COLORS
from grid.errors import ConfigurationError
from grid.time_slots import validate_grid_params
from models.timeslot import DayOfWeek, WEEKDAYS


# ─── ZEITRASTER ───

class TimeSlotConfig(BaseModel):
    """Diskretes Zeitraster des Wochenkalenders.

    Das Raster läuft von start_hour:00 bis end_hour:00 in Schritten von
    interval_minutes. Die letzte Zeile ist die Schlusskante, kein Slot.
    """
    # Erste Stunde des Rasters (0-23)
    start_hour: int = 8
    # Letzte Stunde des Rasters (Schlusskante, 1-24)
    end_hour: int = 18
    # Schrittweite in Minuten, muss 60 ohne Rest teilen (15/20/30/60)
    interval_minutes: int = 30

    @model_validator(mode='after')
    def validate_bounds(self):
        """Prüfe Rastergrenzen. Für ein buchbares Raster muss start < end sein."""
        validate_grid_params(self.start_hour, self.end_hour, self.interval_minutes)
        if self.start_hour >= self.end_hour:
            raise ConfigurationError(
                f"start_hour ({self.start_hour}) muss vor end_hour "
                f"({self.end_hour}) liegen")
        return self

    @property
    def rows(self) -> int:
        """Anzahl Raster-Labels (inkl. Schlusskante)."""
        return (self.end_hour - self.start_hour) * (60 // self.interval_minutes) + 1


class GridConfig(BaseModel):
    """Darstellung des Wochenrasters."""
    # Zeitraster (Beginn, Ende, Intervall)
    time_slots: TimeSlotConfig = Field(default_factory=TimeSlotConfig)
    # Angezeigte Wochentage in Reihenfolge
    day_names: list[DayOfWeek] = Field(
        default_factory=lambda: list(WEEKDAYS),
        description="Angezeigte Wochentage")
    # Alte Web-Oberfläche: kaputte Uhrzeiten still als 00:00 behandeln
    lenient_times: bool = Field(False,
        description="Ungültige Uhrzeiten als 0 Minuten behandeln statt Fehler")
    # Semester für neue Einträge, wenn der Kurs keines angibt
    default_semester: str = Field("Spring 2025",
        description="Semester-Fallback für neue Einträge")

    @model_validator(mode='after')
    def validate_days(self):
        if not self.day_names:
            raise ConfigurationError("day_names darf nicht leer sein")
        if len(set(self.day_names)) != len(self.day_names):
            raise ConfigurationError(f"Doppelte Wochentage in day_names: {self.day_names}")
        return self


# ─── FARBEN ───

class ColorConfig(BaseModel):
    """Farbzuordnung der Fachbereiche (Tailwind-Klassen als Stil-Token)."""
    # Name → Stil-Token (bricht bei Umbenennung, daher nur Fallback)
    department_colors: dict[str, str] = Field(
        default_factory=lambda: dict(DEPARTMENT_COLORS),
        description="Fachbereichs-Name → Stil-Token")
    # ID → Stil-Token, hat Vorrang vor dem Namen
    department_id_colors: dict[str, str] = Field(default_factory=dict,
        description="Fachbereichs-ID → Stil-Token (Vorrang)")
    # Token für unbekannte Fachbereiche
    default_color: str = Field(DEFAULT_COLOR)
    # Unbekannte Fachbereiche per Hash der ID auf eine feste Palette verteilen
    hash_fallback: bool = Field(False,
        description="Unbekannte Fachbereiche per ID-Hash einfärben")


# ─── KONFLIKTE ───

class ConflictConfig(BaseModel):
    """Regeln für die Doppelbelegungs-Prüfung."""
    # Auch Raum-Doppelbelegungen melden (nur wenn Einträge einen Raum tragen)
    check_rooms: bool = Field(True,
        description="Raum-Doppelbelegungen prüfen")


# ─── GESAMT-CONFIG ───

class CalendarConfig(BaseModel):
    """Gesamtkonfiguration des Wochenkalenders."""
    # Name der Einrichtung (nur Anzeige)
    institution_name: str = Field("Demo School",
        description="Name der Schule")
    # Zeitraster und Wochentage
    grid: GridConfig = Field(default_factory=GridConfig)
    # Fachbereichs-Farben
    colors: ColorConfig = Field(default_factory=ColorConfig)
    # Doppelbelegungs-Regeln
    conflicts: ConflictConfig = Field(default_factory=ConflictConfig)
    # Optionales Standard-Verzeichnis mit den JSON-Sammlungen
    data_dir: Optional[str] = None

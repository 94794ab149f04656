"""Erzeugung der Zeitraster-Beschriftungen ("08:00", "08:30", ...)."""

from typing import TYPE_CHECKING

from grid.errors import ConfigurationError
from grid.timeutils import format_minutes

if TYPE_CHECKING:
    from config.schema import TimeSlotConfig


def validate_grid_params(start_hour: int, end_hour: int, interval_minutes: int) -> None:
    """Prüft Rasterparameter; wirft ConfigurationError bei ungültigen Werten.

    start_hour == end_hour ist hier erlaubt (ein einzelnes Label).
    """
    for name, value in (("start_hour", start_hour), ("end_hour", end_hour),
                        ("interval_minutes", interval_minutes)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} muss eine ganze Zahl sein, nicht {value!r}")
    if not 0 <= start_hour <= 24 or not 0 <= end_hour <= 24:
        raise ConfigurationError(
            f"Stunden müssen zwischen 0 und 24 liegen ({start_hour}-{end_hour})")
    if start_hour > end_hour:
        raise ConfigurationError(
            f"start_hour ({start_hour}) liegt nach end_hour ({end_hour})")
    if interval_minutes <= 0:
        raise ConfigurationError(
            f"interval_minutes muss > 0 sein, nicht {interval_minutes}")
    if 60 % interval_minutes != 0:
        raise ConfigurationError(
            f"interval_minutes ({interval_minutes}) teilt 60 nicht ohne Rest")


def generate_time_slots(
    start_hour: int = 8, end_hour: int = 18, interval_minutes: int = 30
) -> list[str]:
    """Gibt alle Raster-Labels von start_hour:00 bis end_hour:00 zurück.

    Die letzte Stunde liefert nur ihr ":00"-Label, es ist die Schlusskante
    des Rasters und kein buchbarer Slot.
    Länge = (end_hour - start_hour) * (60 / interval_minutes) + 1.
    """
    validate_grid_params(start_hour, end_hour, interval_minutes)
    first = start_hour * 60
    last = end_hour * 60
    return [format_minutes(m) for m in range(first, last + 1, interval_minutes)]


def generate_time_slots_for(config: "TimeSlotConfig") -> list[str]:
    """Wie generate_time_slots, aber aus einer TimeSlotConfig."""
    return generate_time_slots(
        config.start_hour, config.end_hour, config.interval_minutes
    )

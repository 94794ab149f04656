"""Tests für Uhrzeit-Umrechnung und Zeitraster-Labels."""

import pytest

from grid.errors import ConfigurationError, InvalidTimeFormat
from grid.time_slots import generate_time_slots, generate_time_slots_for, validate_grid_params
from grid.timeutils import format_minutes, is_valid_time, to_minutes
from config.schema import TimeSlotConfig


# ─── UHRZEITEN ────────────────────────────────────────────────────────────────

class TestToMinutes:
    def test_basic(self):
        assert to_minutes("00:00") == 0
        assert to_minutes("08:30") == 510
        assert to_minutes("23:59") == 23 * 60 + 59

    def test_24_00_is_end_of_day(self):
        """24:00 ist als Schlusskante erlaubt, 24:30 nicht."""
        assert to_minutes("24:00") == 1440
        with pytest.raises(InvalidTimeFormat):
            to_minutes("24:30")

    @pytest.mark.parametrize("value", ["8:30", "08:60", "25:00", "abc", "", "08-30", None, 830])
    def test_strict_rejects(self, value):
        """Strikter Modus wirft InvalidTimeFormat statt still 0 zu liefern."""
        with pytest.raises(InvalidTimeFormat):
            to_minutes(value)

    def test_invalid_time_format_is_value_error(self):
        with pytest.raises(ValueError):
            to_minutes("xx:yy")

    def test_lenient_coerces(self):
        """Toleranter Modus: kaputte Teile zählen als 0."""
        assert to_minutes("", lenient=True) == 0
        assert to_minutes(None, lenient=True) == 0
        assert to_minutes("abc", lenient=True) == 0
        assert to_minutes("09", lenient=True) == 540
        assert to_minutes("09:xx", lenient=True) == 540
        assert to_minutes("8:5", lenient=True) == 485

    def test_format_minutes(self):
        assert format_minutes(0) == "00:00"
        assert format_minutes(545) == "09:05"
        assert format_minutes(1440) == "24:00"

    def test_is_valid_time(self):
        assert is_valid_time("10:15")
        assert not is_valid_time("10:75")
        assert not is_valid_time(None)


# ─── ZEITRASTER ───────────────────────────────────────────────────────────────

class TestGenerateTimeSlots:
    def test_small_grid(self):
        """08:00–10:00 in 30 min ergibt 5 Labels inkl. Schlusskante."""
        assert generate_time_slots(8, 10, 30) == ["08:00", "08:30", "09:00", "09:30", "10:00"]

    def test_default_grid(self):
        slots = generate_time_slots()
        assert len(slots) == 21
        assert slots[0] == "08:00"
        assert slots[-1] == "18:00"
        assert "17:30" in slots
        assert "18:30" not in slots

    @pytest.mark.parametrize("start,end,interval", [
        (8, 18, 30), (0, 24, 15), (7, 9, 20), (6, 12, 60), (10, 11, 5),
    ])
    def test_length_and_bounds(self, start, end, interval):
        """Länge = (end-start)*(60/interval)+1, streng steigend, erste/letzte Kante."""
        slots = generate_time_slots(start, end, interval)
        assert len(slots) == (end - start) * (60 // interval) + 1
        assert slots[0] == f"{start:02d}:00"
        assert slots[-1] == f"{end:02d}:00"
        minutes = [to_minutes(s) for s in slots]
        assert minutes == sorted(set(minutes))

    def test_start_equals_end(self):
        """Gleiche Start- und Endstunde liefert genau ein Label."""
        assert generate_time_slots(9, 9, 30) == ["09:00"]

    @pytest.mark.parametrize("start,end,interval", [
        (10, 8, 30),    # start nach end
        (8, 18, 0),     # Intervall 0
        (8, 18, -30),   # negatives Intervall
        (8, 18, 45),    # teilt 60 nicht
        (8, 25, 30),    # Stunde außerhalb
        (-1, 8, 30),
    ])
    def test_invalid_params(self, start, end, interval):
        with pytest.raises(ConfigurationError):
            generate_time_slots(start, end, interval)

    def test_non_int_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_grid_params(8.5, 18, 30)
        with pytest.raises(ConfigurationError):
            validate_grid_params(True, 18, 30)

    def test_from_config(self):
        cfg = TimeSlotConfig(start_hour=8, end_hour=10, interval_minutes=60)
        assert generate_time_slots_for(cfg) == ["08:00", "09:00", "10:00"]
        assert cfg.rows == 3

"""Konfigurationsmanager: Laden, Speichern und Validieren.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.schema import CalendarConfig
from grid.errors import ConfigurationError

logger = logging.getLogger(__name__)

yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Wochenkalender — Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "grid": (
        "Zeitraster",
        "interval_minutes muss 60 ohne Rest teilen (15/20/30/60).\n"
        "lenient_times: true behandelt kaputte Uhrzeiten als 00:00 (altes Verhalten).",
    ),
    "colors": (
        "Fachbereichs-Farben",
        "department_id_colors hat Vorrang vor department_colors (Name).",
    ),
    "conflicts": (
        "Doppelbelegungen",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "calendar_config.yaml"

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> CalendarConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.path
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        try:
            with open(target, "r", encoding="utf-8") as f:
                raw = yaml.load(f)
        except YAMLError as e:
            raise ConfigurationError(f"Konfigurationsdatei kein gültiges YAML: {target}\n{e}") from e
        if raw is not None and not isinstance(raw, dict):
            raise ConfigurationError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Erwartet wird ein Mapping auf oberster Ebene, gefunden: {type(raw).__name__}"
            )
        try:
            config = CalendarConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ConfigurationError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        logger.debug(f"Konfiguration geladen: {target}")
        return config

    def load_or_default(self) -> CalendarConfig:
        """Wie load(), liefert ohne Datei aber die Default-Konfiguration."""
        if self.first_run_check():
            from config.defaults import default_calendar_config
            logger.info(f"{self.path} fehlt – nutze Default-Konfiguration")
            return default_calendar_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: CalendarConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        target = Path(path) if path else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: CalendarConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            if field not in cm:
                continue
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "grid" in cm:
            grid_map = CommentedMap(cm["grid"])
            grid_map.yaml_add_eol_comment("Mo–Sa; ausgeblendete Tage weglassen", "day_names")
            cm["grid"] = grid_map

        return cm

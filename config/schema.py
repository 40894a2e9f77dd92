import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablage des automatisch gespeicherten Zustands."""
    # Verzeichnis für den lokalen Speicher
    directory: str = Field("storage",
        description="Verzeichnis für den lokalen Speicher")
    # Fester Schlüssel (= Dateiname ohne .json)
    key: str = Field("teachcalc_data", min_length=1,
        description="Speicher-Schlüssel")


# ─── WOCHENRASTER ───

class GridConfig(BaseModel):
    """Darstellung des Wochenrasters.

    Das Raster hat immer 7 Tage (Montag bis Sonntag) und eine Zeile pro
    voller Stunde von first_hour bis einschließlich last_hour.
    """
    # Anzeigenamen der Wochentage, beginnend mit Montag
    day_names: list[str] = Field(
        default=["Montag", "Dienstag", "Mittwoch", "Donnerstag",
                 "Freitag", "Samstag", "Sonntag"],
        description="Anzeigenamen der Wochentage (Mo–So)")
    # Erste angezeigte Stunde
    first_hour: int = Field(8, ge=0, le=23,
        description="Erste Stunde im Raster")
    # Letzte angezeigte Stunde (Beginn der letzten Zeile)
    last_hour: int = Field(20, ge=0, le=23,
        description="Letzte Stunde im Raster")

    @field_validator("day_names")
    @classmethod
    def _seven_days(cls, v: list[str]) -> list[str]:
        if len(v) != 7:
            raise ValueError(f"Genau 7 Tagesnamen erwartet, erhalten: {len(v)}")
        return v

    @model_validator(mode='after')
    def _check_hours(self):
        if self.first_hour > self.last_hour:
            raise ValueError(
                f"first_hour ({self.first_hour}) > last_hour ({self.last_hour})")
        return self

    @property
    def hours(self) -> list[int]:
        """Alle Stunden des Rasters."""
        return list(range(self.first_hour, self.last_hour + 1))


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Sicherungen und Druckausgaben."""
    # Präfix für Sicherungsdateien (<präfix>-backup-<datum>.json)
    app_prefix: str = Field("teachcalc", min_length=1,
        description="Präfix für Sicherungsdateien")
    # Zielverzeichnis für Sicherungen, PDF und Excel
    output_dir: str = Field("output",
        description="Ausgabeverzeichnis")
    # Überschrift auf Berichten und Druckseiten
    title: str = Field("Stundenplan",
        description="Titel der Berichte")


# ─── LOGGING ───

class LoggingSettings(BaseModel):
    """Log-Ausgabe."""
    # Log-Level (DEBUG, INFO, WARNING, ERROR)
    level: str = Field("INFO", description="Log-Level")
    # Optionale Log-Datei zusätzlich zur Konsole
    log_file: Optional[str] = Field(None, description="Optionale Log-Datei")

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return level


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Anwendung."""
    storage: StorageConfig = Field(default_factory=StorageConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

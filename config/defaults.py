from config.schema import (
    AppConfig,
    ExportConfig,
    GridConfig,
    LoggingSettings,
    StorageConfig,
)


def default_grid() -> GridConfig:
    """Standard-Wochenraster.

    Montag bis Sonntag, 13 Zeilen von 08:00 bis 20:00.
    Jede Stunde dauert genau 60 Minuten und beginnt zur vollen Stunde.
    """
    return GridConfig(
        day_names=["Montag", "Dienstag", "Mittwoch", "Donnerstag",
                   "Freitag", "Samstag", "Sonntag"],
        first_hour=8,
        last_hour=20,
    )


def default_app_config() -> AppConfig:
    """Vollständige Standard-Konfiguration."""
    return AppConfig(
        storage=StorageConfig(directory="storage", key="teachcalc_data"),
        grid=default_grid(),
        export=ExportConfig(app_prefix="teachcalc", output_dir="output",
                            title="Stundenplan"),
        logging=LoggingSettings(level="INFO"),
    )

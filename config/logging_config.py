"""Zentrale Logging-Einrichtung (Rich-Konsole plus optionale Log-Datei)."""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Konfiguriert den Root-Logger.

    Bestehende Handler werden ersetzt, damit wiederholte Aufrufe (Tests,
    mehrfach gestartete CLI-Gruppen) keine doppelten Ausgaben erzeugen.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    root_logger.addHandler(RichHandler(
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    ))

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger.addHandler(file_handler)

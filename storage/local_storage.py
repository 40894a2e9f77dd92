"""Lokaler Schlüssel-Wert-Speicher für den Snapshot.

Ersetzt den Browser-localStorage: Der Wert eines Schlüssels liegt als JSON in
<directory>/<key>.json. Schreib- und Lesefehler werden geloggt und als
Rückgabewert gemeldet, nie als Exception weitergereicht.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.snapshot import Snapshot, SnapshotImportError, parse_snapshot

logger = logging.getLogger(__name__)

STORAGE_KEY = "teachcalc_data"


class LocalStorage:
    """Persistiert den vollständigen Snapshot unter einem festen Schlüssel."""

    def __init__(self, directory: Path, key: str = STORAGE_KEY) -> None:
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def save_snapshot(self, snapshot: Snapshot) -> bool:
        """Schreibt den Snapshot atomar. Gibt False bei Fehlern zurück."""
        stamped = snapshot.stamped(datetime.now(timezone.utc))
        tmp_name: Optional[str] = None
        try:
            payload = json.dumps(stamped.to_payload(), indent=2, ensure_ascii=False)
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Fehler beim Speichern nach {self.path}: {e}")
            if tmp_name is not None:
                self._discard(Path(tmp_name))
            return False

    def _discard(self, tmp_path: Path) -> None:
        """Entfernt eine liegengebliebene Temp-Datei nach einem Schreibfehler."""
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Temp-Datei {tmp_path} konnte nicht entfernt werden: {e}")

    def load_snapshot(self) -> Optional[Snapshot]:
        """Lädt den Snapshot; None wenn nichts gespeichert oder unlesbar."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return parse_snapshot(data)
        except (OSError, json.JSONDecodeError, SnapshotImportError, ValidationError) as e:
            logger.error(f"Fehler beim Laden von {self.path}: {e}")
            return None

    def clear(self) -> bool:
        """Entfernt den gespeicherten Wert."""
        try:
            self.path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.error(f"Fehler beim Löschen von {self.path}: {e}")
            return False

    def size_kb(self) -> float:
        """Größe des gespeicherten Werts in KB (0.0 wenn nicht vorhanden)."""
        try:
            return self.path.stat().st_size / 1024
        except OSError:
            return 0.0

    def __repr__(self) -> str:
        return f"LocalStorage({self.path})"

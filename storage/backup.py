"""Export und Import des Snapshots als JSON-Sicherungsdatei."""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from models.snapshot import Snapshot, SnapshotImportError, parse_snapshot

logger = logging.getLogger(__name__)

APP_PREFIX = "teachcalc"


def backup_filename(prefix: str = APP_PREFIX, day: Optional[date] = None) -> str:
    """Dateiname der Sicherung, z.B. "teachcalc-backup-2026-10-16.json"."""
    day = day or date.today()
    return f"{prefix}-backup-{day.isoformat()}.json"


def export_to_json(
    snapshot: Snapshot, directory: Path, prefix: str = APP_PREFIX
) -> Path:
    """Schreibt den Snapshot als Sicherungsdatei und gibt den Pfad zurück."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    now = datetime.now(timezone.utc)
    path = directory / backup_filename(prefix, now.date())
    stamped = snapshot.stamped(now)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(stamped.to_payload(), f, indent=2, ensure_ascii=False)
    logger.info(f"Sicherung geschrieben: {path}")
    return path


def import_from_json(path: Path) -> Snapshot:
    """Liest und validiert eine Sicherungsdatei.

    Raises:
        SnapshotImportError: Datei unlesbar, kein JSON oder ungültiges Format.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise SnapshotImportError(f"Fehler beim Lesen der Datei {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotImportError(f"Keine gültige JSON-Datei: {path} ({e})") from e
    return parse_snapshot(data)

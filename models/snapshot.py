"""Snapshot: Vollständiger, serialisierbarer Zustand aller vier Sammlungen."""

from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from models.base import EntityModel
from models.group import Group
from models.scheduled_class import ScheduledClass
from models.student import Student
from models.teacher import Teacher

SNAPSHOT_VERSION = "1.0"

# Pflichtfelder im JSON-Format (camelCase wie in den Exportdateien)
REQUIRED_COLLECTIONS = ("teachers", "groups", "students", "scheduledClasses")


class SnapshotImportError(ValueError):
    """Import-Daten sind unvollständig oder ungültig."""


class Snapshot(EntityModel):
    """Lehrkräfte, Gruppen, Schüler und geplante Stunden plus Metadaten."""

    teachers: list[Teacher]
    groups: list[Group]
    students: list[Student]
    scheduled_classes: list[ScheduledClass]
    version: str = SNAPSHOT_VERSION
    last_modified: Optional[datetime] = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-fähiges Dict im Exportformat (camelCase, ohne None-Felder)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def stamped(self, now: datetime) -> "Snapshot":
        """Kopie mit aktueller Formatversion und Änderungszeitpunkt."""
        return self.model_copy(update={
            "version": SNAPSHOT_VERSION,
            "last_modified": now,
        })

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        group_classes = sum(1 for c in self.scheduled_classes if c.is_group_class)
        individual = len(self.scheduled_classes) - group_classes
        lines = [
            f"Lehrkräfte: {len(self.teachers)}",
            f"Schüler: {len(self.students)}",
            f"Gruppen: {len(self.groups)}",
            f"Stunden: {len(self.scheduled_classes)} "
            f"({group_classes} Gruppe, {individual} Einzel)",
            f"Stand: {self.last_modified.isoformat()}" if self.last_modified else "",
        ]
        return "\n".join(l for l in lines if l)


def parse_snapshot(data: Any) -> Snapshot:
    """Validiert rohe Import-Daten und baut daraus einen Snapshot.

    Fehlen Sammlungen, nennt die Fehlermeldung alle fehlenden Felder.
    """
    if not isinstance(data, dict):
        raise SnapshotImportError(
            "Ungültiges Datenformat: JSON-Objekt erwartet, "
            f"erhalten: {type(data).__name__}"
        )
    missing = [
        name for name in REQUIRED_COLLECTIONS
        if data.get(name) is None and data.get(_snake(name)) is None
    ]
    if missing:
        raise SnapshotImportError(
            "Ungültiges Datenformat: fehlende Pflichtfelder: " + ", ".join(missing)
        )
    try:
        return Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotImportError(
            f"Ungültiges Datenformat: {e.error_count()} Validierungsfehler\n{e}"
        ) from e


def _snake(camel: str) -> str:
    return "".join(f"_{ch.lower()}" if ch.isupper() else ch for ch in camel)

"""EntityStore – alleinige Quelle der Wahrheit für alle vier Sammlungen.

Der Store wird von der Kompositionswurzel (CLI, TUI, Tests) erzeugt und
weitergereicht. Jede angewandte Änderung schreibt den kompletten Snapshot
über das Storage-Objekt zurück; Fehler beim Schreiben werden geloggt und
rollen den Speicherzustand nicht zurück.

Kaskaden beim Löschen:
  - Lehrkraft → deren Gruppen und alle Stunden der Lehrkraft
  - Gruppe    → alle Stunden der Gruppe
  - Schüler   → nur aus den Mitgliederlisten entfernt; Einzelstunden bleiben
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from models.group import Group
from models.scheduled_class import ScheduledClass
from models.snapshot import SNAPSHOT_VERSION, Snapshot, parse_snapshot
from models.student import Student
from models.teacher import Teacher
from scheduler.conflicts import Conflict, find_conflict

if TYPE_CHECKING:
    from storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)

_E = TypeVar("_E", Teacher, Group, Student, ScheduledClass)


def generate_id(prefix: str) -> str:
    """Neue, nie wiederverwendete ID, z.B. "sc3f9c0a12b4de"."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"


class MutationReason(str, Enum):
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    NO_OP = "no_op"


@dataclass(frozen=True)
class MutationResult:
    """Ergebnis einer Änderung am Store."""

    ok: bool
    reason: Optional[MutationReason] = None
    conflict: Optional[Conflict] = None
    entity_id: Optional[str] = None

    @classmethod
    def success(cls, entity_id: Optional[str] = None) -> "MutationResult":
        return cls(ok=True, entity_id=entity_id)

    @classmethod
    def rejected(cls, conflict: Conflict) -> "MutationResult":
        return cls(ok=False, reason=MutationReason.CONFLICT, conflict=conflict)

    @classmethod
    def not_found(cls, entity_id: str) -> "MutationResult":
        return cls(ok=False, reason=MutationReason.NOT_FOUND, entity_id=entity_id)

    @classmethod
    def no_op(cls, entity_id: Optional[str] = None) -> "MutationResult":
        return cls(ok=False, reason=MutationReason.NO_OP, entity_id=entity_id)


class EntityStore:
    """In-Memory-Zustand plus Änderungs-API mit Konflikt- und Kaskadenregeln."""

    def __init__(
        self,
        snapshot: Optional[Snapshot] = None,
        storage: Optional["LocalStorage"] = None,
    ) -> None:
        self._storage = storage
        self._teachers: list[Teacher] = []
        self._groups: list[Group] = []
        self._students: list[Student] = []
        self._classes: list[ScheduledClass] = []
        if snapshot is not None:
            self._replace_all(snapshot)

    @classmethod
    def load(
        cls,
        storage: Optional["LocalStorage"],
        seed: Optional[Callable[[], Snapshot]] = None,
    ) -> "EntityStore":
        """Initialisiert aus dem gespeicherten Snapshot, sonst aus den Seed-Daten."""
        snapshot = storage.load_snapshot() if storage is not None else None
        if snapshot is None:
            if seed is None:
                from data.seed_data import seed_snapshot
                seed = seed_snapshot
            snapshot = seed()
            logger.info("Kein gespeicherter Zustand gefunden – Seed-Daten geladen")
        return cls(snapshot=snapshot, storage=storage)

    # ─── Lesen ───

    @property
    def teachers(self) -> list[Teacher]:
        return list(self._teachers)

    @property
    def groups(self) -> list[Group]:
        return list(self._groups)

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    @property
    def scheduled_classes(self) -> list[ScheduledClass]:
        return list(self._classes)

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return _find(self._teachers, teacher_id)

    def get_group(self, group_id: str) -> Optional[Group]:
        return _find(self._groups, group_id)

    def get_student(self, student_id: str) -> Optional[Student]:
        return _find(self._students, student_id)

    def get_scheduled_class(self, class_id: str) -> Optional[ScheduledClass]:
        return _find(self._classes, class_id)

    # ─── Geplante Stunden ───

    def add_scheduled_class(self, candidate: ScheduledClass) -> MutationResult:
        """Legt eine Stunde mit neuer ID an, sofern kein Konflikt besteht."""
        new_class = candidate.model_copy(update={"id": generate_id("sc")})
        conflict = find_conflict(new_class, self._classes)
        if conflict is not None:
            return MutationResult.rejected(conflict)
        self._classes.append(new_class)
        self._persist()
        return MutationResult.success(new_class.id)

    def update_scheduled_class(self, updated: ScheduledClass) -> MutationResult:
        """Ersetzt die Stunde mit derselben ID, sofern kein Konflikt besteht."""
        conflict = find_conflict(updated, self._classes)
        if conflict is not None:
            return MutationResult.rejected(conflict)
        if not _replace(self._classes, updated):
            return MutationResult.not_found(updated.id)
        self._persist()
        return MutationResult.success(updated.id)

    def delete_scheduled_class(self, class_id: str) -> MutationResult:
        self._classes = [c for c in self._classes if c.id != class_id]
        self._persist()
        return MutationResult.success(class_id)

    # ─── Lehrkräfte ───

    def add_teacher(self, teacher: Teacher) -> MutationResult:
        self._teachers.append(teacher)
        self._persist()
        return MutationResult.success(teacher.id)

    def update_teacher(self, teacher: Teacher) -> MutationResult:
        return self._update(self._teachers, teacher)

    def delete_teacher(self, teacher_id: str) -> MutationResult:
        """Löscht die Lehrkraft samt ihrer Gruppen und Stunden."""
        self._teachers = [t for t in self._teachers if t.id != teacher_id]
        self._groups = [g for g in self._groups if g.teacher_id != teacher_id]
        self._classes = [c for c in self._classes if c.teacher_id != teacher_id]
        self._persist()
        return MutationResult.success(teacher_id)

    # ─── Gruppen ───

    def add_group(self, group: Group) -> MutationResult:
        self._groups.append(group)
        self._persist()
        return MutationResult.success(group.id)

    def update_group(self, group: Group) -> MutationResult:
        return self._update(self._groups, group)

    def delete_group(self, group_id: str) -> MutationResult:
        """Löscht die Gruppe samt ihrer Stunden."""
        self._groups = [g for g in self._groups if g.id != group_id]
        self._classes = [c for c in self._classes if c.group_id != group_id]
        self._persist()
        return MutationResult.success(group_id)

    # ─── Schüler ───

    def add_student(self, student: Student) -> MutationResult:
        self._students.append(student)
        self._persist()
        return MutationResult.success(student.id)

    def update_student(self, student: Student) -> MutationResult:
        return self._update(self._students, student)

    def delete_student(self, student_id: str) -> MutationResult:
        """Löscht den Schüler und entfernt ihn aus allen Gruppen.

        Einzelstunden des Schülers bleiben bestehen.
        """
        self._students = [s for s in self._students if s.id != student_id]
        self._groups = [
            g.without_student(student_id) if student_id in g.student_ids else g
            for g in self._groups
        ]
        self._persist()
        return MutationResult.success(student_id)

    # ─── Snapshot / Import / Löschen ───

    def export_snapshot(self) -> Snapshot:
        """Versionierter Snapshot aller Sammlungen mit Änderungszeitpunkt."""
        return Snapshot(
            teachers=list(self._teachers),
            groups=list(self._groups),
            students=list(self._students),
            scheduled_classes=list(self._classes),
            version=SNAPSHOT_VERSION,
            last_modified=datetime.now(timezone.utc),
        )

    def import_snapshot(self, data: Union[Snapshot, dict[str, Any]]) -> MutationResult:
        """Ersetzt alle vier Sammlungen vollständig (kein Merge).

        Raises:
            SnapshotImportError: Wenn Pflichtfelder fehlen oder Einträge ungültig sind.
        """
        snapshot = data if isinstance(data, Snapshot) else parse_snapshot(data)
        self._replace_all(snapshot)
        logger.info(
            f"Snapshot importiert: {len(self._teachers)} Lehrkräfte, "
            f"{len(self._groups)} Gruppen, {len(self._students)} Schüler, "
            f"{len(self._classes)} Stunden"
        )
        self._persist()
        return MutationResult.success()

    def clear_all(self) -> MutationResult:
        """Leert alle Sammlungen und speichert den leeren Zustand.

        Der leere Snapshot wird gespeichert, damit beim nächsten Start nicht
        wieder die Seed-Daten geladen werden.
        """
        self._teachers, self._groups, self._students, self._classes = [], [], [], []
        if self._storage is not None and not self._storage.clear():
            logger.warning("Gespeicherter Zustand konnte nicht gelöscht werden")
        self._persist()
        return MutationResult.success()

    # ─── Intern ───

    def _replace_all(self, snapshot: Snapshot) -> None:
        self._teachers = list(snapshot.teachers)
        self._groups = list(snapshot.groups)
        self._students = list(snapshot.students)
        self._classes = list(snapshot.scheduled_classes)

    def _update(self, items: list, entity) -> MutationResult:
        if not _replace(items, entity):
            return MutationResult.not_found(entity.id)
        self._persist()
        return MutationResult.success(entity.id)

    def _persist(self) -> None:
        if self._storage is None:
            return
        if not self._storage.save_snapshot(self.export_snapshot()):
            logger.warning("Zustand konnte nicht gespeichert werden – Änderung nur im Speicher")

    def __repr__(self) -> str:
        return (
            f"EntityStore({len(self._teachers)} Lehrkräfte, {len(self._groups)} Gruppen, "
            f"{len(self._students)} Schüler, {len(self._classes)} Stunden)"
        )


def _find(items: list[_E], entity_id: str) -> Optional[_E]:
    return next((e for e in items if e.id == entity_id), None)


def _replace(items: list, entity) -> bool:
    """Ersetzt alle Einträge mit der ID des Objekts; True wenn mindestens einer gefunden."""
    found = False
    for idx, existing in enumerate(items):
        if existing.id == entity.id:
            items[idx] = entity
            found = True
    return found

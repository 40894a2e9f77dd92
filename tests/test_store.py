"""Tests für den EntityStore: Konfliktregeln, Kaskaden und Persistenz."""

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from data.seed_data import seed_snapshot
from models.group import Group
from models.scheduled_class import ScheduledClass
from models.snapshot import Snapshot, SnapshotImportError
from models.student import Student
from models.teacher import Teacher
from scheduler.conflicts import ConflictKind
from scheduler.store import EntityStore, MutationReason, generate_id
from storage.local_storage import LocalStorage

MONDAY = datetime(2026, 10, 19)


# ─── Fixtures ─────────────────────────────────────────────────────────────────

def _snapshot() -> Snapshot:
    return Snapshot(
        teachers=[Teacher(id="t1", name="Dr. Schmidt"), Teacher(id="t2", name="Prof. Jung")],
        students=[Student(id="s1", name="Anna"), Student(id="s2", name="Ben")],
        groups=[
            Group(id="g1", name="Mathematik 101", teacher_id="t1", student_ids=["s1", "s2"]),
            Group(id="g2", name="Physik 201", teacher_id="t2", student_ids=["s1"]),
        ],
        scheduled_classes=[
            ScheduledClass(id="sc1", teacher_id="t1", group_id="g1",
                           start_time=MONDAY.replace(hour=10)),
            ScheduledClass(id="sc2", teacher_id="t2", group_id="g2",
                           start_time=MONDAY.replace(hour=11)),
            ScheduledClass(id="sc3", teacher_id="t2", student_id="s2",
                           start_time=MONDAY.replace(hour=14)),
        ],
    )


@pytest.fixture
def store() -> EntityStore:
    return EntityStore(snapshot=_snapshot())


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage")


# ─── Stunden ──────────────────────────────────────────────────────────────────

class TestScheduledClasses:
    def test_add_assigns_new_id(self, store: EntityStore):
        candidate = ScheduledClass(teacher_id="t1", group_id="g1",
                                   start_time=MONDAY.replace(hour=12))
        result = store.add_scheduled_class(candidate)
        assert result.ok
        assert result.entity_id.startswith("sc")
        assert store.get_scheduled_class(result.entity_id).start_time == MONDAY.replace(hour=12)

    def test_add_rejected_on_teacher_conflict(self, store: EntityStore):
        """Dr. Schmidt hat Montag 10:00 schon Mathematik 101."""
        candidate = ScheduledClass(teacher_id="t1", student_id="s2",
                                   start_time=MONDAY.replace(hour=10))
        result = store.add_scheduled_class(candidate)
        assert not result.ok
        assert result.reason == MutationReason.CONFLICT
        assert result.conflict.kind == ConflictKind.TEACHER
        assert len(store.scheduled_classes) == 3

    def test_add_rejected_on_group_conflict(self, store: EntityStore):
        candidate = ScheduledClass(teacher_id="t2", group_id="g1",
                                   start_time=MONDAY.replace(hour=10))
        result = store.add_scheduled_class(candidate)
        assert result.reason == MutationReason.CONFLICT
        assert result.conflict.kind == ConflictKind.GROUP

    def test_add_accepted_next_to_other_teacher_and_group(self, store: EntityStore):
        """Andere Lehrkraft, andere Gruppe, gleiche Stunde wie sc1 → angenommen."""
        candidate = ScheduledClass(teacher_id="t2", group_id="g2",
                                   start_time=MONDAY.replace(hour=10))
        result = store.add_scheduled_class(candidate)
        assert result.ok
        assert result.reason is None
        assert len(store.scheduled_classes) == 4
        same_hour = [c for c in store.scheduled_classes
                     if c.start_time == MONDAY.replace(hour=10)]
        assert {c.id for c in same_hour} == {"sc1", result.entity_id}

    def test_update_moves_class(self, store: EntityStore):
        moved = store.get_scheduled_class("sc1").rescheduled(MONDAY.replace(hour=9))
        assert store.update_scheduled_class(moved).ok
        assert store.get_scheduled_class("sc1").end_time == MONDAY.replace(hour=10)

    def test_update_rejected_keeps_old_state(self, store: EntityStore):
        """sc2 (t2) auf 14:00 kollidiert mit der Einzelstunde sc3 derselben Lehrkraft."""
        clash = store.get_scheduled_class("sc2").rescheduled(MONDAY.replace(hour=14))
        result = store.update_scheduled_class(clash)
        assert result.reason == MutationReason.CONFLICT
        assert store.get_scheduled_class("sc2").start_time == MONDAY.replace(hour=11)

    def test_update_unknown_id(self, store: EntityStore):
        ghost = ScheduledClass(id="nope", teacher_id="t1", group_id="g1",
                               start_time=MONDAY.replace(hour=18))
        result = store.update_scheduled_class(ghost)
        assert result.reason == MutationReason.NOT_FOUND

    def test_delete(self, store: EntityStore):
        assert store.delete_scheduled_class("sc1").ok
        assert store.get_scheduled_class("sc1") is None
        assert len(store.scheduled_classes) == 2

    def test_delete_unknown_is_harmless(self, store: EntityStore):
        assert store.delete_scheduled_class("nope").ok
        assert len(store.scheduled_classes) == 3

    def test_lists_are_copies(self, store: EntityStore):
        store.scheduled_classes.clear()
        assert len(store.scheduled_classes) == 3

    def test_generate_id_unique(self):
        ids = {generate_id("sc") for _ in range(200)}
        assert len(ids) == 200


# ─── Kaskaden ─────────────────────────────────────────────────────────────────

class TestCascades:
    def test_delete_teacher_removes_groups_and_classes(self, store: EntityStore):
        store.delete_teacher("t2")
        assert store.get_teacher("t2") is None
        assert [g.id for g in store.groups] == ["g1"]
        assert [c.id for c in store.scheduled_classes] == ["sc1"]

    def test_delete_group_removes_its_classes(self, store: EntityStore):
        store.delete_group("g1")
        assert store.get_group("g1") is None
        assert {c.id for c in store.scheduled_classes} == {"sc2", "sc3"}
        assert store.get_teacher("t1") is not None

    def test_delete_student_strips_membership(self, store: EntityStore):
        store.delete_student("s1")
        assert store.get_group("g1").student_ids == ["s2"]
        assert store.get_group("g2").student_ids == []

    def test_delete_student_keeps_individual_classes(self, store: EntityStore):
        store.delete_student("s2")
        assert store.get_scheduled_class("sc3") is not None

    def test_update_teacher(self, store: EntityStore):
        renamed = store.get_teacher("t1").model_copy(update={"name": "Dr. Schmidt-Weber"})
        assert store.update_teacher(renamed).ok
        assert store.get_teacher("t1").name == "Dr. Schmidt-Weber"

    def test_update_unknown_group(self, store: EntityStore):
        ghost = Group(id="g9", name="Geist", teacher_id="t1")
        assert store.update_group(ghost).reason == MutationReason.NOT_FOUND

    def test_add_student(self, store: EntityStore):
        store.add_student(Student(id="s3", name="Cem", crm_profile_link="link3"))
        assert store.get_student("s3").crm_profile_link == "link3"


# ─── Persistenz ───────────────────────────────────────────────────────────────

class TestPersistence:
    def test_load_falls_back_to_seed(self, storage: LocalStorage):
        store = EntityStore.load(storage)
        assert [t.name for t in store.teachers] == ["Dr. Schmidt", "Prof. Jung"]
        assert store.get_group("g1").student_ids == ["s1", "s2"]
        assert not storage.path.exists()   # Laden allein schreibt nichts

    def test_seed_class_today_at_ten(self):
        snap = seed_snapshot(today=date(2026, 10, 16))
        assert snap.scheduled_classes[0].start_time == datetime(2026, 10, 16, 10)
        assert snap.scheduled_classes[0].end_time == datetime(2026, 10, 16, 11)

    def test_mutation_persists(self, storage: LocalStorage):
        store = EntityStore(snapshot=_snapshot(), storage=storage)
        store.delete_scheduled_class("sc1")
        reloaded = EntityStore.load(storage)
        assert reloaded.get_scheduled_class("sc1") is None
        assert len(reloaded.scheduled_classes) == 2

    def test_saved_file_format(self, storage: LocalStorage):
        store = EntityStore(snapshot=_snapshot(), storage=storage)
        store.add_teacher(Teacher(id="t3", name="Frau Meier"))
        data = json.loads(storage.path.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert "lastModified" in data
        assert set(data) >= {"teachers", "groups", "students", "scheduledClasses"}
        assert data["scheduledClasses"][0]["teacherId"] == "t1"

    def test_rejected_mutation_does_not_persist(self, storage: LocalStorage):
        store = EntityStore(snapshot=_snapshot(), storage=storage)
        store.add_scheduled_class(ScheduledClass(
            teacher_id="t1", student_id="s1", start_time=MONDAY.replace(hour=10)))
        assert not storage.path.exists()

    def test_save_failure_keeps_memory(self, tmp_path: Path):
        """Schreibfehler wird geloggt; der Speicherzustand bleibt erhalten."""
        blocker = tmp_path / "blocked"
        blocker.write_text("kein Verzeichnis")
        store = EntityStore(snapshot=_snapshot(), storage=LocalStorage(blocker))
        assert store.add_teacher(Teacher(id="t3", name="Frau Meier")).ok
        assert store.get_teacher("t3") is not None

    def test_clear_all(self, storage: LocalStorage):
        store = EntityStore(snapshot=_snapshot(), storage=storage)
        store.add_teacher(Teacher(id="t3", name="Frau Meier"))
        assert storage.path.exists()
        store.clear_all()
        assert store.teachers == [] and store.scheduled_classes == []
        data = json.loads(storage.path.read_text(encoding="utf-8"))
        assert data["teachers"] == [] and data["scheduledClasses"] == []

    def test_after_clear_load_stays_empty(self, storage: LocalStorage):
        """Nach dem Löschen kommen beim Neustart keine Seed-Daten zurück."""
        store = EntityStore(snapshot=_snapshot(), storage=storage)
        store.add_teacher(Teacher(id="t3", name="Frau Meier"))
        store.clear_all()
        reloaded = EntityStore.load(storage)
        assert reloaded.teachers == []
        assert reloaded.groups == []
        assert reloaded.students == []
        assert reloaded.scheduled_classes == []


# ─── Import / Export ──────────────────────────────────────────────────────────

class TestImportExport:
    def test_export_snapshot_metadata(self, store: EntityStore):
        snap = store.export_snapshot()
        assert snap.version == "1.0"
        assert snap.last_modified is not None
        assert len(snap.scheduled_classes) == 3

    def test_import_replaces_everything(self, store: EntityStore):
        other = EntityStore(snapshot=seed_snapshot(today=date(2026, 10, 16)))
        store.import_snapshot(other.export_snapshot().to_payload())
        assert [t.id for t in store.teachers] == ["t1", "t2"]
        assert [g.id for g in store.groups] == ["g1"]
        assert [c.id for c in store.scheduled_classes] == ["sc1"]

    def test_import_missing_fields_leaves_state(self, store: EntityStore):
        with pytest.raises(SnapshotImportError):
            store.import_snapshot({"teachers": []})
        assert len(store.teachers) == 2

    def test_import_persists(self, storage: LocalStorage):
        store = EntityStore(storage=storage)
        store.import_snapshot(_snapshot())
        assert len(EntityStore.load(storage).scheduled_classes) == 3

    def test_roundtrip_via_payload(self, store: EntityStore):
        payload = store.export_snapshot().to_payload()
        fresh = EntityStore()
        fresh.import_snapshot(payload)
        assert fresh.scheduled_classes == store.scheduled_classes
        assert fresh.groups == store.groups

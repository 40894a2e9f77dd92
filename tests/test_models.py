"""Tests für die Datenmodelle: Stunden, Slots und Snapshot-Parsing."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from models import (
    Group, ScheduledClass, Slot, Snapshot, SnapshotImportError, Student, Teacher,
    parse_snapshot,
)
from models.slot import as_local_datetime, hour_key

MONDAY = datetime(2026, 10, 19)   # Montag


# ─── SCHEDULED CLASS ──────────────────────────────────────────────────────────

class TestScheduledClass:
    def test_end_time_is_derived(self):
        """end_time liegt immer genau eine Stunde nach start_time."""
        c = ScheduledClass(teacher_id="t1", group_id="g1", start_time=MONDAY.replace(hour=9))
        assert c.end_time == MONDAY.replace(hour=10)

    def test_end_time_input_is_ignored(self):
        """Ein abweichendes end_time wird überschrieben."""
        c = ScheduledClass(teacher_id="t1", group_id="g1",
                           start_time=MONDAY.replace(hour=9),
                           end_time=MONDAY.replace(hour=17))
        assert c.end_time == MONDAY.replace(hour=10)

    def test_start_must_be_full_hour(self):
        with pytest.raises(ValidationError):
            ScheduledClass(teacher_id="t1", group_id="g1",
                           start_time=MONDAY.replace(hour=9, minute=30))

    def test_group_xor_student_both(self):
        """Gruppe UND Schüler gleichzeitig → Fehler."""
        with pytest.raises(ValidationError):
            ScheduledClass(teacher_id="t1", group_id="g1", student_id="s1",
                           start_time=MONDAY)

    def test_group_xor_student_none(self):
        """Weder Gruppe noch Schüler → Fehler."""
        with pytest.raises(ValidationError):
            ScheduledClass(teacher_id="t1", start_time=MONDAY)

    def test_empty_string_counts_as_missing(self):
        with pytest.raises(ValidationError):
            ScheduledClass(teacher_id="t1", group_id="", student_id="",
                           start_time=MONDAY)

    def test_is_group_class(self):
        group = ScheduledClass(teacher_id="t1", group_id="g1", start_time=MONDAY)
        single = ScheduledClass(teacher_id="t1", student_id="s1", start_time=MONDAY)
        assert group.is_group_class
        assert not single.is_group_class

    def test_camel_case_aliases(self):
        """Exportformat (camelCase) wird gelesen und geschrieben."""
        c = ScheduledClass.model_validate({
            "id": "sc1", "teacherId": "t1", "groupId": "g1",
            "startTime": "2026-10-19T10:00:00",
        })
        assert c.teacher_id == "t1"
        dumped = c.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert dumped["startTime"] == "2026-10-19T10:00:00"
        assert dumped["endTime"] == "2026-10-19T11:00:00"
        assert "studentId" not in dumped

    def test_aware_start_is_converted_to_local(self):
        aware = datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc)
        c = ScheduledClass(teacher_id="t1", group_id="g1", start_time=aware)
        assert c.start_time.tzinfo is None
        assert c.start_time == aware.astimezone().replace(tzinfo=None)

    def test_rescheduled_recomputes_end(self):
        c = ScheduledClass(id="sc1", teacher_id="t1", group_id="g1",
                           start_time=MONDAY.replace(hour=9))
        moved = c.rescheduled(MONDAY.replace(hour=14))
        assert moved.id == "sc1"
        assert moved.end_time == MONDAY.replace(hour=15)
        assert c.start_time == MONDAY.replace(hour=9)   # Original unverändert

    def test_entities_are_frozen(self):
        t = Teacher(id="t1", name="Dr. Schmidt")
        with pytest.raises(ValidationError):
            t.name = "Anders"


# ─── SLOT ─────────────────────────────────────────────────────────────────────

class TestSlot:
    def test_slot_id_format(self):
        assert Slot(0, 9).slot_id == "cell-Monday-09:00"
        assert Slot(6, 20).slot_id == "cell-Sunday-20:00"

    def test_from_slot_id(self):
        assert Slot.from_slot_id("cell-Tuesday-10:00") == Slot(1, 10)

    @pytest.mark.parametrize("raw", [
        None, "", "calendar", "cell-Funday-10:00", "cell-Monday-xx:00",
        "cell-Monday-25:00", "box-Monday-10:00",
    ])
    def test_from_slot_id_invalid(self, raw):
        assert Slot.from_slot_id(raw) is None

    def test_of_start_time(self):
        assert Slot.of(MONDAY + timedelta(days=2, hours=15)) == Slot(2, 15)

    def test_invalid_day_raises(self):
        with pytest.raises(ValueError):
            Slot(7, 10)

    def test_hour_key_truncates(self):
        assert hour_key(MONDAY.replace(hour=9, minute=45)) == MONDAY.replace(hour=9)

    def test_as_local_datetime_parses_iso(self):
        assert as_local_datetime("2026-10-19T09:00:00") == MONDAY.replace(hour=9)


# ─── SNAPSHOT ─────────────────────────────────────────────────────────────────

class TestSnapshot:
    def _payload(self) -> dict:
        return {
            "teachers": [{"id": "t1", "name": "Dr. Schmidt"}],
            "groups": [{"id": "g1", "name": "Mathe", "teacherId": "t1", "studentIds": ["s1"]}],
            "students": [{"id": "s1", "name": "Anna", "crmProfileLink": "link1"}],
            "scheduledClasses": [
                {"id": "sc1", "teacherId": "t1", "groupId": "g1",
                 "startTime": "2026-10-19T10:00:00", "endTime": "2026-10-19T11:00:00"},
            ],
            "version": "1.0",
        }

    def test_parse_valid(self):
        snap = parse_snapshot(self._payload())
        assert snap.students[0].crm_profile_link == "link1"
        assert snap.groups[0].student_ids == ["s1"]
        assert len(snap.scheduled_classes) == 1

    def test_parse_missing_collections(self):
        """Fehlermeldung nennt alle fehlenden Pflichtfelder."""
        with pytest.raises(SnapshotImportError) as exc:
            parse_snapshot({"teachers": []})
        msg = str(exc.value)
        assert "groups" in msg and "students" in msg and "scheduledClasses" in msg

    def test_parse_not_a_dict(self):
        with pytest.raises(SnapshotImportError):
            parse_snapshot([1, 2, 3])

    def test_parse_invalid_entry(self):
        payload = self._payload()
        payload["scheduledClasses"][0]["startTime"] = "2026-10-19T10:30:00"
        with pytest.raises(SnapshotImportError):
            parse_snapshot(payload)

    def test_payload_roundtrip(self):
        snap = parse_snapshot(self._payload())
        again = parse_snapshot(snap.to_payload())
        assert again == snap

    def test_stamped_sets_metadata(self):
        snap = Snapshot(teachers=[], groups=[], students=[], scheduled_classes=[],
                        version="0.9")
        now = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
        stamped = snap.stamped(now)
        assert stamped.version == "1.0"
        assert stamped.last_modified == now
        assert stamped.to_payload()["lastModified"].startswith("2026-10-16T12:00:00")

    def test_group_without_student(self):
        g = Group(id="g1", name="Mathe", teacher_id="t1", student_ids=["s1", "s2"])
        assert g.without_student("s1").student_ids == ["s2"]
        assert g.student_ids == ["s1", "s2"]

    def test_student_link_optional(self):
        assert Student(id="s9", name="Cem").crm_profile_link is None

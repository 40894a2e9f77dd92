from models.teacher import Teacher
from models.student import Student
from models.group import Group
from models.scheduled_class import ScheduledClass
from models.slot import Slot
from models.snapshot import Snapshot, SnapshotImportError, parse_snapshot

__all__ = [
    "Teacher",
    "Student",
    "Group",
    "ScheduledClass",
    "Slot",
    "Snapshot",
    "SnapshotImportError",
    "parse_snapshot",
]

"""Filter und Suche für Kalender und Verwaltungslisten."""

from typing import Iterable, Optional, Sequence, TypeVar

from models.group import Group
from models.scheduled_class import ScheduledClass
from models.slot import Slot

_Named = TypeVar("_Named")


def filter_classes(
    classes: Iterable[ScheduledClass],
    teacher_id: Optional[str] = None,
    group_id: Optional[str] = None,
) -> list[ScheduledClass]:
    """Stunden nach Lehrkraft und/oder Gruppe filtern (beide Filter UND-verknüpft)."""
    result = list(classes)
    if teacher_id:
        result = [c for c in result if c.teacher_id == teacher_id]
    if group_id:
        result = [c for c in result if c.group_id == group_id]
    return result


def matches_group_search(
    cls: ScheduledClass, groups_by_id: dict[str, Group], query: str
) -> bool:
    """True wenn der Gruppenname der Stunde den Suchbegriff enthält.

    Leerer Suchbegriff hebt nichts hervor.
    """
    query = query.strip().lower()
    if not query or not cls.group_id:
        return False
    group = groups_by_id.get(cls.group_id)
    return group is not None and query in group.name.lower()


def classes_in_slot(
    classes: Iterable[ScheduledClass], slot: Slot
) -> list[ScheduledClass]:
    """Alle Stunden, die auf Wochentag und Stunde des Slots fallen (jede Woche)."""
    return [c for c in classes if Slot.of(c.start_time) == slot]


def search_by_name(items: Sequence[_Named], query: str) -> list[_Named]:
    """Einträge, deren Name den Suchbegriff enthält (Groß-/Kleinschreibung egal)."""
    query = query.strip().lower()
    if not query:
        return list(items)
    return [item for item in items if query in item.name.lower()]


def groups_of_student(groups: Iterable[Group], student_id: str) -> list[Group]:
    return [g for g in groups if student_id in g.student_ids]


def individual_classes_of_student(
    classes: Iterable[ScheduledClass], student_id: str
) -> list[ScheduledClass]:
    return [c for c in classes if c.student_id == student_id]

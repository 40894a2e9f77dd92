"""Kern: Konfliktprüfung, Entity-Store und Umplanung per Drag-and-Drop."""

from scheduler.conflicts import Conflict, ConflictKind, find_conflict, has_conflict
from scheduler.store import EntityStore, MutationReason, MutationResult, generate_id
from scheduler.placement import DropEvent, apply_drop, reschedule

__all__ = [
    "Conflict",
    "ConflictKind",
    "find_conflict",
    "has_conflict",
    "EntityStore",
    "MutationReason",
    "MutationResult",
    "generate_id",
    "DropEvent",
    "apply_drop",
    "reschedule",
]

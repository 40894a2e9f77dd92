"""Umplanen per Drag-and-Drop.

Ein Drop-Ereignis nennt die Quell- und Zielzelle ("cell-Monday-09:00") und
die ID der gezogenen Stunde. Die Stunde wird innerhalb derselben Woche
(Montag bis Sonntag) auf Tag und Stunde der Zielzelle verschoben und läuft
über update_scheduled_class, unterliegt also der Konfliktprüfung.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from models.scheduled_class import ScheduledClass
from models.slot import Slot, as_local_datetime
from scheduler.store import EntityStore, MutationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DropEvent:
    """Ein abgeschlossener Drag-Vorgang aus der Oberfläche."""

    class_id: str
    source_slot_id: str
    source_index: int = 0
    destination_slot_id: Optional[str] = None   # None = außerhalb abgelegt
    destination_index: int = 0

    @property
    def is_same_position(self) -> bool:
        return (
            self.source_slot_id == self.destination_slot_id
            and self.source_index == self.destination_index
        )


def reschedule(cls: ScheduledClass, slot: Slot) -> ScheduledClass:
    """Verschiebt die Stunde auf Tag/Stunde des Slots in derselben Woche."""
    start = as_local_datetime(cls.start_time)
    week_start = start - timedelta(days=start.weekday())
    new_start = (week_start + timedelta(days=slot.day)).replace(
        hour=slot.hour, minute=0, second=0, microsecond=0,
    )
    return cls.rescheduled(new_start)


def apply_drop(store: EntityStore, event: DropEvent) -> MutationResult:
    """Wendet ein Drop-Ereignis auf den Store an."""
    if event.destination_slot_id is None or event.is_same_position:
        return MutationResult.no_op(event.class_id)

    dragged = store.get_scheduled_class(event.class_id)
    if dragged is None:
        logger.debug(f"Drop ignoriert: unbekannte Stunde {event.class_id}")
        return MutationResult.not_found(event.class_id)

    slot = Slot.from_slot_id(event.destination_slot_id)
    if slot is None:
        return MutationResult.no_op(event.class_id)

    result = store.update_scheduled_class(reschedule(dragged, slot))
    if result.ok:
        logger.info(f"Stunde {event.class_id} verschoben nach {slot}")
    return result

"""Konfliktprüfung für geplante Stunden.

Ein Konflikt liegt vor, wenn eine andere Stunde derselben Lehrkraft ODER
derselben Gruppe in derselben vollen Stunde liegt. Einzelunterricht wird
nicht gegen denselben Schüler geprüft (siehe Integritätsprüfung).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from models.scheduled_class import ScheduledClass
from models.slot import hour_key

logger = logging.getLogger(__name__)


class ConflictKind(str, Enum):
    TEACHER = "teacher"
    GROUP = "group"


@dataclass(frozen=True)
class Conflict:
    """Gefundene Doppelbelegung."""

    kind: ConflictKind
    existing_id: str       # ID der bereits eingeplanten Stunde
    start_time: datetime   # Volle Stunde der Kollision

    def describe(self) -> str:
        when = self.start_time.strftime("%Y-%m-%d %H:%M")
        if self.kind == ConflictKind.TEACHER:
            return f"Lehrkraft ist um {when} bereits eingeplant (Stunde {self.existing_id})."
        return f"Gruppe ist um {when} bereits eingeplant (Stunde {self.existing_id})."


def find_conflict(
    candidate: ScheduledClass, others: Iterable[ScheduledClass]
) -> Optional[Conflict]:
    """Gibt den ersten Konflikt des Kandidaten zurück oder None.

    Einträge mit derselben ID wie der Kandidat werden übersprungen, damit
    eine Stunde beim Aktualisieren nicht mit ihrem alten Stand kollidiert.
    Zeitpunkte dürfen als datetime oder ISO-String vorliegen.
    """
    candidate_hour = hour_key(candidate.start_time)

    for existing in others:
        if existing.id == candidate.id:
            continue
        if hour_key(existing.start_time) != candidate_hour:
            continue

        if candidate.teacher_id == existing.teacher_id:
            logger.info(
                f"Konflikt: Lehrkraft {candidate.teacher_id} ist um "
                f"{candidate_hour.isoformat()} bereits eingeplant"
            )
            return Conflict(ConflictKind.TEACHER, existing.id, candidate_hour)
        if candidate.group_id and candidate.group_id == existing.group_id:
            logger.info(
                f"Konflikt: Gruppe {candidate.group_id} ist um "
                f"{candidate_hour.isoformat()} bereits eingeplant"
            )
            return Conflict(ConflictKind.GROUP, existing.id, candidate_hour)

    return None


def has_conflict(
    candidate: ScheduledClass, others: Iterable[ScheduledClass]
) -> bool:
    """True wenn der Kandidat mit einer anderen Stunde kollidiert."""
    return find_conflict(candidate, others) is not None

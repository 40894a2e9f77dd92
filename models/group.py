"""Datenmodell für eine Lerngruppe (Pydantic v2)."""

from models.base import EntityModel


class Group(EntityModel):
    """Eine Lerngruppe gehört genau einer Lehrkraft.

    Die Mitgliederliste ist ungeordnet; Duplikate werden nicht verhindert,
    nur von der Integritätsprüfung gemeldet.
    """

    id: str
    name: str
    teacher_id: str
    student_ids: list[str] = []

    def without_student(self, student_id: str) -> "Group":
        """Kopie der Gruppe ohne den angegebenen Schüler."""
        return self.model_copy(update={
            "student_ids": [sid for sid in self.student_ids if sid != student_id],
        })

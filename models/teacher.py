"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from models.base import EntityModel


class Teacher(EntityModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: str      # "t1", "t3f9c0a12b4de"
    name: str    # "Dr. Schmidt"

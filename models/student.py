"""Datenmodell für einen Schüler (Pydantic v2)."""

from typing import Optional

from models.base import EntityModel


class Student(EntityModel):
    """Repräsentiert einen Schüler, optional mit Link auf das CRM-Profil."""

    id: str
    name: str
    crm_profile_link: Optional[str] = None

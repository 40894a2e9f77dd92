"""Gemeinsame Basis für alle Entitäten (Pydantic v2, camelCase auf dem Draht)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Unveränderliche Entität mit camelCase-Aliasen für das JSON-Format.

    Python-Code arbeitet mit snake_case (teacher_id), die Snapshot-Dateien
    verwenden camelCase (teacherId). Beide Schreibweisen werden akzeptiert.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

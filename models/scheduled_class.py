"""Datenmodell für eine geplante Unterrichtsstunde (Pydantic v2)."""

from datetime import datetime
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator, model_validator

from models.base import EntityModel
from models.slot import ONE_HOUR, Slot, as_local_datetime


class ScheduledClass(EntityModel):
    """Eine einstündige Unterrichtsstunde im Wochenraster.

    Entweder Gruppenunterricht (group_id) oder Einzelunterricht (student_id),
    niemals beides. end_time wird immer aus start_time abgeleitet.
    """

    id: str = ""                        # Leer bei Kandidaten, die der Store erst anlegt
    teacher_id: str
    group_id: Optional[str] = None
    student_id: Optional[str] = None
    start_time: datetime                # Immer zur vollen Stunde
    end_time: Optional[datetime] = Field(default=None, validate_default=True)

    @field_validator("start_time", mode="before")
    @classmethod
    def _normalize_start(cls, v):
        return as_local_datetime(v)

    @field_validator("start_time")
    @classmethod
    def _check_hour_aligned(cls, v: datetime) -> datetime:
        if v.minute or v.second or v.microsecond:
            raise ValueError(
                f"Startzeit {v.isoformat()} liegt nicht auf einer vollen Stunde."
            )
        return v

    @field_validator("end_time")
    @classmethod
    def _derive_end(cls, v, info: ValidationInfo):
        start = info.data.get("start_time")
        if start is None:
            return v
        return start + ONE_HOUR

    @model_validator(mode="after")
    def _check_group_xor_student(self):
        if bool(self.group_id) == bool(self.student_id):
            raise ValueError(
                "Eine Stunde braucht genau eines von group_id oder student_id "
                f"(group_id={self.group_id!r}, student_id={self.student_id!r})."
            )
        return self

    @property
    def is_group_class(self) -> bool:
        return bool(self.group_id)

    @property
    def slot(self) -> Slot:
        return Slot.of(self.start_time)

    def rescheduled(self, new_start: datetime) -> "ScheduledClass":
        """Validierte Kopie mit neuer Startzeit (end_time wird neu berechnet)."""
        data = self.model_dump(exclude={"end_time"})
        data["start_time"] = new_start
        return ScheduledClass.model_validate(data)

"""Zeitslot im Wochenraster und Zeitstempel-Normalisierung."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from pydantic import TypeAdapter

# Tagesnamen im Drag-and-Drop-Protokoll (Woche beginnt Montag)
DAYS_OF_WEEK = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]
DAY_NAME_TO_INDEX = {name: idx for idx, name in enumerate(DAYS_OF_WEEK)}

SLOT_PREFIX = "cell"
ONE_HOUR = timedelta(hours=1)

_datetime_adapter = TypeAdapter(datetime)


def as_local_datetime(value: Union[str, datetime]) -> datetime:
    """Normalisiert str/datetime auf eine naive lokale Uhrzeit.

    Zeitzonenbehaftete Werte (z.B. "2026-10-19T07:00:00.000Z" aus einem
    Browser-Export) werden in lokale Wandzeit umgerechnet.
    """
    dt = value if isinstance(value, datetime) else _datetime_adapter.validate_python(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def hour_key(value: Union[str, datetime]) -> datetime:
    """Beginn der vollen Stunde, in die ein Zeitpunkt fällt."""
    return as_local_datetime(value).replace(minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class Slot:
    """Eine Zelle im Wochenraster: Wochentag × volle Stunde.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    # Wochentag (0=Montag, ..., 6=Sonntag)
    day: int
    # Stunde des Tages (0-23), Beginn immer zur vollen Stunde
    hour: int

    def __post_init__(self) -> None:
        if not 0 <= self.day < len(DAYS_OF_WEEK):
            raise ValueError(f"Ungültiger Wochentag: {self.day}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Ungültige Stunde: {self.hour}")

    @property
    def day_name(self) -> str:
        return DAYS_OF_WEEK[self.day]

    @property
    def time_label(self) -> str:
        """Uhrzeit im Format "HH:00"."""
        return f"{self.hour:02d}:00"

    @property
    def slot_id(self) -> str:
        """Bezeichner der Zelle, z.B. "cell-Monday-09:00"."""
        return f"{SLOT_PREFIX}-{self.day_name}-{self.time_label}"

    @classmethod
    def of(cls, start_time: Union[str, datetime]) -> "Slot":
        """Slot, in den ein Startzeitpunkt fällt."""
        dt = as_local_datetime(start_time)
        return cls(day=dt.weekday(), hour=dt.hour)

    @classmethod
    def from_slot_id(cls, slot_id: Optional[str]) -> Optional["Slot"]:
        """Parst "cell-<Tag>-<HH:00>"; None für alles, was keine Zelle ist."""
        if not slot_id:
            return None
        parts = slot_id.split("-")
        if len(parts) != 3 or parts[0] != SLOT_PREFIX:
            return None
        _, day_name, time_str = parts
        day = DAY_NAME_TO_INDEX.get(day_name)
        try:
            hour = int(time_str.split(":")[0])
        except ValueError:
            return None
        if day is None or not 0 <= hour <= 23:
            return None
        return cls(day=day, hour=hour)

    def __repr__(self) -> str:
        return f"Slot({self.day_name}, {self.time_label})"

    def __str__(self) -> str:
        return f"{self.day_name} {self.time_label}"

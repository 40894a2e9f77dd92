"""Gemeinsame Hilfsfunktionen für Bericht, Raster, Excel- und PDF-Export."""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from models.scheduled_class import ScheduledClass
from models.slot import Slot
from models.snapshot import Snapshot

UNKNOWN = "Unbekannt"

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "free":     "F5F5F5",
    "time":     "DDDDDD",
    "highlight": "FFEB3B",
    "no_teacher": "E0E0E0",
}

# Feste Palette für Lehrkräfte, Index per String-Hash der ID
TEACHER_COLORS: list[str] = [
    "FFADAD",   # hellrot
    "FFD6A5",   # hellorange
    "FDFFB6",   # hellgelb
    "CAFFBF",   # hellgrün
    "9BF6FF",   # hellcyan
    "A0C4FF",   # hellblau
    "BDB2FF",   # helllila
    "FFC6FF",   # hellrosa
    "E0BBE4",   # lavendel
    "D4F0F0",   # blassblaugrün
]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def teacher_color(teacher_id: Optional[str]) -> str:
    """Stabile Farbe pro Lehrkraft.

    Gleicher 32-Bit-Hash wie im Browser (hash * 31 + Zeichencode), damit
    Lehrkräfte in allen Ausgaben dieselbe Farbe behalten.
    """
    if not teacher_id:
        return COLORS["no_teacher"]
    h = 0
    for ch in teacher_id:
        h = _to_int32(ord(ch) + _to_int32(h << 5) - h)
    return TEACHER_COLORS[abs(h) % len(TEACHER_COLORS)]


# ─── Namensauflösung ──────────────────────────────────────────────────────────

class NameLookup:
    """Schneller Zugriff auf Namen per ID (für Berichte und Raster)."""

    def __init__(self, snapshot: Snapshot) -> None:
        self.teachers = {t.id: t for t in snapshot.teachers}
        self.groups = {g.id: g for g in snapshot.groups}
        self.students = {s.id: s for s in snapshot.students}

    def teacher_name(self, teacher_id: str) -> str:
        teacher = self.teachers.get(teacher_id)
        return teacher.name if teacher else UNKNOWN

    def student_name(self, student_id: str) -> str:
        student = self.students.get(student_id)
        return student.name if student else UNKNOWN

    def class_title(self, cls: ScheduledClass, short: bool = False) -> str:
        """Gruppenname bzw. Schülername mit Hinweis auf Einzelunterricht."""
        if cls.student_id:
            name = self.students.get(cls.student_id)
            if name is not None:
                suffix = "(Einzel)" if short else "(Einzelunterricht)"
                return f"{name.name} {suffix}"
        if cls.group_id:
            group = self.groups.get(cls.group_id)
            if group is not None:
                return group.name
        return UNKNOWN

    def member_names(self, cls: ScheduledClass) -> list[str]:
        group = self.groups.get(cls.group_id) if cls.group_id else None
        if group is None:
            return []
        return [self.student_name(sid) for sid in group.student_ids]


# ─── Wochenraster ─────────────────────────────────────────────────────────────

def build_week_grid(
    classes: Iterable[ScheduledClass],
) -> dict[Slot, list[ScheduledClass]]:
    """Baut {Slot: [Stunden]} auf, Stunden pro Zelle nach Startzeit sortiert."""
    grid: dict[Slot, list[ScheduledClass]] = defaultdict(list)
    for c in sorted(classes, key=lambda c: c.start_time):
        grid[c.slot].append(c)
    return grid


def format_cell(
    entries: list[ScheduledClass],
    lookup: NameLookup,
    highlighted: Optional[set[str]] = None,
) -> str:
    """Formatiert alle Stunden einer Zelle ("Titel\\nLehrkraft", getrennt durch ──).

    Hervorgehobene Stunden (Suchtreffer) werden mit "* " markiert.
    """
    highlighted = highlighted or set()
    parts = []
    for c in entries:
        mark = "* " if c.id in highlighted else ""
        parts.append(f"{mark}{lookup.class_title(c, short=True)}\n{lookup.teacher_name(c.teacher_id)}")
    return "\n──\n".join(parts)

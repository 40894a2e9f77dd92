"""Gemeinsamer Renderer für das Wochenraster.

Wird von `main.py show`, dem Textual-Browser sowie dem Excel- und PDF-Export
verwendet.
"""

from typing import Optional

from config.schema import GridConfig
from models.scheduled_class import ScheduledClass
from models.slot import Slot
from models.snapshot import Snapshot
from scheduler.filters import filter_classes, matches_group_search


def visible_classes(
    snapshot: Snapshot,
    teacher_id: Optional[str] = None,
    group_id: Optional[str] = None,
) -> list[ScheduledClass]:
    """Stunden nach den Kalender-Filtern (Lehrkraft, Gruppe)."""
    return filter_classes(snapshot.scheduled_classes, teacher_id, group_id)


def search_hits(snapshot: Snapshot, search: str) -> set[str]:
    """IDs aller Stunden, deren Gruppenname den Suchbegriff enthält."""
    groups_by_id = {g.id: g for g in snapshot.groups}
    return {
        c.id for c in snapshot.scheduled_classes
        if matches_group_search(c, groups_by_id, search)
    }


def render_week_rows(
    snapshot: Snapshot,
    grid: GridConfig,
    teacher_id: Optional[str] = None,
    group_id: Optional[str] = None,
    search: str = "",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für das Wochenraster zurück.

    Jede Zeile: [Uhrzeit, Montag, ..., Sonntag]; leere Zellen sind "".
    Stunden außerhalb des konfigurierten Stundenbereichs erscheinen nicht.
    """
    from export.helpers import NameLookup, build_week_grid, format_cell

    lookup = NameLookup(snapshot)
    week = build_week_grid(visible_classes(snapshot, teacher_id, group_id))
    hits = search_hits(snapshot, search)

    rows: list[list[str]] = []
    for hour in grid.hours:
        cells = [f"{hour:02d}:00"]
        for day in range(len(grid.day_names)):
            cells.append(format_cell(week.get(Slot(day, hour), []), lookup, hits))
        rows.append(cells)
    return rows

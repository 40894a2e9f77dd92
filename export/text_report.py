"""Textbericht: alle Stunden nach Wochentag gruppiert."""

from typing import Optional

from config.defaults import default_grid
from config.schema import GridConfig
from models.snapshot import Snapshot
from export.helpers import NameLookup

EMPTY_MESSAGE = "Keine geplanten Stunden"


def build_text_report(
    snapshot: Snapshot,
    grid: Optional[GridConfig] = None,
    title: str = "Stundenplan",
) -> str:
    """Erzeugt den Textbericht.

    Tage beginnen mit Montag; Tage ohne Stunden werden ausgelassen. Innerhalb
    eines Tages wird nach Startzeit sortiert. Unbekannte Referenzen erscheinen
    als "Unbekannt".
    """
    grid = grid or default_grid()
    lookup = NameLookup(snapshot)
    lines = [title, "=" * len(title), ""]

    if not snapshot.scheduled_classes:
        lines.append(EMPTY_MESSAGE)
        return "\n".join(lines) + "\n"

    for day, day_name in enumerate(grid.day_names):
        day_classes = sorted(
            (c for c in snapshot.scheduled_classes if c.start_time.weekday() == day),
            key=lambda c: c.start_time,
        )
        if not day_classes:
            continue

        lines += [day_name, "-" * len(day_name)]
        for cls in day_classes:
            start = cls.start_time.strftime("%H:%M")
            end = cls.end_time.strftime("%H:%M")
            lines.append(f"{start} - {end}  {lookup.class_title(cls)}")
            lines.append(f"    Lehrkraft: {lookup.teacher_name(cls.teacher_id)}")
            members = lookup.member_names(cls)
            if members:
                lines.append(f"    Schüler in der Gruppe: {', '.join(members)}")
        lines.append("")

    return "\n".join(lines)

"""Excel-Export für den Wochenplan (openpyxl)."""

from pathlib import Path

from config.schema import GridConfig
from models.scheduled_class import ScheduledClass
from models.slot import Slot
from models.snapshot import Snapshot
from models.teacher import Teacher

from export.helpers import (
    COLORS, NameLookup, build_week_grid, format_cell, teacher_color, today_str,
)

_INVALID_SHEET_CHARS = set('[]:*?/\\')


def _sheet_title(name: str, used: set[str]) -> str:
    """Gültiger, eindeutiger Blattname (max. 31 Zeichen)."""
    base = "".join("_" if ch in _INVALID_SHEET_CHARS else ch for ch in name)[:28] or "Blatt"
    title, n = base, 2
    while title in used:
        title = f"{base[:26]}_{n}"
        n += 1
    used.add(title)
    return title


class ExcelExporter:
    """Exportiert den Wochenplan: Übersichtsblatt plus ein Blatt pro Lehrkraft."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 10
    COL_DAY_W  = 22

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_HOUR_H   = 42

    def __init__(self, snapshot: Snapshot, grid: GridConfig, title: str = "Stundenplan"):
        self.snapshot = snapshot
        self.grid = grid
        self.title = title
        self.lookup = NameLookup(snapshot)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei mit allen Blättern."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        used: set[str] = set()
        ws = wb.create_sheet(_sheet_title("Übersicht", used))
        self._write_week(ws, self.snapshot.scheduled_classes)

        for teacher in sorted(self.snapshot.teachers, key=lambda t: t.name):
            self._sheet_teacher(wb, teacher, used)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    def _sheet_teacher(self, wb, teacher: Teacher, used: set[str]) -> None:
        ws = wb.create_sheet(_sheet_title(teacher.name, used))
        entries = [c for c in self.snapshot.scheduled_classes if c.teacher_id == teacher.id]
        last_row = self._write_week(ws, entries)
        ws.cell(row=last_row + 2, column=1,
                value=f"{teacher.name} | {len(entries)} Std./Woche | Stand {today_str()}")

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    # ─── Wochenraster ─────────────────────────────────────────────────────────

    def _write_week(self, ws, entries: list[ScheduledClass]) -> int:
        """Schreibt Kopfzeile und Raster; gibt letzte verwendete Zeile zurück."""
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        border = self._thin_border()
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(self.grid.day_names)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        headers = ["Zeit"] + list(self.grid.day_names)
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = self._fill(COLORS["header"])
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[1].height = self.ROW_HEADER_H

        week = build_week_grid(entries)
        row = 1
        for hour in self.grid.hours:
            row += 1
            c = ws.cell(row=row, column=1, value=f"{hour:02d}:00")
            c.fill = self._fill(COLORS["time"])
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            for day in range(len(self.grid.day_names)):
                here = week.get(Slot(day, hour), [])
                color = teacher_color(here[0].teacher_id) if here else COLORS["free"]
                c = ws.cell(row=row, column=day + 2,
                            value=format_cell(here, self.lookup) or None)
                c.fill = self._fill(color)
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)
            ws.row_dimensions[row].height = self.ROW_HOUR_H

        ws.freeze_panes = "B2"
        return row

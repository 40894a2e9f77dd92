"""Tests für Textbericht, Wochenraster und Export (Excel + PDF)."""

from datetime import date, datetime
from pathlib import Path

import pytest

from config.defaults import default_grid
from data.seed_data import seed_snapshot
from models.group import Group
from models.scheduled_class import ScheduledClass
from models.snapshot import Snapshot
from models.student import Student
from models.teacher import Teacher
from export.helpers import (
    COLORS, NameLookup, UNKNOWN, build_week_grid, format_cell, hex_to_rgb, teacher_color,
)
from export.grid_renderer import render_week_rows, search_hits
from export.text_report import EMPTY_MESSAGE, build_text_report
from export.excel_export import ExcelExporter, _sheet_title
from export.pdf_export import PdfExporter

# Seed-Stunde: Freitag 16.10.2026, 10:00, Mathematik 101 bei Dr. Schmidt
SEED_DAY = date(2026, 10, 16)


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _mixed_snapshot() -> Snapshot:
    """Gruppen- und Einzelstunden an zwei Tagen, dazu verwaiste Referenzen."""
    return Snapshot(
        teachers=[Teacher(id="t1", name="Dr. Schmidt"), Teacher(id="t2", name="Prof. Jung")],
        students=[Student(id="s1", name="Anna"), Student(id="s2", name="Ben")],
        groups=[Group(id="g1", name="Mathematik 101", teacher_id="t1",
                      student_ids=["s1", "s2"])],
        scheduled_classes=[
            ScheduledClass(id="sc2", teacher_id="t2", student_id="s2",
                           start_time=datetime(2026, 10, 19, 14)),
            ScheduledClass(id="sc1", teacher_id="t1", group_id="g1",
                           start_time=datetime(2026, 10, 19, 9)),
            ScheduledClass(id="sc3", teacher_id="t9", group_id="g9",
                           start_time=datetime(2026, 10, 21, 11)),
        ],
    )


@pytest.fixture(scope="module")
def seed() -> Snapshot:
    return seed_snapshot(SEED_DAY)


# ─── Tests: Helpers ───────────────────────────────────────────────────────────

class TestHelpers:
    def test_teacher_color_stable(self):
        """Gleicher String-Hash wie im Browser → feste Palettenfarbe."""
        assert teacher_color("t1") == "A0C4FF"
        assert teacher_color("t2") == "BDB2FF"
        assert teacher_color("t1") == teacher_color("t1")

    def test_teacher_color_missing(self):
        assert teacher_color(None) == COLORS["no_teacher"]
        assert teacher_color("") == COLORS["no_teacher"]

    def test_teacher_color_long_id_in_palette(self):
        """Lange IDs überlaufen den 32-Bit-Hash, bleiben aber in der Palette."""
        from export.helpers import TEACHER_COLORS
        assert teacher_color("t" + "x" * 200) in TEACHER_COLORS

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#4472C4") == (0x44, 0x72, 0xC4)

    def test_class_title(self):
        snap = _mixed_snapshot()
        lookup = NameLookup(snap)
        by_id = {c.id: c for c in snap.scheduled_classes}
        assert lookup.class_title(by_id["sc1"]) == "Mathematik 101"
        assert lookup.class_title(by_id["sc2"]) == "Ben (Einzelunterricht)"
        assert lookup.class_title(by_id["sc2"], short=True) == "Ben (Einzel)"
        assert lookup.class_title(by_id["sc3"]) == UNKNOWN
        assert lookup.teacher_name("t9") == UNKNOWN

    def test_build_week_grid_sorted(self):
        grid = build_week_grid(_mixed_snapshot().scheduled_classes)
        monday = [c for slot, entries in grid.items() if slot.day == 0 for c in entries]
        assert {c.id for c in monday} == {"sc1", "sc2"}

    def test_format_cell_highlight(self, seed: Snapshot):
        lookup = NameLookup(seed)
        text = format_cell(seed.scheduled_classes, lookup, highlighted={"sc1"})
        assert text == "* Mathematik 101\nDr. Schmidt"

    def test_format_cell_empty(self, seed: Snapshot):
        assert format_cell([], NameLookup(seed)) == ""


# ─── Tests: Textbericht ───────────────────────────────────────────────────────

class TestTextReport:
    def test_seed_report(self, seed: Snapshot):
        report = build_text_report(seed, default_grid())
        assert report == (
            "Stundenplan\n"
            "===========\n"
            "\n"
            "Freitag\n"
            "-------\n"
            "10:00 - 11:00  Mathematik 101\n"
            "    Lehrkraft: Dr. Schmidt\n"
            "    Schüler in der Gruppe: Anna, Ben\n"
        )

    def test_empty_report(self):
        empty = Snapshot(teachers=[], groups=[], students=[], scheduled_classes=[])
        report = build_text_report(empty)
        assert report == f"Stundenplan\n===========\n\n{EMPTY_MESSAGE}\n"

    def test_days_in_order_and_sorted(self):
        report = build_text_report(_mixed_snapshot())
        assert report.index("Montag") < report.index("Mittwoch")
        assert report.index("09:00 - 10:00") < report.index("14:00 - 15:00")
        assert "Dienstag" not in report

    def test_individual_and_unknown(self):
        report = build_text_report(_mixed_snapshot())
        assert "14:00 - 15:00  Ben (Einzelunterricht)" in report
        assert "11:00 - 12:00  Unbekannt" in report
        assert "    Lehrkraft: Unbekannt" in report

    def test_custom_title(self, seed: Snapshot):
        report = build_text_report(seed, title="Plan")
        assert report.startswith("Plan\n====\n")


# ─── Tests: Wochenraster ──────────────────────────────────────────────────────

class TestGridRenderer:
    def test_row_shape(self, seed: Snapshot):
        rows = render_week_rows(seed, default_grid())
        assert len(rows) == 13
        assert rows[0][0] == "08:00"
        assert all(len(r) == 8 for r in rows)

    def test_seed_cell_position(self, seed: Snapshot):
        rows = render_week_rows(seed, default_grid())
        # 10:00 → dritte Zeile, Freitag → Spalte 5
        assert rows[2][5] == "Mathematik 101\nDr. Schmidt"
        assert rows[2][4] == ""

    def test_teacher_filter(self, seed: Snapshot):
        rows = render_week_rows(seed, default_grid(), teacher_id="t2")
        assert all(cell == "" for row in rows for cell in row[1:])

    def test_search_highlight(self, seed: Snapshot):
        rows = render_week_rows(seed, default_grid(), search="mathe")
        assert rows[2][5].startswith("* ")

    def test_search_hits(self):
        snap = _mixed_snapshot()
        assert search_hits(snap, "101") == {"sc1"}
        assert search_hits(snap, "") == set()
        assert search_hits(snap, "Ben") == set()   # Nur Gruppennamen


# ─── Tests: Excel ─────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_sheet_title_unique(self):
        used: set[str] = set()
        assert _sheet_title("Dr. Schmidt", used) == "Dr. Schmidt"
        assert _sheet_title("Dr. Schmidt", used) == "Dr. Schmidt_2"
        assert _sheet_title("A/B:C", used) == "A_B_C"

    def test_excel_file_created(self, tmp_path: Path, seed: Snapshot):
        from openpyxl import load_workbook

        out = ExcelExporter(seed, default_grid()).export(tmp_path / "plan.xlsx")
        assert out.exists()
        wb = load_workbook(out)
        assert wb.sheetnames == ["Übersicht", "Dr. Schmidt", "Prof. Jung"]
        ws = wb["Übersicht"]
        assert ws.cell(row=1, column=1).value == "Zeit"
        assert ws.cell(row=1, column=6).value == "Freitag"
        assert ws.cell(row=4, column=6).value == "Mathematik 101\nDr. Schmidt"
        assert ws.freeze_panes == "B2"

    def test_excel_teacher_sheet_only_own_classes(self, tmp_path: Path, seed: Snapshot):
        from openpyxl import load_workbook

        out = ExcelExporter(seed, default_grid()).export(tmp_path / "plan.xlsx")
        ws = load_workbook(out)["Prof. Jung"]
        assert ws.cell(row=4, column=6).value is None


# ─── Tests: PDF ───────────────────────────────────────────────────────────────

class TestPdfExport:
    def test_pdf_file_created(self, tmp_path: Path, seed: Snapshot):
        out = PdfExporter(seed, default_grid()).export(tmp_path / "plan.pdf")
        assert out.exists()
        assert out.read_bytes().startswith(b"%PDF")

    def test_pdf_with_unicode_names(self, tmp_path: Path):
        """Zeichen außerhalb Latin-1 führen nicht zum Abbruch."""
        snap = _mixed_snapshot().model_copy(update={
            "teachers": [Teacher(id="t1", name="Łukasz Nowak"), Teacher(id="t2", name="Prof. Jung")],
        })
        out = PdfExporter(snap, default_grid(), title="Plan ✓").export(tmp_path / "u.pdf")
        assert out.stat().st_size > 0

    def test_pdf_empty_snapshot(self, tmp_path: Path):
        empty = Snapshot(teachers=[], groups=[], students=[], scheduled_classes=[])
        out = PdfExporter(empty, default_grid()).export(tmp_path / "leer.pdf")
        assert out.exists()

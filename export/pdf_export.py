"""PDF-Export für den Wochenplan (fpdf2), Druckansicht im A4-Querformat."""

from pathlib import Path
from typing import Optional

from config.schema import GridConfig
from models.scheduled_class import ScheduledClass
from models.slot import Slot
from models.snapshot import Snapshot

from export.helpers import (
    COLORS, NameLookup, build_week_grid, format_cell, hex_to_rgb,
    teacher_color, today_str,
)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts."""
    return (
        text
        .replace("—", " - ")   # em dash
        .replace("–", "-")      # en dash
        .replace("─", "-")      # BOX DRAWINGS LIGHT HORIZONTAL
        .encode("latin-1", errors="replace").decode("latin-1")
    )


# ─── A4-Querformat-Dimensionen ────────────────────────────────────────────────
# Landscape A4: 297 × 210 mm
# Nutzbare Breite (Margin 10 links+rechts): 277 mm
# Spalten: Zeit(18) + 7×Tag(37) = 18 + 259 = 277 mm

_COLS = {
    "zeit": 18,
    "day":  37,    # pro Wochentag
}
_ROW_HEADER_H = 7     # mm
_ROW_HOUR_H   = 11    # mm (13 Stunden passen auf eine Seite)
_FONT_HEADER  = 8     # pt
_FONT_CONTENT = 6     # pt
_LINE_H       = 2.8   # mm pro Zeile bei 6pt


class _SchedulePdf:
    """Interner Wrapper um fpdf.FPDF für Stundenplan-Seiten."""

    def __init__(self, title: str):
        from fpdf import FPDF

        class _Pdf(FPDF):
            def __init__(inner, doc_title):
                super().__init__(orientation="L", unit="mm", format="A4")
                inner._doc_title = doc_title
                inner._entity_title = ""
                inner.alias_nb_pages()
                inner.set_auto_page_break(auto=True, margin=14)
                inner.set_margins(left=10, top=22, right=10)

            def header(inner):
                inner.set_font("Helvetica", "B", 11)
                inner.set_xy(10, 8)
                inner.cell(130, 7, _pdf_safe(inner._doc_title), border=0, align="L")
                inner.cell(0,   7, _pdf_safe(inner._entity_title), border=0, align="R")
                inner.ln(0)
                inner.set_draw_color(150, 150, 150)
                inner.line(10, 18, inner.w - 10, 18)

            def footer(inner):
                inner.set_y(-12)
                inner.set_font("Helvetica", "I", 7)
                inner.cell(
                    0, 8,
                    f"{today_str()}  |  Seite {inner.page_no()}/{{nb}}",
                    border=0, align="C",
                )

        self._pdf = _Pdf(title)

    def set_entity(self, title: str) -> None:
        self._pdf._entity_title = title

    def add_page(self) -> None:
        self._pdf.add_page()

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._pdf.output(str(path))

    # ─── Zellen-Zeichnung ─────────────────────────────────────────────────────

    def draw_cell(
        self,
        x: float, y: float,
        w: float, h: float,
        text: str = "",
        bg_hex: Optional[str] = None,
        bold: bool = False,
        font_size: int = _FONT_CONTENT,
        text_color: tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        """Zeichnet eine Zelle mit Hintergrund, Rand und zentriertem Text."""
        pdf = self._pdf

        if bg_hex:
            r, g, b = hex_to_rgb(bg_hex)
            pdf.set_fill_color(r, g, b)
            pdf.rect(x, y, w, h, style="F")

        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h, style="D")

        if text:
            pdf.set_font("Helvetica", "B" if bold else "", font_size)
            pdf.set_text_color(*text_color)

            max_lines = max(1, int(h // _LINE_H))
            lines = [ln for ln in _pdf_safe(text).split("\n") if ln][:max_lines]
            y_text = y + max(0.5, (h - len(lines) * _LINE_H) / 2)
            for line in lines:
                pdf.set_xy(x, y_text)
                pdf.cell(w, _LINE_H, line[:26], border=0, align="C")
                y_text += _LINE_H

            pdf.set_text_color(0, 0, 0)


class PdfExporter:
    """Exportiert den Wochenplan als druckbare PDF.

    Seite 1 zeigt alle Stunden, danach folgt je eine Seite pro Lehrkraft.
    Zellen sind in der Farbe der (ersten) Lehrkraft hinterlegt.
    """

    def __init__(self, snapshot: Snapshot, grid: GridConfig, title: str = "Stundenplan"):
        self.snapshot = snapshot
        self.grid = grid
        self.title = title
        self.lookup = NameLookup(snapshot)

    def export(self, output_path: Path) -> Path:
        pdf = _SchedulePdf(self.title)

        pdf.set_entity(f"Alle Stunden | {len(self.snapshot.scheduled_classes)} Std./Woche")
        pdf.add_page()
        self._draw_week(pdf, self.snapshot.scheduled_classes)

        for teacher in sorted(self.snapshot.teachers, key=lambda t: t.name):
            entries = [
                c for c in self.snapshot.scheduled_classes
                if c.teacher_id == teacher.id
            ]
            pdf.set_entity(f"{teacher.name} | {len(entries)} Std./Woche")
            pdf.add_page()
            self._draw_week(pdf, entries)

        pdf.save(output_path)
        return Path(output_path)

    def _draw_week(self, pdf: _SchedulePdf, entries: list[ScheduledClass]) -> None:
        week = build_week_grid(entries)
        x0, y = 10.0, 22.0

        # Kopfzeile
        pdf.draw_cell(x0, y, _COLS["zeit"], _ROW_HEADER_H, "Zeit",
                      bg_hex=COLORS["header"], bold=True,
                      font_size=_FONT_HEADER, text_color=(255, 255, 255))
        x = x0 + _COLS["zeit"]
        for name in self.grid.day_names:
            pdf.draw_cell(x, y, _COLS["day"], _ROW_HEADER_H, name,
                          bg_hex=COLORS["header"], bold=True,
                          font_size=_FONT_HEADER, text_color=(255, 255, 255))
            x += _COLS["day"]
        y += _ROW_HEADER_H

        for hour in self.grid.hours:
            pdf.draw_cell(x0, y, _COLS["zeit"], _ROW_HOUR_H,
                          f"{hour:02d}:00\n{(hour + 1) % 24:02d}:00",
                          bg_hex=COLORS["time"], font_size=_FONT_HEADER)
            x = x0 + _COLS["zeit"]
            for day in range(len(self.grid.day_names)):
                here = week.get(Slot(day, hour), [])
                color = teacher_color(here[0].teacher_id) if here else COLORS["free"]
                pdf.draw_cell(x, y, _COLS["day"], _ROW_HOUR_H,
                              format_cell(here, self.lookup), bg_hex=color)
                x += _COLS["day"]
            y += _ROW_HOUR_H

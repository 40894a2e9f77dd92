"""Export-Modul: Textbericht, Excel (openpyxl) und PDF (fpdf2) für den Wochenplan."""

from export.excel_export import ExcelExporter
from export.pdf_export import PdfExporter
from export.text_report import build_text_report

__all__ = ["ExcelExporter", "PdfExporter", "build_text_report"]

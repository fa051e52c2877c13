"""
Module: output

Purpose:
    Export the roster's score breakdowns.

Key Functions:
    - export_csv(): CSV with one row per student (UTF-8 with BOM)
    - render_score_sheet(): Printable PDF score sheet

Dependencies:
    - reportlab: PDF generation
"""

from .errors import ExportError
from .csv_export import export_csv, render_csv, csv_header, csv_rows, default_csv_name
from .report import render_score_sheet, student_lines

__all__ = [
    "ExportError",
    "export_csv",
    "render_csv",
    "csv_header",
    "csv_rows",
    "default_csv_name",
    "render_score_sheet",
    "student_lines",
]

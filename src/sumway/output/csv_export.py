"""
Module: output.csv_export

Purpose:
    Export the roster's score breakdowns as CSV, one row per student.

    Columns: "Student name", then for each item i every element column
    "Item i-Element j" followed by "Item i total", then "Grand total".
    Unassigned cells are blank. The file is UTF-8 with a BOM so spreadsheet
    programs detect the encoding of non-ASCII names.

Key Functions:
    - csv_header(): Column names for a hierarchy
    - csv_rows(): Row values per student
    - render_csv(): Whole document as a string
    - export_csv(): Write the document to disk
    - default_csv_name(): student_scores_YYYY-MM-DD.csv

Dependencies:
    - csv (std)

Used By:
    - sumway.cli: export csv
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from sumway.core.models import Hierarchy, Roster, StudentRecord

from .errors import ExportError

logger = logging.getLogger(__name__)

Cell = Union[str, int]


def csv_header(hierarchy: Hierarchy) -> List[str]:
    """Column names for ``hierarchy``."""
    header = ["Student name"]
    for i, item in enumerate(hierarchy.items, start=1):
        header.extend(f"Item {i}-Element {j}" for j in range(1, len(item.elements) + 1))
        header.append(f"Item {i} total")
    header.append("Grand total")
    return header


def csv_row(hierarchy: Hierarchy, student: StudentRecord) -> List[Cell]:
    """One student's row, blank where nothing is assigned."""
    row: List[Cell] = [student.name]
    for i, item in enumerate(hierarchy.items):
        elements = student.element_scores[i] if i < len(student.element_scores) else ()
        for j in range(len(item.elements)):
            row.append(elements[j] if j < len(elements) else "")
        row.append(student.item_scores[i] if i < len(student.item_scores) else "")
    row.append(student.total_score if student.total_score is not None else "")
    return row


def csv_rows(hierarchy: Hierarchy, roster: Roster) -> List[List[Cell]]:
    return [csv_row(hierarchy, student) for student in roster]


def render_csv(hierarchy: Hierarchy, roster: Roster) -> str:
    """
    Render the export as text (without BOM).

    Raises:
        ExportError: If the roster is empty
    """
    if not len(roster):
        raise ExportError("No students to export")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(csv_header(hierarchy))
    writer.writerows(csv_rows(hierarchy, roster))
    return buffer.getvalue()


def default_csv_name(today: Optional[date] = None) -> str:
    """File name used when none is given."""
    today = today or date.today()
    return f"student_scores_{today.isoformat()}.csv"


def export_csv(hierarchy: Hierarchy, roster: Roster, path: Path) -> Path:
    """
    Write the CSV export.

    Args:
        hierarchy: Hierarchy defining the columns
        roster: Students to export
        path: Target file (a directory gets default_csv_name())

    Returns:
        Path written

    Raises:
        ExportError: Empty roster or unwritable path
    """
    path = Path(path)
    if path.is_dir():
        path = path / default_csv_name()

    content = render_csv(hierarchy, roster)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8-sig", newline="")
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e

    logger.info(f"Exported {len(roster)} students to {path}")
    return path

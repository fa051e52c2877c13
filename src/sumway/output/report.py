"""
Module: output.report

Purpose:
    Render a printable score sheet PDF: the attainable totals (when
    Results are given) followed by one block per student with their total
    and the per-item, per-element breakdown.

Key Functions:
    - render_score_sheet(): Create the score sheet PDF
    - student_lines(): Text lines for one student

Dependencies:
    - reportlab: PDF generation

Used By:
    - sumway.cli: export pdf
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from sumway.core.models import Hierarchy, Results, Roster, StudentRecord

from .errors import ExportError

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 16
TITLE_FONT_SIZE = 16
BODY_FONT_SIZE = 10
FOOTER_FONT_SIZE = 7
MAX_TOTALS_PER_LINE = 20


def _get_footer_text() -> str:
    """Footer text with current version number."""
    from sumway import __version__
    return f"Generated with Sumway v{__version__}"


def student_lines(hierarchy: Hierarchy, student: StudentRecord) -> List[str]:
    """
    Text lines describing one student.

    Example:
        >>> student_lines(h, StudentRecord(1, "Ana", 21, (21,), ((1, 20),)))
        ['Ana: 21', '    Item 1: 21 (1, 20)']
    """
    if not student.has_score:
        return [f"{student.name}: -"]

    lines = [f"{student.name}: {student.total_score}"]
    for i in range(len(hierarchy.items)):
        item_score = student.item_scores[i] if i < len(student.item_scores) else "-"
        elements = student.element_scores[i] if i < len(student.element_scores) else ()
        detail = f" ({', '.join(str(e) for e in elements)})" if elements else ""
        lines.append(f"    Item {i + 1}: {item_score}{detail}")
    return lines


def _totals_lines(results: Results) -> List[str]:
    lines = [
        f"Attainable totals ({len(results.total_sums)}), "
        f"{results.min_total} to {results.max_total}:"
    ]
    totals = [str(t) for t in results.total_sums]
    for start in range(0, len(totals), MAX_TOTALS_PER_LINE):
        lines.append("    " + ", ".join(totals[start:start + MAX_TOTALS_PER_LINE]))
    return lines


def render_score_sheet(
    hierarchy: Hierarchy,
    roster: Roster,
    output_path: Path,
    results: Optional[Results] = None,
    *,
    title: str = "Score sheet",
    show_footer: bool = True,
) -> int:
    """
    Write the score sheet PDF.

    A student block only breaks across pages when it is taller than a page.

    Args:
        hierarchy: Hierarchy the scores belong to
        roster: Students to list
        output_path: Path to write PDF
        results: Optional Results for the attainable-totals summary
        title: Heading on the first page
        show_footer: Draw the version footer on each page

    Returns:
        Number of pages written

    Raises:
        ExportError: If the PDF cannot be written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(output_path), pagesize=A4)
    c.setTitle(title)

    blocks: List[List[str]] = []
    if results is not None:
        blocks.append(_totals_lines(results) + [""])
    blocks.extend(student_lines(hierarchy, s) for s in roster)

    pages = 1
    y = A4_HEIGHT - MARGIN
    c.setFont("Helvetica-Bold", TITLE_FONT_SIZE)
    c.drawString(MARGIN, y, title)
    y -= LINE_HEIGHT * 2
    c.setFont("Helvetica", BODY_FONT_SIZE)

    def _next_page() -> float:
        nonlocal pages
        if show_footer:
            _draw_footer(c)
        c.showPage()
        pages += 1
        c.setFont("Helvetica", BODY_FONT_SIZE)
        return A4_HEIGHT - MARGIN

    for block in blocks:
        needed = LINE_HEIGHT * (len(block) + 1)
        # Blocks taller than a page are split line by line below.
        if y - needed < MARGIN and y < A4_HEIGHT - MARGIN - LINE_HEIGHT * 2:
            y = _next_page()
        for line in block:
            if y < MARGIN:
                y = _next_page()
            c.drawString(MARGIN, y, line)
            y -= LINE_HEIGHT
        y -= LINE_HEIGHT / 2

    if not len(roster):
        c.drawString(MARGIN, y, "No students.")

    if show_footer:
        _draw_footer(c)
    c.showPage()

    try:
        c.save()
    except OSError as e:
        raise ExportError(f"Cannot write {output_path}: {e}") from e

    logger.info(f"Rendered score sheet for {len(roster)} students ({pages} pages) to {output_path}")
    return pages


def _draw_footer(c: canvas.Canvas) -> None:
    """Draw centered footer with version info."""
    footer_text = _get_footer_text()
    c.setFont("Helvetica", FOOTER_FONT_SIZE)
    text_width = c.stringWidth(footer_text, "Helvetica", FOOTER_FONT_SIZE)
    c.drawString((A4_WIDTH - text_width) / 2, MARGIN / 2, footer_text)
    c.setFont("Helvetica", BODY_FONT_SIZE)

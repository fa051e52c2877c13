"""
Unit Tests for the Score Sheet PDF
"""

import pytest

from sumway.core.models import Roster, StudentRecord
from sumway.engine import evaluate
from sumway.output.report import render_score_sheet, student_lines


class TestStudentLines:

    def test_lines_when_scored_then_total_and_item_breakdown(self, single_item_hierarchy):
        student = StudentRecord(1, "Ana", 21, (21,), ((1, 20),))

        assert student_lines(single_item_hierarchy, student) == [
            "Ana: 21",
            "    Item 1: 21 (1, 20)",
        ]

    def test_lines_when_unscored_then_dash(self, single_item_hierarchy):
        assert student_lines(single_item_hierarchy, StudentRecord(1, "Bo")) == ["Bo: -"]


class TestRenderScoreSheet:

    def test_render_when_roster_then_pdf_written(self, tmp_path, single_item_hierarchy):
        roster = Roster((StudentRecord(1, "Ana", 21, (21,), ((1, 20),)),), next_id=2)
        path = tmp_path / "sheet.pdf"

        pages = render_score_sheet(
            single_item_hierarchy, roster, path, evaluate(single_item_hierarchy)
        )

        assert pages == 1
        assert path.read_bytes().startswith(b"%PDF")

    def test_render_when_empty_roster_then_single_page(self, tmp_path, single_item_hierarchy):
        path = tmp_path / "empty.pdf"

        assert render_score_sheet(single_item_hierarchy, Roster(), path) == 1
        assert path.exists()

    def test_render_when_many_students_then_several_pages(self, tmp_path, single_item_hierarchy):
        roster = Roster()
        for _ in range(120):
            roster = roster.add()

        pages = render_score_sheet(single_item_hierarchy, roster, tmp_path / "many.pdf")

        assert pages > 1

    @pytest.mark.parametrize("show_footer", [True, False])
    def test_render_when_footer_toggled_then_still_valid(self, tmp_path, single_item_hierarchy, show_footer):
        path = tmp_path / "footer.pdf"

        render_score_sheet(single_item_hierarchy, Roster().add(), path, show_footer=show_footer)

        assert path.read_bytes().startswith(b"%PDF")

    def test_render_when_called_by_keyword_then_pdf_written(self, tmp_path, single_item_hierarchy):
        path = tmp_path / "keywords.pdf"

        pages = render_score_sheet(
            hierarchy=single_item_hierarchy,
            roster=Roster().add("Ana"),
            output_path=path,
            results=evaluate(single_item_hierarchy),
            title="Term 1",
        )

        assert pages == 1
        assert path.read_bytes().startswith(b"%PDF")

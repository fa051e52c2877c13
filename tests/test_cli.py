"""
Tests for the sumway command line.

Each call runs main() against a temporary data directory, the same way
separate shell invocations share one gradebook.
"""

import json

import pytest

from sumway.cli import build_parser, format_hierarchy, main
from sumway.core.models import Hierarchy
from sumway.engine import evaluate
from sumway.engine.config import DEFAULT_BALANCE_FRACTION


@pytest.fixture
def run(tmp_path):
    """Invoke main() with --data-dir pointing at tmp_path."""
    data_dir = tmp_path / "data"

    def _run(*argv: str) -> int:
        return main(["--data-dir", str(data_dir), "--seed", "1", *argv])

    return _run


@pytest.fixture
def rubric_file(tmp_path):
    path = tmp_path / "rubric.json"
    path.write_text(json.dumps([[[1, 2], [10, 20]]]), encoding="utf-8")
    return path


class TestFormatHierarchy:

    def test_format_when_no_results_then_values_only(self, single_item_hierarchy):
        assert format_hierarchy(single_item_hierarchy) == (
            "Item 1\n  Element 1: 1, 2\n  Element 2: 10, 20"
        )

    def test_format_when_results_then_totals_listed(self, single_item_hierarchy):
        text = format_hierarchy(single_item_hierarchy, evaluate(single_item_hierarchy))
        assert text.endswith("Totals (4): 22, 21, 12, 11")


class TestMain:
    """End-to-end runs of main()."""

    def test_calculate_when_default_hierarchy_then_reports_first_invalid(self, run, capsys):
        assert run("calculate") == 1
        assert "Item 1, element 1, value 1" in capsys.readouterr().err

    def test_import_when_file_given_then_hierarchy_replaced(self, run, rubric_file, capsys):
        assert run("import", str(rubric_file)) == 0
        assert run("calculate") == 0

        assert "Totals (4): 22, 21, 12, 11" in capsys.readouterr().out

    def test_import_when_missing_file_then_error(self, run, tmp_path, capsys):
        assert run("import", str(tmp_path / "nope.json")) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_student_score_when_reachable_then_breakdown_printed(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("student", "add", "--name", "Ana")
        capsys.readouterr()

        assert run("student", "score", "1", "21") == 0

        assert "#1 Ana: 21  I1=21 (1, 20)" in capsys.readouterr().out

    def test_student_score_when_unreachable_then_nonzero_and_unchanged(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("student", "add", "--name", "Ana")
        run("student", "score", "1", "22")
        capsys.readouterr()

        assert run("student", "score", "1", "5") == 1
        assert run("student", "list") == 0

        assert "#1 Ana: 22" in capsys.readouterr().out

    def test_student_score_when_not_a_number_then_nonzero_and_unchanged(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("student", "add", "--name", "Ana")
        capsys.readouterr()

        assert run("student", "score", "1", "abc") == 1

        assert "abc is not an attainable total" in capsys.readouterr().out
        run("student", "list")
        assert "#1 Ana: -" in capsys.readouterr().out

    def test_student_score_when_unknown_id_then_error(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        capsys.readouterr()

        assert run("student", "score", "7", "21") == 1

        assert "No student with id 7" in capsys.readouterr().err

    def test_student_score_when_no_score_given_then_error(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("student", "add")
        capsys.readouterr()

        assert run("student", "score", "1") == 1

        assert "Give a score or --clear" in capsys.readouterr().err

    def test_value_set_when_scored_then_scores_cleared(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("student", "add", "--name", "Ana")
        run("student", "score", "1", "21")

        assert run("value", "set", "1", "1", "1", "3") == 0
        capsys.readouterr()
        run("student", "list")

        assert "#1 Ana: -" in capsys.readouterr().out

    def test_scores_when_filtered_then_matching_totals(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        capsys.readouterr()

        assert run("scores", "--filter", "1") == 0

        assert capsys.readouterr().out.strip() == "21 12 11"

    def test_item_remove_when_last_then_error(self, run, capsys):
        assert run("item", "remove", "1") == 1
        assert "last item" in capsys.readouterr().err

    def test_export_csv_when_students_then_file_written(self, run, rubric_file, tmp_path):
        run("import", str(rubric_file))
        run("student", "add", "--name", "Ana")
        run("student", "score", "1", "21")
        target = tmp_path / "scores.csv"

        assert run("export", "csv", str(target)) == 0

        assert target.read_text(encoding="utf-8-sig").splitlines()[1] == "Ana,1,20,21,21"

    def test_export_pdf_when_not_calculable_then_still_written(self, run, tmp_path):
        run("student", "add")
        target = tmp_path / "sheet.pdf"

        assert run("export", "pdf", str(target)) == 0

        assert target.read_bytes().startswith(b"%PDF")

    def test_reset_when_called_then_default_hierarchy(self, run, rubric_file, capsys):
        run("import", str(rubric_file))
        run("reset")
        capsys.readouterr()

        run("show")

        assert capsys.readouterr().out.startswith("Item 1\n  Element 1: 0")

    def test_balance_fraction_when_out_of_range_then_error(self, run, capsys):
        assert run("--balance-fraction", "2", "show") == 1
        assert "balance_fraction" in capsys.readouterr().err


class TestParser:

    def test_parse_when_score_clear_then_flag_set(self):
        args = build_parser().parse_args(["student", "score", "3", "--clear"])
        assert args.id == 3
        assert args.clear is True
        assert args.score is None

    def test_parse_when_no_balance_fraction_then_engine_default(self):
        args = build_parser().parse_args(["show"])
        assert args.balance_fraction == DEFAULT_BALANCE_FRACTION

    def test_parse_when_score_given_then_kept_as_text(self):
        args = build_parser().parse_args(["student", "score", "3", " 21 "])
        assert args.score == " 21 "

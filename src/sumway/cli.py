"""
Command-line front end for Sumway.

Every invocation opens the gradebook from its data directory, applies one
command and autosaves. Positions on the command line are 1-based, the way
they are shown to users.

Examples:
    sumway import rubric.json
    sumway calculate
    sumway student add --name "Ana"
    sumway student score 1 21
    sumway export csv scores.csv
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from sumway import __version__
from sumway.core.errors import SumwayError
from sumway.core.models import Hierarchy, Results
from sumway.core.schemas.validator import ValidationError
from sumway.core.utils.serialization import deserialize_hierarchy
from sumway.engine import AssignmentStatus, EngineConfig, parse_score
from sumway.engine.config import DEFAULT_BALANCE_FRACTION
from sumway.gradebook import Gradebook, GradebookConfig
from sumway.output import default_csv_name, export_csv, render_score_sheet

logger = logging.getLogger("sumway")


# ─────────────────────────────────────────────────────────────────────────────
# Formatting
# ─────────────────────────────────────────────────────────────────────────────

def format_hierarchy(hierarchy: Hierarchy, results: Optional[Results] = None) -> str:
    lines = []
    for i, item in enumerate(hierarchy.items, start=1):
        lines.append(f"Item {i}")
        for j, element in enumerate(item.elements, start=1):
            lines.append(f"  Element {j}: {', '.join(str(v) for v in element.values)}")
        if results is not None:
            sums = results.item_sums[i - 1]
            lines.append(f"  → {len(sums)} sums: {', '.join(str(s) for s in sums)}")
    if results is not None:
        lines.append(
            f"Totals ({len(results.total_sums)}): "
            + ", ".join(str(t) for t in results.total_sums)
        )
    return "\n".join(lines)


def _format_student(book: Gradebook, student_id: int) -> str:
    student = book.student(student_id)
    if not student.has_score:
        return f"#{student.id} {student.name}: -"
    items = "  ".join(
        f"I{i}={score} ({', '.join(str(e) for e in elements)})"
        for i, (score, elements) in enumerate(
            zip(student.item_scores, student.element_scores), start=1
        )
    )
    return f"#{student.id} {student.name}: {student.total_score}  {items}"


# ─────────────────────────────────────────────────────────────────────────────
# Command handlers
# ─────────────────────────────────────────────────────────────────────────────

def _cmd_show(book: Gradebook, args: argparse.Namespace) -> int:
    results = book.results
    if results is None:
        try:
            results = book.calculate()
        except SumwayError as e:
            print(format_hierarchy(book.hierarchy))
            print(f"(not calculated: {e})")
            return 0
    print(format_hierarchy(book.hierarchy, results))
    return 0


def _cmd_import(book: Gradebook, args: argparse.Namespace) -> int:
    try:
        data = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SumwayError(f"Cannot read {args.file}: {e}") from e
    book.replace_hierarchy(deserialize_hierarchy(data, strict=True))
    print(f"Imported {len(book.hierarchy)} items")
    return 0


def _cmd_calculate(book: Gradebook, args: argparse.Namespace) -> int:
    print(format_hierarchy(book.hierarchy, book.calculate()))
    return 0


def _cmd_item(book: Gradebook, args: argparse.Namespace) -> int:
    if args.action == "add":
        book.add_item()
    else:
        book.remove_item(args.item - 1)
    print(format_hierarchy(book.hierarchy))
    return 0


def _cmd_element(book: Gradebook, args: argparse.Namespace) -> int:
    if args.action == "add":
        book.add_element(args.item - 1)
    else:
        book.remove_element(args.item - 1, args.element - 1)
    print(format_hierarchy(book.hierarchy))
    return 0


def _cmd_value(book: Gradebook, args: argparse.Namespace) -> int:
    if args.action == "add":
        book.add_value(args.item - 1, args.element - 1)
    elif args.action == "remove":
        book.remove_value(args.item - 1, args.element - 1, args.position - 1)
    else:
        book.update_value(args.item - 1, args.element - 1, args.position - 1, args.value)
    print(format_hierarchy(book.hierarchy))
    return 0


def _cmd_scores(book: Gradebook, args: argparse.Namespace) -> int:
    scores = book.attainable_scores(args.filter)
    print(" ".join(str(s) for s in scores) if scores else "(no match)")
    return 0


def _cmd_student(book: Gradebook, args: argparse.Namespace) -> int:
    if args.action == "add":
        student = book.add_student(args.name)
        print(_format_student(book, student.id))
    elif args.action == "remove":
        book.remove_student(args.id)
    elif args.action == "rename":
        book.rename_student(args.id, args.name)
        print(_format_student(book, args.id))
    elif args.action == "score":
        book.student(args.id)
        if args.clear:
            score = None
        elif args.score is None:
            raise SumwayError("Give a score or --clear")
        else:
            score = parse_score(args.score, book.attainable_scores())
            if score is None:
                print(f"{args.score} is not an attainable total; student left unchanged")
                return 1
        outcome = book.set_total_score(args.id, score)
        if outcome.status is AssignmentStatus.UNREACHABLE:
            print(f"{score} is not an attainable total; student left unchanged")
            return 1
        print(_format_student(book, args.id))
    else:
        if not book.students:
            print("No students.")
        for student in book.students:
            print(_format_student(book, student.id))
    return 0


def _cmd_export(book: Gradebook, args: argparse.Namespace) -> int:
    if args.format == "csv":
        path = export_csv(book.hierarchy, book.roster, Path(args.path or default_csv_name()))
    else:
        if not args.path:
            raise SumwayError("export pdf needs a target path")
        path = Path(args.path)
        try:
            results = book.ensure_results()
        except ValidationError as e:
            logger.warning(f"Score sheet without totals summary: {e}")
            results = None
        render_score_sheet(book.hierarchy, book.roster, path, results)
    print(f"Wrote {path}")
    return 0


def _cmd_reset(book: Gradebook, args: argparse.Namespace) -> int:
    book.reset()
    print("Reset to an empty gradebook")
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumway",
        description="Attainable totals and balanced score breakdowns for a scoring rubric",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the gradebook files")
    parser.add_argument("--seed", type=int, help="Random seed for balanced picks")
    parser.add_argument(
        "--balance-fraction", type=float, default=DEFAULT_BALANCE_FRACTION,
        help="Share of the most balanced breakdowns to pick from (default %(default)s)",
    )
    parser.add_argument(
        "--max-search-space", type=int,
        help="Refuse decompositions with more combinations than this",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the hierarchy").set_defaults(handler=_cmd_show)

    p = sub.add_parser("import", help="Replace the hierarchy from a JSON nested list")
    p.add_argument("file", type=Path)
    p.set_defaults(handler=_cmd_import)

    sub.add_parser("calculate", help="Compute attainable sums").set_defaults(handler=_cmd_calculate)

    p = sub.add_parser("item", help="Add or remove items")
    p_sub = p.add_subparsers(dest="action", required=True)
    p_sub.add_parser("add")
    p_sub.add_parser("remove").add_argument("item", type=int)
    p.set_defaults(handler=_cmd_item)

    p = sub.add_parser("element", help="Add or remove evaluation elements")
    p_sub = p.add_subparsers(dest="action", required=True)
    p_sub.add_parser("add").add_argument("item", type=int)
    rm = p_sub.add_parser("remove")
    rm.add_argument("item", type=int)
    rm.add_argument("element", type=int)
    p.set_defaults(handler=_cmd_element)

    p = sub.add_parser("value", help="Add, remove or set element values")
    p_sub = p.add_subparsers(dest="action", required=True)
    add = p_sub.add_parser("add")
    add.add_argument("item", type=int)
    add.add_argument("element", type=int)
    rm = p_sub.add_parser("remove")
    set_ = p_sub.add_parser("set")
    for target in (rm, set_):
        target.add_argument("item", type=int)
        target.add_argument("element", type=int)
        target.add_argument("position", type=int)
    set_.add_argument("value", type=int)
    p.set_defaults(handler=_cmd_value)

    p = sub.add_parser("scores", help="List attainable totals")
    p.add_argument("--filter", default="", help="Only totals containing these digits")
    p.set_defaults(handler=_cmd_scores)

    p = sub.add_parser("student", help="Manage students and their scores")
    p_sub = p.add_subparsers(dest="action", required=True)
    p_sub.add_parser("list")
    p_sub.add_parser("add").add_argument("--name")
    p_sub.add_parser("remove").add_argument("id", type=int)
    rename = p_sub.add_parser("rename")
    rename.add_argument("id", type=int)
    rename.add_argument("name")
    score = p_sub.add_parser("score")
    score.add_argument("id", type=int)
    score.add_argument("score", nargs="?", help="An attainable total")
    score.add_argument("--clear", action="store_true", help="Remove the student's score")
    p.set_defaults(handler=_cmd_student)

    p = sub.add_parser("export", help="Export scores")
    p.add_argument("format", choices=["csv", "pdf"])
    p.add_argument("path", nargs="?")
    p.set_defaults(handler=_cmd_export)

    sub.add_parser("reset", help="Delete everything").set_defaults(handler=_cmd_reset)

    return parser


def _make_config(args: argparse.Namespace) -> GradebookConfig:
    try:
        return GradebookConfig(
            data_dir=args.data_dir,
            engine=EngineConfig(balance_fraction=args.balance_fraction, seed=args.seed),
            max_search_space=args.max_search_space,
        )
    except ValueError as e:
        raise SumwayError(str(e)) from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    try:
        book = Gradebook.open(_make_config(args))
        return args.handler(book, args)
    except SumwayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

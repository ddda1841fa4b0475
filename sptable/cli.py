"""
Command line S-P table analysis of a CSV response table.

Usage:
    sptable results.csv
    sptable results.csv --layout marks --format json --output results.json

Exit codes:
    0 - Success
    1 - Input error (unreadable or malformed CSV, invalid matrix, unwritable output)
    2 - Analysis error
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sptable.core.logging_config import setup_logging
from sptable.core.sp import (
    CSVImportResult,
    SPTableError,
    SPTableResult,
    analyze_sp_table,
    export_to_csv,
    export_to_json,
    format_caution_index,
    read_response_csv,
)

logger = logging.getLogger(__name__)


def render_text(result: SPTableResult, imported: CSVImportResult) -> str:
    """Render a human-readable summary of an analysis."""
    summary = result.summary
    lines = [
        f"S-P table: {summary.student_count} students x "
        f"{summary.problem_count} problems (layout: {imported.layout})",
        f"Disparity coefficient D*: {result.disparity_coefficient:.4f}",
        f"Average score: {summary.average_score:.2f}",
        f"Average correct rate: {summary.average_correct_rate:.4f}",
        f"Caution students: {summary.caution_student_count} "
        f"(high: {summary.high_caution_student_count})",
        f"Caution problems: {summary.caution_problem_count} "
        f"(high: {summary.high_caution_problem_count})",
        "",
        "Students (S-P order):",
    ]
    for student in result.students:
        lines.append(
            f"  {student.id:<12} score={student.total_score:<4d} "
            f"CS={format_caution_index(student.caution_index):<7} "
            f"{student.caution_level.value}"
        )

    lines.append("")
    lines.append("Problems (S-P order):")
    for problem in result.problems:
        lines.append(
            f"  {problem.id:<12} correct={problem.correct_count:<4d} "
            f"rate={problem.correct_rate:.4f} "
            f"CP={format_caution_index(problem.caution_index):<7} "
            f"{problem.caution_level.value}"
        )

    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the sptable command."""
    parser = argparse.ArgumentParser(
        prog="sptable",
        description="Analyse a student x problem response table (S-P table analysis)",
    )
    parser.add_argument(
        "csv_file",
        type=str,
        help="CSV file with the response table",
    )
    parser.add_argument(
        "--layout",
        type=str,
        choices=["auto", "standard", "transposed", "marks"],
        default="auto",
        help="CSV layout (default: auto)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "csv", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output file path (default: stdout)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for S-P table analysis."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        imported = read_response_csv(args.csv_file, layout=args.layout)
    except SPTableError as exc:
        logger.error("Failed to import %s: %s", args.csv_file, exc)
        return 1

    try:
        result = analyze_sp_table(imported.data)
    except Exception as exc:
        logger.error("S-P table analysis failed: %s", exc)
        return 2

    if args.format == "csv":
        output = export_to_csv(result)
    elif args.format == "json":
        output = export_to_json(result)
    else:
        output = render_text(result, imported)

    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write %s: %s", args.output, exc)
            return 1
        logger.info("Wrote %s output to %s", args.format, args.output)
    else:
        sys.stdout.write(output)
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())

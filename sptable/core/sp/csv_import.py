"""
CSV import of student x problem response tables.

Supported layouts:
- standard: header row is a corner cell followed by problem ids; each
  following row is a student id followed by that student's answers.
- transposed: header row lists student ids; each following row is a
  problem id followed by every student's answer to it.
- marks: standard layout written with circle / cross notation
  (○ / ◯ / O for correct, × / ✕ / X for incorrect).

Cells are normalized to 0/1: "1" and the correct marks are 1; "0", an
empty cell and the incorrect marks are 0. Short rows are padded with 0 and
cells beyond the header width are ignored. Line and column numbers in error
messages are 1-based and count non-blank lines only.
"""

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from ._constants import (
    CORRECT_MARKS,
    INCORRECT_MARKS,
    MARK_DETECTION_CHARS,
    TRANSPOSED_MAX_DATA_ROWS,
    TRANSPOSED_MIN_HEADER_IDS,
    CSVLayoutLiteral,
    CSVLayoutOption,
)
from ._types import RawResponseMatrix
from .exceptions import CSVImportError

logger = logging.getLogger(__name__)

_VALID_LAYOUTS = ("auto", "standard", "transposed", "marks")


@dataclass(frozen=True)
class CSVImportResult:
    """Parsed response matrix and the layout it was read with."""

    data: RawResponseMatrix
    layout: CSVLayoutLiteral


def detect_layout(lines: Sequence[str], header: Sequence[str]) -> CSVLayoutLiteral:
    """
    Guess the layout of a CSV table.

    Args:
        lines: Non-blank lines of the file, header first.
        header: Parsed header cells.

    Returns:
        "marks" if any circle/cross mark appears, "transposed" for a very
        wide header over few data rows, otherwise "standard".
    """
    if any(mark in line for line in lines for mark in MARK_DETECTION_CHARS):
        return "marks"

    header_ids = len(header) - 1
    data_rows = len(lines) - 1
    if header_ids > TRANSPOSED_MIN_HEADER_IDS and data_rows < TRANSPOSED_MAX_DATA_ROWS:
        return "transposed"

    return "standard"


def normalize_cell(value: str, line_no: int, col_no: int) -> int:
    """
    Convert one CSV cell to 0 or 1.

    Raises:
        CSVImportError: If the cell is not a recognized answer value.
    """
    cell = value.strip()
    if cell == "1" or cell in CORRECT_MARKS:
        return 1
    if cell in ("0", "") or cell in INCORRECT_MARKS:
        return 0
    raise CSVImportError(
        f"Line {line_no}, column {col_no}: value must be 0, 1, ○ or × "
        f"(got {cell!r})",
        context={"line": line_no, "column": col_no},
    )


def _parse_body(
    rows: Sequence[Sequence[str]], width: int
) -> Tuple[List[str], List[List[int]]]:
    """Parse data rows into (row ids, padded 0/1 rows)."""
    ids: List[str] = []
    values: List[List[int]] = []

    for line_no, cells in enumerate(rows, start=2):
        if len(cells) < 2:
            raise CSVImportError(
                f"Line {line_no}: not enough cells",
                context={"line": line_no, "cells": len(cells)},
            )

        ids.append(cells[0].strip())
        row = [
            normalize_cell(cell, line_no, col_no)
            for col_no, cell in enumerate(cells[1 : width + 1], start=2)
        ]
        row.extend([0] * (width - len(row)))
        values.append(row)

    return ids, values


def parse_response_csv(
    text: str, layout: CSVLayoutOption = "auto"
) -> CSVImportResult:
    """
    Parse CSV text into a validated response matrix.

    Args:
        text: Full CSV document.
        layout: "auto" to detect, or one of "standard", "transposed", "marks".

    Returns:
        CSVImportResult with the RawResponseMatrix and the layout used.

    Raises:
        CSVImportError: If the text cannot be read as a response table.
        SPInputError: If the parsed table violates the input contract
            (for example duplicated ids).
    """
    if layout not in _VALID_LAYOUTS:
        raise CSVImportError(
            f"Unknown CSV layout: {layout}",
            context={"valid_layouts": list(_VALID_LAYOUTS)},
        )

    lines = [line.strip() for line in re.split(r"\r?\n", text)]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        raise CSVImportError(
            "CSV needs a header row and at least one data row",
            context={"lines": len(lines)},
        )

    try:
        rows = list(csv.reader(lines))
    except csv.Error as e:
        raise CSVImportError("Malformed CSV", original_error=e) from e

    header = rows[0]
    if len(header) < 2:
        raise CSVImportError("Header row must contain at least one id")

    used_layout: CSVLayoutLiteral = (
        detect_layout(lines, header) if layout == "auto" else layout
    )
    header_ids = [cell.strip() for cell in header[1:]]

    if used_layout == "transposed":
        student_ids = header_ids
        problem_ids, by_problem = _parse_body(rows[1:], width=len(student_ids))
        matrix = [
            [by_problem[p][s] for p in range(len(problem_ids))]
            for s in range(len(student_ids))
        ]
    else:
        problem_ids = header_ids
        student_ids, matrix = _parse_body(rows[1:], width=len(problem_ids))

    logger.info(
        f"Imported CSV ({used_layout}): {len(student_ids)} students x "
        f"{len(problem_ids)} problems"
    )

    return CSVImportResult(
        data=RawResponseMatrix(
            student_ids=tuple(student_ids),
            problem_ids=tuple(problem_ids),
            matrix=matrix,
        ),
        layout=used_layout,
    )


def read_response_csv(
    path: Union[str, Path], layout: CSVLayoutOption = "auto"
) -> CSVImportResult:
    """
    Read and parse a CSV file.

    The file is decoded as UTF-8; a leading byte-order mark (as written by
    spreadsheet exports) is dropped.

    Raises:
        CSVImportError: If the file cannot be read or parsed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CSVImportError(
            "Failed to read CSV file", original_error=e, context={"path": str(path)}
        ) from e
    return parse_response_csv(text, layout=layout)

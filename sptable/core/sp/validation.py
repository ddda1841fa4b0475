"""
Defensive validation of raw response matrices.

Upstream collaborators (CSV import, the HTTP schemas) are expected to hand
over well-formed data. These checks turn a violated precondition into a
descriptive SPInputError instead of a numpy broadcasting error deep inside
the analysis.
"""

import logging
from typing import Any, List, Sequence

import numpy as np

from .exceptions import SPInputError

logger = logging.getLogger(__name__)


def _find_duplicates(ids: Sequence[str]) -> List[str]:
    seen = set()
    duplicates: List[str] = []
    for identifier in ids:
        if identifier in seen and identifier not in duplicates:
            duplicates.append(identifier)
        seen.add(identifier)
    return duplicates


def _is_binary_cell(value: Any) -> bool:
    # bool is an int subclass, so True/False pass as 1/0
    if not isinstance(value, (int, np.integer)):
        return False
    return value == 0 or value == 1


def validate_response_matrix(
    student_ids: Sequence[str],
    problem_ids: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> None:
    """
    Check a response matrix against the input contract.

    Args:
        student_ids: Student identifiers in input order.
        problem_ids: Problem identifiers in input order.
        rows: One row per student, one cell per problem.

    Raises:
        SPInputError: If identifiers are blank or duplicated, the matrix is
            not rectangular with the declared dimensions, or a cell is not
            exactly 0 or 1.
    """
    blank = [i for i, sid in enumerate(student_ids) if not str(sid).strip()]
    if blank:
        raise SPInputError(
            "Student identifiers must be non-empty",
            context={"positions": blank},
        )

    duplicate_students = _find_duplicates(student_ids)
    if duplicate_students:
        raise SPInputError(
            "Student identifiers must be unique",
            context={"duplicates": duplicate_students},
        )

    duplicate_problems = _find_duplicates(problem_ids)
    if duplicate_problems:
        raise SPInputError(
            "Problem identifiers must be unique",
            context={"duplicates": duplicate_problems},
        )

    if len(rows) != len(student_ids):
        raise SPInputError(
            "Row count does not match the number of students",
            context={"rows": len(rows), "students": len(student_ids)},
        )

    n_problems = len(problem_ids)
    for row_idx, row in enumerate(rows):
        if len(row) != n_problems:
            raise SPInputError(
                "Ragged response matrix",
                context={
                    "row": row_idx,
                    "length": len(row),
                    "problems": n_problems,
                },
            )
        for col_idx, value in enumerate(row):
            if not _is_binary_cell(value):
                raise SPInputError(
                    "Response cells must be 0 or 1",
                    context={"row": row_idx, "column": col_idx, "value": repr(value)},
                )

    logger.debug(
        f"Validated response matrix: {len(student_ids)} students x {n_problems} problems"
    )

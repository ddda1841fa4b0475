"""
Value types for S-P table analysis.

Every type here is a frozen dataclass and every matrix is a read-only numpy
array, so a result can be handed to renderers and exporters without any
risk of it being modified after the analysis produced it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from ._constants import CautionLevel, get_caution_level
from .validation import validate_response_matrix


def _read_only(array: NDArray) -> NDArray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class RawResponseMatrix:
    """
    Student x problem binary response matrix as delivered by the importer.

    Rows follow ``student_ids`` and columns follow ``problem_ids``; a cell is
    1 for a correct answer and 0 otherwise. Construction validates the input
    contract and stores the matrix as a read-only int8 array, so zero
    students or zero problems give a (0, P) / (S, 0) array rather than an
    error.

    ``matrix`` may be passed as any integer array or as a sequence of rows
    (lists or tuples of ints); either way the field holds the validated
    ndarray once the instance exists.

    Raises:
        SPInputError: If the identifiers or cells violate the input contract.
    """

    student_ids: Tuple[str, ...]
    problem_ids: Tuple[str, ...]
    matrix: NDArray[np.int8]

    def __post_init__(self) -> None:
        student_ids = tuple(self.student_ids)
        problem_ids = tuple(self.problem_ids)
        if isinstance(self.matrix, np.ndarray):
            rows = self.matrix.tolist()
        else:
            rows = [list(row) for row in self.matrix]

        validate_response_matrix(student_ids, problem_ids, rows)

        matrix = np.array(rows, dtype=np.int8).reshape(
            len(student_ids), len(problem_ids)
        )
        object.__setattr__(self, "student_ids", student_ids)
        object.__setattr__(self, "problem_ids", problem_ids)
        object.__setattr__(self, "matrix", _read_only(matrix))

    @property
    def n_students(self) -> int:
        """Number of students (rows)."""
        return len(self.student_ids)

    @property
    def n_problems(self) -> int:
        """Number of problems (columns)."""
        return len(self.problem_ids)


@dataclass(frozen=True, eq=False)
class MatrixTotals:
    """Row sums (scores) and column sums (correct counts) of a matrix."""

    scores: NDArray[np.int64]
    correct_counts: NDArray[np.int64]


@dataclass(frozen=True, eq=False)
class Ranking:
    """
    Student and problem permutations plus the matrix they produce.

    ``student_order[i]`` is the original row of ranked student i and
    ``problem_order[j]`` the original column of ranked problem j, so that
    ``ranked_matrix[i, j] == matrix[student_order[i], problem_order[j]]``.
    """

    student_order: NDArray[np.int64]
    problem_order: NDArray[np.int64]
    ranked_matrix: NDArray[np.int8]
    ranked_scores: NDArray[np.int64]
    ranked_correct_counts: NDArray[np.int64]


@dataclass(frozen=True)
class CautionIndices:
    """Caution indices in ranked order; None marks a zero denominator."""

    students: Tuple[Optional[float], ...]
    problems: Tuple[Optional[float], ...]


@dataclass(frozen=True)
class SeparationAreas:
    """Observed and expected area between the idealized boundary and the data."""

    observed: int
    expected: float


@dataclass(frozen=True)
class RankedStudent:
    """A student row after ranking."""

    id: str
    original_index: int
    total_score: int
    responses: Tuple[int, ...]
    caution_index: Optional[float]

    @property
    def caution_level(self) -> CautionLevel:
        """Caution band of this student's CS."""
        return get_caution_level(self.caution_index)


@dataclass(frozen=True)
class RankedProblem:
    """A problem column after ranking."""

    id: str
    original_index: int
    correct_count: int
    correct_rate: float
    caution_index: Optional[float]

    @property
    def caution_level(self) -> CautionLevel:
        """Caution band of this problem's CP."""
        return get_caution_level(self.caution_index)


@dataclass(frozen=True)
class CurvePoint:
    """Curve vertex; both coordinates normalized to [0, 1]."""

    x: float
    y: float


@dataclass(frozen=True)
class CurveSet:
    """Step polylines for the S-curve and the P-curve."""

    s_curve: Tuple[CurvePoint, ...]
    p_curve: Tuple[CurvePoint, ...]


@dataclass(frozen=True)
class SPTableSummary:
    """Headline counts and averages for an analysed table."""

    student_count: int
    problem_count: int
    average_score: float
    average_correct_rate: float
    caution_student_count: int  # CS >= 0.50
    high_caution_student_count: int  # CS >= 0.75
    caution_problem_count: int  # CP >= 0.50
    high_caution_problem_count: int  # CP >= 0.75


@dataclass(frozen=True, eq=False)
class SPTableResult:
    """Complete S-P table analysis of one response matrix."""

    students: Tuple[RankedStudent, ...]
    problems: Tuple[RankedProblem, ...]
    ranked_matrix: NDArray[np.int8]
    curves: CurveSet
    disparity_coefficient: float
    separation_area: int
    expected_separation_area: float
    summary: SPTableSummary

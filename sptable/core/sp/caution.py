"""
Caution indices for students (CS) and problems (CP).

A caution index measures how far one row (or column) of the ranked table
departs from the Guttman pattern implied by the ranking, weighting each
cell by the popularity of the entity on the other axis.

Student formula (ranked student i, boundary k = score_i):
    A_i = sum(correct_count_j for j < k  if cell(i, j) == 0)
    B_i = sum(correct_count_j for j >= k if cell(i, j) == 1)
    C_i = sum(correct_count_j for j < k)
    CS_i = (A_i - B_i) / (C_i - k * mean(correct_count))

Problem formula (ranked problem j, boundary m = correct_count_j): the same
with the axes swapped, summing student scores over rows [0, m) and [m, S)
and using mean(score) in the denominator.

The denominator is zero whenever the idealized boundary area equals the
actual area (for example a student who answered everything, or a problem
everyone answered). The index is then an indeterminate 0/0 and is reported
as None, never as 0 or NaN.

All sums are computed as exact integers. The mean is folded into the
denominator by scaling numerator and denominator by the length of the
summed axis, so the zero test is exact and the only rounding happens in
the final division.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from ._types import CautionIndices

logger = logging.getLogger(__name__)


def _boundary_sums(
    cells: NDArray, weights: NDArray[np.int64], boundaries: NDArray[np.int64]
) -> Tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.int64]]:
    """
    Weighted sums on either side of each row's boundary.

    Args:
        cells: n_rows x n_cols binary matrix (ranked).
        weights: One weight per column.
        boundaries: One boundary position per row; columns ``< boundary``
            lie left of it.

    Returns:
        Tuple (A, B, C) of int64 vectors, one entry per row.
    """
    n_cols = cells.shape[1]
    left = np.arange(n_cols)[np.newaxis, :] < boundaries[:, np.newaxis]
    correct = cells == 1

    missed_left = (left & ~correct).astype(np.int64) @ weights
    correct_right = (~left & correct).astype(np.int64) @ weights
    left_total = left.astype(np.int64) @ weights
    return missed_left, correct_right, left_total


def _indices_from_sums(
    missed_left: NDArray[np.int64],
    correct_right: NDArray[np.int64],
    left_total: NDArray[np.int64],
    boundaries: NDArray[np.int64],
    weight_total: int,
    n_cols: int,
) -> List[Optional[float]]:
    # C - k * (W / n)  ==  (C * n - k * W) / n
    indices: List[Optional[float]] = []
    for a, b, c, k in zip(
        missed_left.tolist(),
        correct_right.tolist(),
        left_total.tolist(),
        boundaries.tolist(),
    ):
        scaled_denominator = c * n_cols - k * weight_total
        if scaled_denominator == 0:
            indices.append(None)
        else:
            indices.append((a - b) * n_cols / scaled_denominator)
    return indices


def compute_student_caution_indices(
    ranked_matrix: NDArray,
    ranked_scores: NDArray,
    ranked_correct_counts: NDArray,
) -> List[Optional[float]]:
    """
    Compute CS for every ranked student.

    Args:
        ranked_matrix: S x P ranked response matrix.
        ranked_scores: Student scores in ranked order (boundaries).
        ranked_correct_counts: Problem correct counts in ranked order (weights).

    Returns:
        One CS value per ranked student, None where the denominator is zero.
    """
    cells = np.asarray(ranked_matrix, dtype=np.int64)
    scores = np.asarray(ranked_scores, dtype=np.int64)
    weights = np.asarray(ranked_correct_counts, dtype=np.int64)

    a, b, c = _boundary_sums(cells, weights, scores)
    return _indices_from_sums(
        a, b, c, scores, weight_total=int(weights.sum()), n_cols=weights.shape[0]
    )


def compute_problem_caution_indices(
    ranked_matrix: NDArray,
    ranked_scores: NDArray,
    ranked_correct_counts: NDArray,
) -> List[Optional[float]]:
    """
    Compute CP for every ranked problem.

    The ranked matrix is transposed so problems become rows; the boundary of
    problem j is its correct count and each student row is weighted by the
    student's score.

    Args:
        ranked_matrix: S x P ranked response matrix.
        ranked_scores: Student scores in ranked order (weights).
        ranked_correct_counts: Problem correct counts in ranked order (boundaries).

    Returns:
        One CP value per ranked problem, None where the denominator is zero.
    """
    cells = np.asarray(ranked_matrix, dtype=np.int64).T
    weights = np.asarray(ranked_scores, dtype=np.int64)
    counts = np.asarray(ranked_correct_counts, dtype=np.int64)

    a, b, c = _boundary_sums(cells, weights, counts)
    return _indices_from_sums(
        a, b, c, counts, weight_total=int(weights.sum()), n_cols=weights.shape[0]
    )


def compute_caution_indices(
    ranked_matrix: NDArray,
    ranked_scores: NDArray,
    ranked_correct_counts: NDArray,
) -> CautionIndices:
    """
    Compute CS for all students and CP for all problems.

    Args:
        ranked_matrix: S x P ranked response matrix.
        ranked_scores: Student scores in ranked order.
        ranked_correct_counts: Problem correct counts in ranked order.

    Returns:
        CautionIndices with one nullable value per ranked student and per
        ranked problem.
    """
    students = compute_student_caution_indices(
        ranked_matrix, ranked_scores, ranked_correct_counts
    )
    problems = compute_problem_caution_indices(
        ranked_matrix, ranked_scores, ranked_correct_counts
    )

    not_computable = sum(1 for v in students if v is None) + sum(
        1 for v in problems if v is None
    )
    if not_computable:
        logger.debug(f"{not_computable} caution indices not computable (zero denominator)")

    return CautionIndices(students=tuple(students), problems=tuple(problems))

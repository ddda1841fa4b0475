"""
Disparity coefficient (D*) of a ranked S-P table.

D* compares how much of the area left of the S-curve is filled with wrong
answers against the amount expected if students answered at random with
each problem's observed difficulty:

    observed = count of cells (i, j) with j < score_i and cell == 0
    expected = sum over i of sum over j < score_i of (1 - correct_rate_j)
    D*       = observed / expected

D* = 0 for a perfect Guttman pattern; realistic tables rarely exceed ~2.
When the expected area is 0, D* is 0 if the observed area is 0 as well and
DEGENERATE_DISPARITY_FALLBACK (1.0) otherwise.
"""

import logging
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from ._constants import DEGENERATE_DISPARITY_FALLBACK
from ._types import SeparationAreas

logger = logging.getLogger(__name__)


def _scaled_areas(
    ranked_matrix: NDArray, ranked_scores: NDArray, ranked_correct_counts: NDArray
) -> Tuple[int, int]:
    """Return (observed, S * expected) as exact integers."""
    cells = np.asarray(ranked_matrix, dtype=np.int64)
    scores = np.asarray(ranked_scores, dtype=np.int64)
    counts = np.asarray(ranked_correct_counts, dtype=np.int64)
    n_students, n_problems = cells.shape

    if n_students == 0 or n_problems == 0:
        return 0, 0

    left = np.arange(n_problems)[np.newaxis, :] < scores[:, np.newaxis]
    observed = int(np.count_nonzero(left & (cells == 0)))
    # (1 - count / S) summed and scaled by S keeps everything integral
    expected_scaled = int((left.astype(np.int64) @ (n_students - counts)).sum())
    return observed, expected_scaled


def _areas(observed: int, expected_scaled: int, n_students: int) -> SeparationAreas:
    expected = expected_scaled / n_students if n_students else 0.0
    return SeparationAreas(observed=observed, expected=expected)


def _coefficient(observed: int, expected_scaled: int, n_students: int) -> float:
    if expected_scaled == 0:
        if observed == 0:
            return 0.0
        logger.warning(
            f"Expected separation area is zero with observed area {observed}; "
            f"reporting D*={DEGENERATE_DISPARITY_FALLBACK}"
        )
        return DEGENERATE_DISPARITY_FALLBACK

    return observed * n_students / expected_scaled


def compute_separation_areas(
    ranked_matrix: NDArray, ranked_scores: NDArray, ranked_correct_counts: NDArray
) -> SeparationAreas:
    """
    Compute the observed and expected separation areas.

    Args:
        ranked_matrix: S x P ranked response matrix.
        ranked_scores: Student scores in ranked order.
        ranked_correct_counts: Problem correct counts in ranked order.

    Returns:
        SeparationAreas with the observed cell count and the expected area.
    """
    observed, expected_scaled = _scaled_areas(
        ranked_matrix, ranked_scores, ranked_correct_counts
    )
    n_students = np.asarray(ranked_matrix).shape[0]
    return _areas(observed, expected_scaled, n_students)


def compute_disparity_coefficient(
    ranked_matrix: NDArray, ranked_scores: NDArray, ranked_correct_counts: NDArray
) -> float:
    """
    Compute D* for a ranked table.

    Args:
        ranked_matrix: S x P ranked response matrix.
        ranked_scores: Student scores in ranked order.
        ranked_correct_counts: Problem correct counts in ranked order.

    Returns:
        The disparity coefficient (>= 0).
    """
    observed, expected_scaled = _scaled_areas(
        ranked_matrix, ranked_scores, ranked_correct_counts
    )
    n_students = np.asarray(ranked_matrix).shape[0]
    return _coefficient(observed, expected_scaled, n_students)


def compute_disparity(
    ranked_matrix: NDArray, ranked_scores: NDArray, ranked_correct_counts: NDArray
) -> Tuple[SeparationAreas, float]:
    """
    Compute the separation areas and D* from a single pass over the table.

    Returns:
        Tuple of (SeparationAreas, D*), equal to what
        compute_separation_areas and compute_disparity_coefficient return.
    """
    observed, expected_scaled = _scaled_areas(
        ranked_matrix, ranked_scores, ranked_correct_counts
    )
    n_students = np.asarray(ranked_matrix).shape[0]
    return (
        _areas(observed, expected_scaled, n_students),
        _coefficient(observed, expected_scaled, n_students),
    )

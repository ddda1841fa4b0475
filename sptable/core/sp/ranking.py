"""
Stable ranking of students and problems.

Students are ordered by total score (descending) and problems by correct
count (descending). Ties are broken by the original position (ascending)
through an explicit secondary sort key, so the order never depends on the
stability guarantees of a particular sort routine.
"""

import numpy as np
from numpy.typing import NDArray

from ._types import MatrixTotals, Ranking


def stable_order(keys: NDArray) -> NDArray[np.int64]:
    """
    Permutation sorting ``keys`` descending, ties by ascending index.

    Args:
        keys: One integer key per entity.

    Returns:
        Array of original indices in ranked order.

    Example:
        >>> stable_order(np.array([2, 3, 2, 1])).tolist()
        [1, 0, 2, 3]
    """
    keys = np.asarray(keys, dtype=np.int64)
    original_index = np.arange(keys.shape[0], dtype=np.int64)
    # np.lexsort uses the last key as the primary key
    return np.lexsort((original_index, -keys)).astype(np.int64)


def rank_matrix(matrix: NDArray, totals: MatrixTotals) -> Ranking:
    """
    Reorder both axes of a response matrix.

    Args:
        matrix: S x P binary response matrix in input order.
        totals: Row and column sums of ``matrix``.

    Returns:
        Ranking holding both permutations, the reordered matrix
        (``ranked[i, j] = matrix[student_order[i], problem_order[j]]``) and
        the totals in ranked order.
    """
    student_order = stable_order(totals.scores)
    problem_order = stable_order(totals.correct_counts)

    ranked = np.asarray(matrix, dtype=np.int8)[np.ix_(student_order, problem_order)]
    ranked.setflags(write=False)

    return Ranking(
        student_order=student_order,
        problem_order=problem_order,
        ranked_matrix=ranked,
        ranked_scores=totals.scores[student_order],
        ranked_correct_counts=totals.correct_counts[problem_order],
    )

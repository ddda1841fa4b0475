"""
Row and column totals of a response matrix.
"""

import numpy as np
from numpy.typing import NDArray

from ._types import MatrixTotals


def reduce_matrix(matrix: NDArray) -> MatrixTotals:
    """
    Compute per-student scores and per-problem correct counts.

    Args:
        matrix: S x P binary response matrix.

    Returns:
        MatrixTotals with ``scores`` (length S) and ``correct_counts``
        (length P). Empty dimensions give empty vectors.
    """
    # int64 so that later weighted sums stay exact
    values = np.asarray(matrix, dtype=np.int64)
    return MatrixTotals(
        scores=values.sum(axis=1),
        correct_counts=values.sum(axis=0),
    )

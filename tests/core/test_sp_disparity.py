"""
Tests for the disparity coefficient D* and the separation areas.
"""

import numpy as np
import pytest

from sptable.core.sp import (
    DEGENERATE_DISPARITY_FALLBACK,
    compute_disparity,
    compute_disparity_coefficient,
    compute_separation_areas,
    rank_matrix,
    reduce_matrix,
)


def _ranked(rows):
    matrix = np.array(rows, dtype=np.int8)
    ranking = rank_matrix(matrix, reduce_matrix(matrix))
    return (
        ranking.ranked_matrix,
        ranking.ranked_scores,
        ranking.ranked_correct_counts,
    )


class TestDisparityCoefficient:
    """Tests for compute_disparity_coefficient."""

    def test_perfect_pattern_is_zero(self):
        """A perfect Guttman pattern has D* = 0 exactly."""
        assert compute_disparity_coefficient(*_ranked([[1, 1, 1], [1, 1, 0], [1, 0, 0]])) == 0.0

    def test_tied_example(self):
        """Scores 2, 2, 1 and counts 3, 1, 1 give D* = 1 / (4/3) = 0.75."""
        d_star = compute_disparity_coefficient(*_ranked([[1, 0, 1], [1, 1, 0], [1, 0, 0]]))
        assert d_star == pytest.approx(0.75)

    def test_aberrant_example(self):
        """Observed area 2 against expected area 3 gives D* = 2/3."""
        d_star = compute_disparity_coefficient(
            *_ranked([[1, 1, 1, 0], [1, 1, 0, 0], [0, 0, 1, 1], [1, 0, 0, 0]])
        )
        assert d_star == pytest.approx(2 / 3)

    def test_all_correct_is_zero(self):
        """Expected and observed areas are both 0 when everyone answers everything."""
        assert compute_disparity_coefficient(*_ranked([[1, 1], [1, 1]])) == 0.0

    def test_all_incorrect_is_zero(self):
        """Nobody scores, so both areas are 0."""
        assert compute_disparity_coefficient(*_ranked([[0, 0], [0, 0]])) == 0.0

    def test_empty_table_is_zero(self):
        """A 0x0 table has D* = 0."""
        empty = np.zeros((0, 0), dtype=np.int8)
        assert (
            compute_disparity_coefficient(
                empty, np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
            )
            == 0.0
        )

    def test_fallback_when_expected_is_zero(self):
        """A zero expected area with a non-zero observed area reports the fallback."""
        # Not producible from a consistent binary table: the ranked totals
        # here are supplied directly.
        matrix = np.array([[0, 1]], dtype=np.int8)
        scores = np.array([1], dtype=np.int64)
        counts = np.array([1, 1], dtype=np.int64)
        assert compute_disparity_coefficient(matrix, scores, counts) == (
            DEGENERATE_DISPARITY_FALLBACK
        )
        assert DEGENERATE_DISPARITY_FALLBACK == 1.0

    def test_row_permutation_invariance(self):
        """Shuffling the students of the input does not change D*."""
        rng = np.random.default_rng(3)
        matrix = (rng.random((15, 8)) < 0.55).astype(np.int8)
        expected = compute_disparity_coefficient(*_ranked(matrix))

        for _ in range(5):
            shuffled = matrix[rng.permutation(matrix.shape[0])]
            assert compute_disparity_coefficient(*_ranked(shuffled)) == pytest.approx(expected)

    def test_column_permutation_invariance_without_ties(self):
        """Shuffling problems with distinct correct counts does not change D*."""
        # correct counts 5, 4, 3, 2, 1 with a few misplaced answers
        matrix = np.array(
            [
                [1, 1, 1, 1, 0],
                [1, 1, 0, 1, 0],
                [1, 0, 1, 0, 1],
                [1, 1, 1, 0, 0],
                [1, 1, 0, 0, 0],
            ],
            dtype=np.int8,
        )
        assert sorted(matrix.sum(axis=0).tolist()) == [1, 2, 3, 4, 5]
        expected = compute_disparity_coefficient(*_ranked(matrix))

        rng = np.random.default_rng(5)
        for _ in range(5):
            shuffled = matrix[:, rng.permutation(matrix.shape[1])]
            assert compute_disparity_coefficient(*_ranked(shuffled)) == pytest.approx(expected)

    def test_non_negative(self):
        """D* is never negative."""
        rng = np.random.default_rng(17)
        for _ in range(20):
            matrix = (rng.random((7, 6)) < 0.5).astype(np.int8)
            assert compute_disparity_coefficient(*_ranked(matrix)) >= 0.0


class TestSeparationAreas:
    """Tests for compute_separation_areas."""

    def test_areas_behind_tied_example(self):
        """Observed area 1 and expected area 4/3."""
        areas = compute_separation_areas(*_ranked([[1, 0, 1], [1, 1, 0], [1, 0, 0]]))
        assert areas.observed == 1
        assert areas.expected == pytest.approx(4 / 3)

    def test_areas_match_coefficient(self):
        """D* equals observed / expected whenever expected is non-zero."""
        rows = [[1, 1, 1, 0], [1, 1, 0, 0], [0, 0, 1, 1], [1, 0, 0, 0]]
        areas = compute_separation_areas(*_ranked(rows))
        assert areas.observed == 2
        assert areas.expected == pytest.approx(3.0)
        assert compute_disparity_coefficient(*_ranked(rows)) == pytest.approx(
            areas.observed / areas.expected
        )

    def test_empty_table(self):
        """A 0x0 table has zero areas."""
        empty = np.zeros((0, 0), dtype=np.int8)
        areas = compute_separation_areas(
            empty, np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
        )
        assert areas.observed == 0
        assert areas.expected == 0.0


class TestComputeDisparity:
    """Tests for compute_disparity."""

    def test_matches_separate_functions(self):
        """Areas and D* agree with the single-purpose functions."""
        rows = [[1, 1, 1, 0], [1, 1, 0, 0], [0, 0, 1, 1], [1, 0, 0, 0]]

        areas, d_star = compute_disparity(*_ranked(rows))

        assert areas == compute_separation_areas(*_ranked(rows))
        assert d_star == compute_disparity_coefficient(*_ranked(rows))
        assert d_star == pytest.approx(2 / 3)

    def test_fallback(self):
        """The zero expected area fallback applies here as well."""
        matrix = np.array([[0, 1]], dtype=np.int8)
        scores = np.array([1], dtype=np.int64)
        counts = np.array([1, 1], dtype=np.int64)

        areas, d_star = compute_disparity(matrix, scores, counts)

        assert areas.observed == 1
        assert areas.expected == 0.0
        assert d_star == DEGENERATE_DISPARITY_FALLBACK

    def test_problems_without_students(self):
        """A (0, P) table has zero areas and D* = 0."""
        empty = np.zeros((0, 3), dtype=np.int8)

        areas, d_star = compute_disparity(
            empty, np.zeros(0, dtype=np.int64), np.zeros(3, dtype=np.int64)
        )

        assert areas.observed == 0
        assert areas.expected == 0.0
        assert d_star == 0.0

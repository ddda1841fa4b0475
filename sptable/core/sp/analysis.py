"""
S-P table analysis pipeline.

Runs the components in a fixed order on one response matrix:

1. reduce_matrix: scores and correct counts
2. rank_matrix: stable permutations and the ranked matrix
3. compute_caution_indices / build_curves (independent of each other)
4. compute_disparity: separation areas and D* in one pass
5. summarize: threshold counts and averages

Each call derives a fresh, immutable SPTableResult; nothing is cached
between calls.
"""

import logging
from typing import Sequence

from ._constants import CRITICAL_THRESHOLD, WARNING_THRESHOLD
from ._types import (
    RankedProblem,
    RankedStudent,
    RawResponseMatrix,
    SPTableResult,
    SPTableSummary,
)
from .caution import compute_caution_indices
from .curves import build_curves
from .disparity import compute_disparity
from .ranking import rank_matrix
from .reducer import reduce_matrix

logger = logging.getLogger(__name__)


def _count_at_least(indices: Sequence, threshold: float) -> int:
    return sum(1 for value in indices if value is not None and value >= threshold)


def summarize(
    students: Sequence[RankedStudent], problems: Sequence[RankedProblem]
) -> SPTableSummary:
    """
    Build the summary counts for ranked students and problems.

    Null caution indices never count toward either threshold.
    """
    student_count = len(students)
    problem_count = len(problems)

    average_score = (
        sum(s.total_score for s in students) / student_count if student_count else 0.0
    )
    average_correct_rate = (
        sum(p.correct_rate for p in problems) / problem_count if problem_count else 0.0
    )

    student_indices = [s.caution_index for s in students]
    problem_indices = [p.caution_index for p in problems]

    return SPTableSummary(
        student_count=student_count,
        problem_count=problem_count,
        average_score=average_score,
        average_correct_rate=average_correct_rate,
        caution_student_count=_count_at_least(student_indices, WARNING_THRESHOLD),
        high_caution_student_count=_count_at_least(student_indices, CRITICAL_THRESHOLD),
        caution_problem_count=_count_at_least(problem_indices, WARNING_THRESHOLD),
        high_caution_problem_count=_count_at_least(problem_indices, CRITICAL_THRESHOLD),
    )


def analyze_sp_table(data: RawResponseMatrix) -> SPTableResult:
    """
    Run the complete S-P table analysis.

    Args:
        data: Validated raw response matrix.

    Returns:
        SPTableResult with ranked students and problems (caution indices
        attached), the ranked matrix, both curves, D*, the separation areas
        and the summary.

    Example:
        >>> data = RawResponseMatrix(
        ...     student_ids=("s1", "s2"),
        ...     problem_ids=("p1", "p2"),
        ...     matrix=[[1, 0], [1, 1]],
        ... )
        >>> result = analyze_sp_table(data)
        >>> [s.id for s in result.students]
        ['s2', 's1']
    """
    totals = reduce_matrix(data.matrix)
    ranking = rank_matrix(data.matrix, totals)

    cautions = compute_caution_indices(
        ranking.ranked_matrix, ranking.ranked_scores, ranking.ranked_correct_counts
    )
    curves = build_curves(
        ranking.ranked_scores.tolist(), ranking.ranked_correct_counts.tolist()
    )

    areas, disparity = compute_disparity(
        ranking.ranked_matrix, ranking.ranked_scores, ranking.ranked_correct_counts
    )

    n_students = data.n_students
    ranked_rows = ranking.ranked_matrix.tolist()

    students = tuple(
        RankedStudent(
            id=data.student_ids[original],
            original_index=original,
            total_score=score,
            responses=tuple(ranked_rows[i]),
            caution_index=cautions.students[i],
        )
        for i, (original, score) in enumerate(
            zip(ranking.student_order.tolist(), ranking.ranked_scores.tolist())
        )
    )
    problems = tuple(
        RankedProblem(
            id=data.problem_ids[original],
            original_index=original,
            correct_count=count,
            correct_rate=count / n_students if n_students else 0.0,
            caution_index=cautions.problems[j],
        )
        for j, (original, count) in enumerate(
            zip(ranking.problem_order.tolist(), ranking.ranked_correct_counts.tolist())
        )
    )

    summary = summarize(students, problems)

    logger.info(
        f"S-P table analysed: {n_students} students x {data.n_problems} problems, "
        f"D*={disparity:.4f}, caution students={summary.caution_student_count}, "
        f"caution problems={summary.caution_problem_count}"
    )

    return SPTableResult(
        students=students,
        problems=problems,
        ranked_matrix=ranking.ranked_matrix,
        curves=curves,
        disparity_coefficient=disparity,
        separation_area=areas.observed,
        expected_separation_area=areas.expected,
        summary=summary,
    )

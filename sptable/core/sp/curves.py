"""
S-curve and P-curve construction.

Both curves are step polylines over the ranked table, normalized so that
the full table spans [0, 1] on each axis with the origin at the top-left:

- S-curve: for each ranked student, a vertical step at x = score / P
  covering that student's row.
- P-curve: for each ranked problem, a horizontal step at
  y = correct_count / S covering that problem's column.

Under a perfect Guttman pattern the two curves coincide.
"""

from typing import List, Sequence

from ._types import CurvePoint, CurveSet


def build_s_curve(ranked_scores: Sequence[int], n_problems: int) -> List[CurvePoint]:
    """
    Build the S-curve from ranked student scores.

    Args:
        ranked_scores: Total scores in ranked order.
        n_problems: Number of problems (P).

    Returns:
        1 + 2*S points starting at (0, 0); empty if S or P is zero.
    """
    n_students = len(ranked_scores)
    if n_students == 0 or n_problems == 0:
        return []

    points = [CurvePoint(0.0, 0.0)]
    for i, score in enumerate(ranked_scores):
        x = int(score) / n_problems
        points.append(CurvePoint(x, i / n_students))
        points.append(CurvePoint(x, (i + 1) / n_students))
    return points


def build_p_curve(
    ranked_correct_counts: Sequence[int], n_students: int
) -> List[CurvePoint]:
    """
    Build the P-curve from ranked problem correct counts.

    Args:
        ranked_correct_counts: Correct counts in ranked order.
        n_students: Number of students (S).

    Returns:
        1 + 2*P points starting at (0, 0); empty if S or P is zero.
    """
    n_problems = len(ranked_correct_counts)
    if n_students == 0 or n_problems == 0:
        return []

    points = [CurvePoint(0.0, 0.0)]
    for j, count in enumerate(ranked_correct_counts):
        y = int(count) / n_students
        points.append(CurvePoint(j / n_problems, y))
        points.append(CurvePoint((j + 1) / n_problems, y))
    return points


def build_curves(
    ranked_scores: Sequence[int], ranked_correct_counts: Sequence[int]
) -> CurveSet:
    """Build both curves from the ranked totals."""
    n_students = len(ranked_scores)
    n_problems = len(ranked_correct_counts)
    return CurveSet(
        s_curve=tuple(build_s_curve(ranked_scores, n_problems)),
        p_curve=tuple(build_p_curve(ranked_correct_counts, n_students)),
    )

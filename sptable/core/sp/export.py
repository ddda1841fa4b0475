"""
Export of S-P table results as CSV or JSON documents.

A caution index that is not computable is written as NOT_COMPUTABLE_MARKER
in CSV and as null in JSON, never as a blank cell or 0.
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ._constants import NOT_COMPUTABLE_MARKER
from ._types import CurvePoint, SPTableResult


def format_caution_index(value: Optional[float], decimals: int = 4) -> str:
    """Render a nullable caution index for text output."""
    if value is None:
        return NOT_COMPUTABLE_MARKER
    return f"{value:.{decimals}f}"


def export_to_csv(result: SPTableResult) -> str:
    """
    Export a result as a three-block CSV document.

    Blocks, separated by a blank line:
    1. Ranked students: id, original index, ranked answers, score, CS.
    2. Ranked problems: id, original index, correct count, correct rate, CP.
    3. Summary key/value rows starting with D*.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        ["student_id", "original_index"]
        + [p.id for p in result.problems]
        + ["score", "cs"]
    )
    for student in result.students:
        writer.writerow(
            [student.id, student.original_index]
            + list(student.responses)
            + [student.total_score, format_caution_index(student.caution_index)]
        )

    writer.writerow([])
    writer.writerow(
        ["problem_id", "original_index", "correct_count", "correct_rate", "cp"]
    )
    for problem in result.problems:
        writer.writerow(
            [
                problem.id,
                problem.original_index,
                problem.correct_count,
                f"{problem.correct_rate:.4f}",
                format_caution_index(problem.caution_index),
            ]
        )

    summary = result.summary
    writer.writerow([])
    writer.writerow(["disparity_coefficient", f"{result.disparity_coefficient:.4f}"])
    writer.writerow(["student_count", summary.student_count])
    writer.writerow(["problem_count", summary.problem_count])
    writer.writerow(["average_score", f"{summary.average_score:.2f}"])
    writer.writerow(["average_correct_rate", f"{summary.average_correct_rate:.4f}"])
    writer.writerow(["caution_student_count", summary.caution_student_count])
    writer.writerow(["high_caution_student_count", summary.high_caution_student_count])
    writer.writerow(["caution_problem_count", summary.caution_problem_count])
    writer.writerow(["high_caution_problem_count", summary.high_caution_problem_count])

    return output.getvalue()


def _points(points: Sequence[CurvePoint]) -> List[Dict[str, float]]:
    return [{"x": p.x, "y": p.y} for p in points]


def result_to_dict(result: SPTableResult) -> Dict[str, Any]:
    """Convert a result to plain JSON-serializable data."""
    summary = result.summary
    return {
        "students": [
            {
                "id": s.id,
                "original_index": s.original_index,
                "total_score": s.total_score,
                "caution_index": s.caution_index,
                "caution_level": s.caution_level.value,
                "responses": list(s.responses),
            }
            for s in result.students
        ],
        "problems": [
            {
                "id": p.id,
                "original_index": p.original_index,
                "correct_count": p.correct_count,
                "correct_rate": p.correct_rate,
                "caution_index": p.caution_index,
                "caution_level": p.caution_level.value,
            }
            for p in result.problems
        ],
        "matrix": result.ranked_matrix.tolist(),
        "curves": {
            "s_curve": _points(result.curves.s_curve),
            "p_curve": _points(result.curves.p_curve),
        },
        "statistics": {
            "disparity_coefficient": result.disparity_coefficient,
            "separation_area": result.separation_area,
            "expected_separation_area": result.expected_separation_area,
            "student_count": summary.student_count,
            "problem_count": summary.problem_count,
            "average_score": summary.average_score,
            "average_correct_rate": summary.average_correct_rate,
            "caution_student_count": summary.caution_student_count,
            "high_caution_student_count": summary.high_caution_student_count,
            "caution_problem_count": summary.caution_problem_count,
            "high_caution_problem_count": summary.high_caution_problem_count,
        },
    }


def export_to_json(
    result: SPTableResult, exported_at: Optional[datetime] = None
) -> str:
    """
    Export a result as a pretty-printed JSON document.

    Args:
        result: Analysis result.
        exported_at: Timestamp to embed; defaults to the current UTC time.
    """
    data = result_to_dict(result)
    data["exported_at"] = (exported_at or datetime.now(timezone.utc)).isoformat()
    return json.dumps(data, indent=2, ensure_ascii=False)

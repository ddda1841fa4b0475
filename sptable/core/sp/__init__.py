r"""
S-P (Student-Problem) table analysis.

This package implements the S-P table engine for binary response matrices:
- Matrix reduction (student scores, problem correct counts)
- Stable ranking of both axes and the ranked matrix
- S-curve and P-curve step polylines
- Caution indices per student (CS) and per problem (CP)
- Disparity coefficient (D*)

It also holds the boundaries of the engine: input validation, CSV import
and CSV/JSON export.

Usage Example
-------------
Analyse a small table and inspect irregular students:

    from sptable.core.sp import RawResponseMatrix, analyze_sp_table

    data = RawResponseMatrix(
        student_ids=("S1", "S2", "S3"),
        problem_ids=("P1", "P2", "P3"),
        matrix=[[1, 0, 1], [1, 1, 0], [1, 0, 0]],
    )
    result = analyze_sp_table(data)

    print(f"D* = {result.disparity_coefficient:.2f}")  # 0.75
    for student in result.students:
        print(student.id, student.total_score, student.caution_level.value)

Import a CSV export from a spreadsheet:

    from sptable.core.sp import parse_response_csv, export_to_csv

    imported = parse_response_csv(csv_text)
    print(export_to_csv(analyze_sp_table(imported.data)))
"""

# =============================================================================
# Public API exports
# =============================================================================

# Constants and classification
from ._constants import (
    CAUTION_THRESHOLDS,
    WARNING_THRESHOLD,
    CRITICAL_THRESHOLD,
    DEGENERATE_DISPARITY_FALLBACK,
    NOT_COMPUTABLE_MARKER,
    CautionLevel,
    CSVLayoutLiteral,
    CSVLayoutOption,
    get_caution_level,
)

# Value types
from ._types import (
    RawResponseMatrix,
    MatrixTotals,
    Ranking,
    CautionIndices,
    SeparationAreas,
    RankedStudent,
    RankedProblem,
    CurvePoint,
    CurveSet,
    SPTableSummary,
    SPTableResult,
)

# Errors
from .exceptions import SPTableError, SPInputError, CSVImportError

# Input validation
from .validation import validate_response_matrix

# Engine components
from .reducer import reduce_matrix
from .ranking import stable_order, rank_matrix
from .curves import build_s_curve, build_p_curve, build_curves
from .caution import (
    compute_caution_indices,
    compute_student_caution_indices,
    compute_problem_caution_indices,
)
from .disparity import (
    compute_disparity,
    compute_disparity_coefficient,
    compute_separation_areas,
)
from .analysis import analyze_sp_table, summarize

# Import / export
from .csv_import import (
    CSVImportResult,
    detect_layout,
    parse_response_csv,
    read_response_csv,
)
from .export import (
    export_to_csv,
    export_to_json,
    format_caution_index,
    result_to_dict,
)

__all__ = [
    # Constants and classification
    "CAUTION_THRESHOLDS",
    "WARNING_THRESHOLD",
    "CRITICAL_THRESHOLD",
    "DEGENERATE_DISPARITY_FALLBACK",
    "NOT_COMPUTABLE_MARKER",
    "CautionLevel",
    "CSVLayoutLiteral",
    "CSVLayoutOption",
    "get_caution_level",
    # Value types
    "RawResponseMatrix",
    "MatrixTotals",
    "Ranking",
    "CautionIndices",
    "SeparationAreas",
    "RankedStudent",
    "RankedProblem",
    "CurvePoint",
    "CurveSet",
    "SPTableSummary",
    "SPTableResult",
    # Errors
    "SPTableError",
    "SPInputError",
    "CSVImportError",
    # Input validation
    "validate_response_matrix",
    # Engine components
    "reduce_matrix",
    "stable_order",
    "rank_matrix",
    "build_s_curve",
    "build_p_curve",
    "build_curves",
    "compute_caution_indices",
    "compute_student_caution_indices",
    "compute_problem_caution_indices",
    "compute_disparity",
    "compute_disparity_coefficient",
    "compute_separation_areas",
    "analyze_sp_table",
    "summarize",
    # Import / export
    "CSVImportResult",
    "detect_layout",
    "parse_response_csv",
    "read_response_csv",
    "export_to_csv",
    "export_to_json",
    "format_caution_index",
    "result_to_dict",
]

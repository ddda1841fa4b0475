"""
S-P table analysis endpoints.

The engine is CPU-bound, so every route here is a plain ``def``: FastAPI runs
it in the worker threadpool and concurrent requests never block the event
loop. Each request analyses its own matrix; nothing is shared between calls.
"""
import logging
import uuid

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from sptable.core import settings
from sptable.core.error_responses import (
    ErrorMessages,
    raise_bad_request,
    raise_payload_too_large,
    raise_server_error,
)
from sptable.core.sp import (
    CSVImportError,
    RawResponseMatrix,
    SPTableError,
    SPTableResult,
    analyze_sp_table,
    export_to_csv,
    export_to_json,
    parse_response_csv,
    result_to_dict,
)
from sptable.schemas.sp_table import (
    SPTableAnalysisResponse,
    SPTableAnalyzeRequest,
    SPTableCSVAnalysisResponse,
    SPTableCSVRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_size(n_students: int, n_problems: int) -> None:
    """Reject matrices beyond the configured limits with 413."""
    if n_students > settings.SP_MAX_STUDENTS or n_problems > settings.SP_MAX_PROBLEMS:
        logger.warning(
            f"Rejected {n_students}x{n_problems} matrix "
            f"(limit {settings.SP_MAX_STUDENTS}x{settings.SP_MAX_PROBLEMS})"
        )
        raise_payload_too_large(
            ErrorMessages.matrix_too_large(
                n_students,
                n_problems,
                settings.SP_MAX_STUDENTS,
                settings.SP_MAX_PROBLEMS,
            )
        )


def _run_analysis(data: RawResponseMatrix) -> SPTableResult:
    """Run the engine, turning an unexpected numeric failure into a 500."""
    try:
        return analyze_sp_table(data)
    except (ValueError, ArithmeticError) as e:
        error_id = str(uuid.uuid4())
        logger.exception(
            f"S-P analysis failed for {data.n_students}x{data.n_problems} matrix "
            f"[error_id={error_id}]: {e}",
            extra={"error_id": error_id},
        )
        raise_server_error(ErrorMessages.ANALYSIS_FAILED, error_id=error_id)


def _analyze_request(request: SPTableAnalyzeRequest) -> SPTableResult:
    """Validate a JSON request body and run the analysis."""
    _check_size(len(request.student_ids), len(request.problem_ids))

    try:
        data = RawResponseMatrix(
            student_ids=tuple(request.student_ids),
            problem_ids=tuple(request.problem_ids),
            matrix=request.matrix,
        )
    except SPTableError as e:
        logger.info(f"Rejected response matrix: {e}")
        raise_bad_request(ErrorMessages.invalid_response_matrix(e.message))

    return _run_analysis(data)


@router.post("/analyze", response_model=SPTableAnalysisResponse)
def analyze(request: SPTableAnalyzeRequest) -> SPTableAnalysisResponse:
    """
    Analyse a student x problem response matrix.

    Args:
        request: Student ids, problem ids and the 0/1 matrix in original order

    Returns:
        Students and problems in S-P order with caution indices and levels,
        the ranked matrix, S and P curves, D* and summary statistics.

    Example:
        POST /v1/sp-table/analyze
        {
            "student_ids": ["s1", "s2", "s3"],
            "problem_ids": ["p1", "p2", "p3"],
            "matrix": [[1, 0, 1], [1, 1, 0], [1, 0, 0]]
        }

    Raises:
        HTTPException 400: Ids and matrix are inconsistent or a cell is not 0/1
        HTTPException 413: Matrix exceeds SP_MAX_STUDENTS x SP_MAX_PROBLEMS
    """
    result = _analyze_request(request)
    return SPTableAnalysisResponse.model_validate(result_to_dict(result))


@router.post("/analyze/csv", response_model=SPTableCSVAnalysisResponse)
def analyze_csv(request: SPTableCSVRequest) -> SPTableCSVAnalysisResponse:
    """
    Parse a CSV response table and analyse it.

    The response carries the layout the CSV was read with, which is the
    detected layout when the request asks for "auto".

    Raises:
        HTTPException 400: CSV cannot be read or violates the input contract
        HTTPException 413: Matrix exceeds SP_MAX_STUDENTS x SP_MAX_PROBLEMS
    """
    try:
        imported = parse_response_csv(request.content, layout=request.layout)
    except CSVImportError as e:
        logger.info(f"Rejected CSV upload: {e}")
        raise_bad_request(ErrorMessages.invalid_csv(e.message))
    except SPTableError as e:
        logger.info(f"Rejected response matrix from CSV: {e}")
        raise_bad_request(ErrorMessages.invalid_response_matrix(e.message))

    data = imported.data
    _check_size(data.n_students, data.n_problems)

    result = _run_analysis(data)
    return SPTableCSVAnalysisResponse.model_validate(
        {**result_to_dict(result), "layout": imported.layout}
    )


@router.post("/export", response_class=PlainTextResponse)
def export(
    request: SPTableAnalyzeRequest,
    format: str = Query(default="csv", description="Export format: csv or json"),
) -> PlainTextResponse:
    """
    Analyse a response matrix and return it as an export document.

    Args:
        request: Same body as /analyze
        format: "csv" (three-block document) or "json"

    Returns:
        The document as text/csv or application/json, with a
        Content-Disposition header naming the file.

    Raises:
        HTTPException 400: Unknown format, or the same input errors as /analyze
        HTTPException 413: Matrix exceeds SP_MAX_STUDENTS x SP_MAX_PROBLEMS
    """
    if format not in ("csv", "json"):
        raise_bad_request(ErrorMessages.UNSUPPORTED_EXPORT_FORMAT)

    result = _analyze_request(request)

    if format == "json":
        return PlainTextResponse(
            export_to_json(result),
            media_type="application/json",
            headers={"Content-Disposition": 'attachment; filename="sp-table.json"'},
        )
    return PlainTextResponse(
        export_to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="sp-table.csv"'},
    )

"""
Pydantic schemas for S-P table analysis endpoints.

Request bodies carry a student x problem response matrix, either as JSON
arrays or as CSV text. Responses mirror the JSON export document so that a
client sees the same field names whichever way it retrieves a result.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from sptable.core.sp import CautionLevel


class SPTableAnalyzeRequest(BaseModel):
    """Request schema for POST /v1/sp-table/analyze and /export."""

    student_ids: List[str] = Field(
        ..., description="Student identifiers, one per matrix row"
    )
    problem_ids: List[str] = Field(
        ..., description="Problem identifiers, one per matrix column"
    )
    matrix: List[List[int]] = Field(
        ...,
        description="Response matrix in original order; 1 = correct, 0 = incorrect",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "student_ids": ["s1", "s2", "s3"],
                "problem_ids": ["p1", "p2", "p3"],
                "matrix": [[1, 0, 1], [1, 1, 0], [1, 0, 0]],
            }
        }
    }


class SPTableCSVRequest(BaseModel):
    """Request schema for POST /v1/sp-table/analyze/csv."""

    content: str = Field(..., description="CSV document text")
    layout: Literal["auto", "standard", "transposed", "marks"] = Field(
        "auto",
        description="Table layout; 'auto' detects it from the content",
    )


class RankedStudentResponse(BaseModel):
    """A student in S-P order with its student caution index."""

    id: str = Field(..., description="Student identifier")
    original_index: int = Field(..., ge=0, description="Row index in the input")
    total_score: int = Field(..., ge=0, description="Number of correct answers")
    caution_index: Optional[float] = Field(
        None, description="Student caution index (CS); null when not computable"
    )
    caution_level: CautionLevel = Field(
        ..., description="normal, warning (>= 0.5), critical (>= 0.75) or unknown"
    )
    responses: List[int] = Field(
        ..., description="Answers in ranked problem order"
    )


class RankedProblemResponse(BaseModel):
    """A problem in S-P order with its problem caution index."""

    id: str = Field(..., description="Problem identifier")
    original_index: int = Field(..., ge=0, description="Column index in the input")
    correct_count: int = Field(..., ge=0, description="Number of correct answers")
    correct_rate: float = Field(
        ..., ge=0.0, le=1.0, description="Correct count divided by student count"
    )
    caution_index: Optional[float] = Field(
        None, description="Problem caution index (CP); null when not computable"
    )
    caution_level: CautionLevel = Field(
        ..., description="normal, warning (>= 0.5), critical (>= 0.75) or unknown"
    )


class CurvePointResponse(BaseModel):
    """A vertex of an S or P curve in ranked matrix coordinates."""

    x: float
    y: float


class SPCurvesResponse(BaseModel):
    """Polylines of the S curve and the P curve."""

    s_curve: List[CurvePointResponse] = Field(default_factory=list)
    p_curve: List[CurvePointResponse] = Field(default_factory=list)


class SPTableStatisticsResponse(BaseModel):
    """Table-level statistics."""

    disparity_coefficient: float = Field(
        ..., ge=0.0, description="Disparity coefficient D* (0 = perfect S-P fit)"
    )
    separation_area: int = Field(
        ..., ge=0, description="Cells lying between the S and P curves"
    )
    expected_separation_area: float = Field(
        ..., ge=0.0, description="Separation area expected under independence"
    )
    student_count: int = Field(..., ge=0)
    problem_count: int = Field(..., ge=0)
    average_score: float = Field(..., ge=0.0)
    average_correct_rate: float = Field(..., ge=0.0, le=1.0)
    caution_student_count: int = Field(
        ..., ge=0, description="Students with CS >= 0.5"
    )
    high_caution_student_count: int = Field(
        ..., ge=0, description="Students with CS >= 0.75"
    )
    caution_problem_count: int = Field(
        ..., ge=0, description="Problems with CP >= 0.5"
    )
    high_caution_problem_count: int = Field(
        ..., ge=0, description="Problems with CP >= 0.75"
    )


class SPTableAnalysisResponse(BaseModel):
    """Response schema for POST /v1/sp-table/analyze."""

    students: List[RankedStudentResponse]
    problems: List[RankedProblemResponse]
    matrix: List[List[int]] = Field(
        ..., description="Response matrix in ranked order"
    )
    curves: SPCurvesResponse
    statistics: SPTableStatisticsResponse


class SPTableCSVAnalysisResponse(SPTableAnalysisResponse):
    """Response schema for POST /v1/sp-table/analyze/csv."""

    layout: Literal["standard", "transposed", "marks"] = Field(
        ..., description="Layout the CSV was read with"
    )

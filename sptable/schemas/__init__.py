"""
Pydantic schemas for request/response validation.
"""
from .sp_table import (
    SPTableAnalyzeRequest,
    SPTableCSVRequest,
    RankedStudentResponse,
    RankedProblemResponse,
    CurvePointResponse,
    SPCurvesResponse,
    SPTableStatisticsResponse,
    SPTableAnalysisResponse,
    SPTableCSVAnalysisResponse,
)

__all__ = [
    "SPTableAnalyzeRequest",
    "SPTableCSVRequest",
    "RankedStudentResponse",
    "RankedProblemResponse",
    "CurvePointResponse",
    "SPCurvesResponse",
    "SPTableStatisticsResponse",
    "SPTableAnalysisResponse",
    "SPTableCSVAnalysisResponse",
]

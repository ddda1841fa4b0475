"""
Shared constants for S-P table analysis.

This module contains the caution index thresholds, the caution level
classification, and the export markers used across all S-P submodules.
"""

import enum
from typing import Literal, Optional


# =============================================================================
# CAUTION INDEX THRESHOLDS
# =============================================================================
# Conventional S-P table thresholds for the caution index (CS / CP).
# Both comparisons are inclusive (>=). A null caution index never meets
# either threshold.

CAUTION_THRESHOLDS = {
    "warning": 0.5,  # CS/CP >= 0.50: pattern needs attention
    "critical": 0.75,  # CS/CP >= 0.75: pattern is highly irregular
}

WARNING_THRESHOLD = CAUTION_THRESHOLDS["warning"]
CRITICAL_THRESHOLD = CAUTION_THRESHOLDS["critical"]


class CautionLevel(str, enum.Enum):
    """Classification of a caution index against the fixed thresholds."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"  # index not computable (zero denominator)


def get_caution_level(caution_index: Optional[float]) -> CautionLevel:
    """
    Classify a caution index.

    Args:
        caution_index: CS or CP value, or None when it is not computable.

    Returns:
        CautionLevel.UNKNOWN for None, otherwise the highest threshold met.
    """
    if caution_index is None:
        return CautionLevel.UNKNOWN
    if caution_index >= CRITICAL_THRESHOLD:
        return CautionLevel.CRITICAL
    if caution_index >= WARNING_THRESHOLD:
        return CautionLevel.WARNING
    return CautionLevel.NORMAL


# =============================================================================
# DISPARITY COEFFICIENT
# =============================================================================

# D* reported when the expected separation area is zero but the observed
# area is not. Kept at 1.0 to match the established S-P table tooling.
DEGENERATE_DISPARITY_FALLBACK = 1.0


# =============================================================================
# CSV IMPORT
# =============================================================================

# Layouts understood by the CSV importer.
CSVLayoutLiteral = Literal["standard", "transposed", "marks"]
CSVLayoutOption = Literal["auto", "standard", "transposed", "marks"]

# Auto-detection switches to the transposed layout when the header holds more
# than this many id columns while there are fewer data rows than the limit
# below (a handful of problems laid out as rows, a whole year group as columns).
TRANSPOSED_MIN_HEADER_IDS = 100
TRANSPOSED_MAX_DATA_ROWS = 30

# Circle / cross notation for correct / incorrect answers.
CORRECT_MARKS = frozenset({"○", "◯", "O", "o"})
INCORRECT_MARKS = frozenset({"×", "✕", "X", "x"})

# Characters whose presence anywhere in the file selects the marks layout.
MARK_DETECTION_CHARS = ("○", "◯", "×", "✕")


# =============================================================================
# EXPORT
# =============================================================================

# Written in place of a caution index that is not computable.
NOT_COMPUTABLE_MARKER = "N/A"

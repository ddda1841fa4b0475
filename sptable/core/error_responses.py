"""
Standardized error response messages and builders.

This module provides consistent error messages and HTTPException builders
for the API, keeping user-facing messages separate from log messages.

Error Message Format Guidelines:
- Use sentence case (capitalize first letter only)
- End with a period for complete sentences
- Use "Please try again later." for transient server errors

Usage:
    from sptable.core.error_responses import ErrorMessages, raise_bad_request

    raise_bad_request(ErrorMessages.invalid_response_matrix(str(exc)))
"""

from typing import NoReturn, Optional

from fastapi import HTTPException, status


class ErrorMessages:
    """Centralized error message constants and templates.

    Naming Convention:
    - Constants: SCREAMING_SNAKE_CASE for static messages
    - Methods: snake_case for templates that accept parameters
    """

    # ==========================================================================
    # Bad Request Errors (400)
    # ==========================================================================
    UNSUPPORTED_EXPORT_FORMAT = "Export format must be 'csv' or 'json'."

    # ==========================================================================
    # Server Errors (500)
    # ==========================================================================
    ANALYSIS_FAILED = "Failed to analyse the S-P table. Please try again later."

    # ==========================================================================
    # Template Methods for Dynamic Messages
    # ==========================================================================
    @staticmethod
    def invalid_response_matrix(reason: str) -> str:
        """Message for a response matrix that violates the input contract."""
        return f"Invalid response matrix: {reason}"

    @staticmethod
    def invalid_csv(reason: str) -> str:
        """Message for CSV text that cannot be read as a response table."""
        return f"Invalid CSV: {reason}"

    @staticmethod
    def matrix_too_large(
        students: int, problems: int, max_students: int, max_problems: int
    ) -> str:
        """Message for a matrix beyond the configured size limits."""
        return (
            f"Response matrix of {students} students x {problems} problems exceeds "
            f"the limit of {max_students} students x {max_problems} problems."
        )


# ==============================================================================
# HTTPException Builder Functions
# ==============================================================================


def raise_bad_request(detail: str) -> NoReturn:
    """Raise a 400 Bad Request exception.

    Use for client errors where the request is malformed or invalid.

    Args:
        detail: User-facing error message

    Raises:
        HTTPException: 400 Bad Request
    """
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def raise_payload_too_large(detail: str) -> NoReturn:
    """Raise a 413 Payload Too Large exception.

    Args:
        detail: User-facing error message

    Raises:
        HTTPException: 413 Request Entity Too Large
    """
    raise HTTPException(
        status_code=413,  # Content Too Large
        detail=detail,
    )


def raise_server_error(
    detail: str,
    error_id: Optional[str] = None,
) -> NoReturn:
    """Raise a 500 Internal Server Error exception.

    Use for unexpected server errors. Always use user-friendly messages;
    log technical details separately.

    Args:
        detail: User-facing error message (should be generic and friendly)
        error_id: Optional error tracking ID to include in response

    Raises:
        HTTPException: 500 Internal Server Error
    """
    if error_id:
        detail = f"{detail} (Error ID: {error_id})"

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )

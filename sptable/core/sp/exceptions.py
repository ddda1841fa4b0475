"""
Exceptions raised by the S-P table package.

The analysis itself never fails on well-formed input; these exceptions
report malformed input at the package boundary (matrix construction and
CSV import).
"""

from typing import Any, Dict, Optional


class SPTableError(Exception):
    """Base exception for S-P table errors.

    Attributes:
        message: Human-readable error description
        original_error: The underlying exception that caused this error
        context: Structured details about the offending input
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize with message, optional cause, and structured context."""
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        msg = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg = f"{msg} (context: {ctx_str})"
        if self.original_error:
            msg = f"{msg} - caused by: {str(self.original_error)}"
        return msg


class SPInputError(SPTableError):
    """Raised when a response matrix violates the input contract."""


class CSVImportError(SPTableError):
    """Raised when CSV text cannot be turned into a response matrix."""

"""
Request body size limiting middleware.
"""
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware to enforce maximum request body size limits.

    Rejects oversized uploads before the JSON body is parsed into a matrix.
    """

    def __init__(self, app: ASGIApp, max_body_size: int = 1024 * 1024):
        """
        Initialize request size limit middleware.

        Args:
            app: ASGI application
            max_body_size: Maximum request body size in bytes (default: 1MB)
        """
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Check request body size before processing.

        Args:
            request: HTTP request
            call_next: Next middleware in chain

        Returns:
            HTTP response or error if body too large
        """
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                return Response(
                    content='{"detail": "Request body too large"}',
                    status_code=413,
                    media_type="application/json",
                )

        response = await call_next(request)
        return response

"""
Main FastAPI application.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sptable.api.v1.api import api_router
from sptable.core.config import settings
from sptable.core.logging_config import setup_logging
from sptable.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware

# Initialize logging configuration at startup
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan event handler.

    The service keeps no state between requests, so startup and shutdown
    only log the configured limits.
    """
    logger.info(
        f"{settings.APP_NAME} {settings.APP_VERSION} starting (env={settings.ENV}, "
        f"max matrix {settings.SP_MAX_STUDENTS}x{settings.SP_MAX_PROBLEMS})"
    )
    yield
    logger.info("Application shutting down")


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "health",
        "description": "Health check endpoints for monitoring application status",
    },
    {
        "name": "sp-table",
        "description": "S-P table analysis of student x problem response matrices",
    },
]


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        description=(
            "**S-P Table API** - Student-Problem table analysis for test results.\n\n"
            "This API provides:\n"
            "* Ranking of students and problems into S-P order\n"
            "* Student (CS) and problem (CP) caution indices\n"
            "* S and P curves and the disparity coefficient D*\n"
            "* CSV import and CSV/JSON export of results"
        ),
        license_info={
            "name": "MIT",
        },
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        openapi_tags=tags_metadata,
    )

    # Configure CORS
    # Explicitly list allowed methods and headers instead of wildcards
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Configure Request Logging
    app.add_middleware(RequestLoggingMiddleware)

    # Configure Request Size Limits
    app.add_middleware(
        RequestSizeLimitMiddleware, max_body_size=settings.MAX_REQUEST_BODY_BYTES
    )

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handle HTTP exceptions raised by endpoints.
        """
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """
        Handle request validation errors.
        """
        # Convert errors to serializable format
        errors = [
            {
                "loc": list(error.get("loc", [])),
                "msg": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
            for error in exc.errors()
        ]

        logger.warning(
            f"Request validation failed: {len(errors)} error(s)",
            extra={"method": request.method, "path": str(request.url.path)},
        )

        return JSONResponse(
            status_code=422,  # Unprocessable Content
            content={"detail": jsonable_encoder(errors)},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """
        Handle unexpected exceptions.

        Generates a unique error_id (UUID) for each exception so a client
        report can be matched with the logged traceback.
        """
        error_id = str(uuid.uuid4())

        logger.exception(
            f"Unhandled exception [error_id={error_id}]: {exc}",
            extra={"error_id": error_id},
        )

        # Return error response with tracking ID (don't leak internal details)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "error_id": error_id,
            },
        )

    return app


app = create_application()


@app.get("/")
async def root():
    """
    Root endpoint.
    """
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }

"""
Application configuration settings.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Self


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "S-P Table API"
    APP_VERSION: str = "0.1.0"
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API
    API_V1_PREFIX: str = "/v1"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Request limits
    # Bodies above this size are rejected with 413 before parsing
    MAX_REQUEST_BODY_BYTES: int = 5 * 1024 * 1024  # 5MB

    # S-P table limits
    # A year group (a few hundred students) over a long exam fits comfortably;
    # larger matrices are rejected with 413 to keep request latency bounded.
    SP_MAX_STUDENTS: int = 2000
    SP_MAX_PROBLEMS: int = 500

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env not defined in Settings
    )

    @model_validator(mode="after")
    def validate_limits(self) -> Self:
        """Validate that size limits are positive."""
        limits = {
            "MAX_REQUEST_BODY_BYTES": self.MAX_REQUEST_BODY_BYTES,
            "SP_MAX_STUDENTS": self.SP_MAX_STUDENTS,
            "SP_MAX_PROBLEMS": self.SP_MAX_PROBLEMS,
        }
        non_positive = [name for name, value in limits.items() if value <= 0]
        if non_positive:
            raise ValueError(f"Limits must be positive, got non-positive: {non_positive}")
        return self


settings = Settings()

"""Configuration management for the ArbanTv schema setup.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once per run
and is immutable afterwards.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Setup configuration settings.

    Settings are loaded from environment variables and .env files.
    The Appwrite connection values are required; collection IDs are not,
    a missing collection ID only skips that collection.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "ArbanTv"

    # Appwrite Connection
    appwrite_endpoint: str = "https://cloud.appwrite.io/v1"
    appwrite_project_id: str = Field(description="Appwrite project the schema belongs to")
    appwrite_api_key: str = Field(description="Server API key with databases.write scope")
    appwrite_database_id: str = Field(description="Database holding the collections")
    appwrite_timeout_seconds: float = 30.0

    # Collection IDs
    creators_collection_id: str | None = None
    videos_collection_id: str | None = None
    comments_collection_id: str | None = None
    tags_collection_id: str | None = None

    # Pacing Settings
    setup_field_delay_seconds: float = 0.1
    setup_index_wait_seconds: float = 3.0
    setup_index_delay_seconds: float = 0.2
    setup_wait_for_fields: bool = True
    setup_field_ready_attempts: int = 10

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("appwrite_endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the endpoint so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("appwrite_project_id", "appwrite_api_key", "appwrite_database_id")
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        """Reject empty connection values (``APPWRITE_API_KEY=``)."""
        v = v.strip()
        if not v:
            raise ValueError("Value must not be empty")
        return v

    @field_validator(
        "creators_collection_id",
        "videos_collection_id",
        "comments_collection_id",
        "tags_collection_id",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty collection IDs (``FOO_COLLECTION_ID=``) as missing."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    @field_validator(
        "setup_field_delay_seconds",
        "setup_index_wait_seconds",
        "setup_index_delay_seconds",
    )
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Delays must not be negative")
        return v

    @field_validator("setup_field_ready_attempts")
    @classmethod
    def validate_ready_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("setup_field_ready_attempts must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance.

    Raises:
        pydantic.ValidationError: If a required variable is missing or invalid.
    """
    return Settings()

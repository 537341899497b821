"""
Client configuration.

Values come from CLOUDDRIVE_* environment variables (or a .env file) and
can be overridden by keyword arguments.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clouddrive.store import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_PAGE_SIZE


class DriveSettings(BaseSettings):
    """Settings for DriveApiClient and DriveManager."""

    model_config = SettingsConfigDict(
        env_prefix="CLOUDDRIVE_",
        env_file=".env",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:5000/api",
        description="Root URL of the files/folders service",
    )
    owner_id: Optional[str] = Field(
        default=None,
        description="Account id sent as X-Owner-Id",
    )
    timeout_seconds: Optional[float] = Field(
        default=None,
        description="HTTP timeout; None waits indefinitely",
    )
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Default listing page size")
    view_page_size: int = Field(default=100, ge=1, description="Page size used by view loads")
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        ge=0,
        description="Client-side upload size limit",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_url must be a non-empty URL")
        return v.rstrip("/")


@lru_cache()
def get_settings() -> DriveSettings:
    """Get cached settings instance."""
    return DriveSettings()

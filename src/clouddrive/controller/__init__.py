"""HTTP client for the files/folders service."""

from __future__ import annotations

from .api_client import OWNER_HEADER, DriveApiClient, ProgressCallback, UploadSource

__all__ = ["DriveApiClient", "UploadSource", "ProgressCallback", "OWNER_HEADER"]

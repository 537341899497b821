"""In-memory hierarchy store exports for clouddrive."""

from __future__ import annotations

from .drive_store import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_PAGE_SIZE, DriveStore
from .snapshot import DriveIndex

__all__ = ["DriveStore", "DriveIndex", "DEFAULT_MAX_UPLOAD_BYTES", "DEFAULT_PAGE_SIZE"]

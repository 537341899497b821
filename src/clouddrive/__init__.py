"""clouddrive public API."""

from __future__ import annotations

from clouddrive.backend import LocalDriveApp
from clouddrive.config import DriveSettings, get_settings
from clouddrive.controller import DriveApiClient, UploadSource
from clouddrive.errors import (
    AuthError,
    CloudDriveError,
    ConflictError,
    CyclicMoveError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    TransportError,
    ValidationError,
    map_http_error,
)
from clouddrive.manager import DriveManager
from clouddrive.models import (
    BatchResult,
    BreadcrumbEntry,
    File,
    Folder,
    FolderStats,
    Item,
    ItemKind,
    ItemOutcome,
    Listing,
    Page,
    Pagination,
    ViewKind,
)
from clouddrive.store import DriveStore
from clouddrive.views import (
    DRIVE_VIEW,
    STARRED_VIEW,
    TRASH_VIEW,
    ViewCapabilities,
    ViewController,
    ViewMode,
    ViewState,
)

__all__ = [
    # High-level
    "DriveManager",
    "DriveApiClient",
    "UploadSource",
    "DriveSettings",
    "get_settings",
    # Views
    "ViewController",
    "ViewState",
    "ViewMode",
    "ViewCapabilities",
    "DRIVE_VIEW",
    "STARRED_VIEW",
    "TRASH_VIEW",
    # Hierarchy
    "DriveStore",
    "LocalDriveApp",
    # Models
    "ItemKind",
    "ViewKind",
    "Folder",
    "File",
    "Item",
    "BreadcrumbEntry",
    "FolderStats",
    "Pagination",
    "Page",
    "Listing",
    "ItemOutcome",
    "BatchResult",
    # Errors
    "CloudDriveError",
    "ValidationError",
    "NotFoundError",
    "CyclicMoveError",
    "ConflictError",
    "TransportError",
    "AuthError",
    "InvalidArgumentError",
    "InvalidStateError",
    "HttpErrorInfo",
    "map_http_error",
]

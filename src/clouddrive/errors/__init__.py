"""Public error exports for clouddrive."""

from __future__ import annotations

from .exceptions import (
    CYCLIC_MOVE_REASON,
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
    error_reason,
    error_status,
    map_http_error,
)

__all__ = [
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
    "CYCLIC_MOVE_REASON",
    "map_http_error",
    "error_reason",
    "error_status",
]

"""Exception hierarchy and HTTP error mapping for clouddrive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class CloudDriveError(Exception):
    """
    Base exception for clouddrive.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ValidationError(CloudDriveError):
    """Raised for a bad name, size, characters or pagination argument (HTTP 400)."""


class NotFoundError(CloudDriveError):
    """Raised for a stale id or an already-deleted target (HTTP 404)."""


class CyclicMoveError(CloudDriveError):
    """Raised when a move/copy would make a folder its own ancestor."""


class ConflictError(CloudDriveError):
    """Raised when an entity is in the wrong lifecycle state (HTTP 409)."""


class TransportError(CloudDriveError):
    """Raised for network failures, 5xx and unclassified responses."""


class AuthError(TransportError):
    """Raised when the service rejects the caller (HTTP 401/403)."""


class InvalidArgumentError(CloudDriveError):
    """Raised when the library is called with an unsupported argument."""


class InvalidStateError(CloudDriveError):
    """Raised when the library is used in an invalid state (e.g., load not called)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to clouddrive exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


CYCLIC_MOVE_REASON: str = "cyclicMove"


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> CloudDriveError:
    """
    Map an HTTP error to a clouddrive exception.

    Policy:
        - 400/422 -> ValidationError
        - 401/403 -> AuthError
        - 404 -> NotFoundError
        - 409 -> CyclicMoveError if reason is "cyclicMove", else ConflictError
        - otherwise -> TransportError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code in (400, 422):
        return ValidationError(message, details=details, cause=cause)
    if info.status_code in (401, 403):
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 409:
        if info.reason == CYCLIC_MOVE_REASON:
            return CyclicMoveError(message, details=details, cause=cause)
        return ConflictError(message, details=details, cause=cause)

    return TransportError(message, details=details, cause=cause)


def error_reason(exc: CloudDriveError) -> str:
    """Return the wire `reason` string for an exception (inverse of map_http_error)."""
    if isinstance(exc, ValidationError):
        return "validation"
    if isinstance(exc, NotFoundError):
        return "notFound"
    if isinstance(exc, CyclicMoveError):
        return CYCLIC_MOVE_REASON
    if isinstance(exc, ConflictError):
        return "conflict"
    if isinstance(exc, AuthError):
        return "unauthorized"
    return "internal"


def error_status(exc: CloudDriveError) -> int:
    """Return the HTTP status code a service answers with for an exception."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (CyclicMoveError, ConflictError)):
        return 409
    if isinstance(exc, AuthError):
        return 401
    return 500

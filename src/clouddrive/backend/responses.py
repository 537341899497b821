"""Envelope builders: {"success": true, "data": ...} or the error form."""

from typing import Any

from fastapi.responses import JSONResponse

from clouddrive.errors import CloudDriveError, error_reason, error_status

from .schemas import ErrorEnvelope, ErrorInfo, SuccessEnvelope


def ok(data: dict[str, Any], *, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=SuccessEnvelope(data=data).model_dump(mode="json"),
    )


def error_response(exc: CloudDriveError) -> JSONResponse:
    return failure(error_status(exc), str(exc), error_reason(exc), exc.details)


def failure(
    status_code: int,
    message: str,
    reason: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(
        message=message,
        error=ErrorInfo(reason=reason, details=_jsonable(details or {})),
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))


def _jsonable(details: dict[str, Any]) -> dict[str, Any]:
    return {
        k: v if isinstance(v, (str, int, float, bool, type(None))) else str(v)
        for k, v in details.items()
    }

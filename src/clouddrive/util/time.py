from __future__ import annotations

from datetime import datetime, timezone

_UTC_SUFFIX = "Z"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def normalize_dt(dt: datetime) -> datetime:
    """Return dt unchanged if tz-aware; naive datetimes are rejected."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def parse_rfc3339(value: str) -> datetime:
    """
    Parse a service timestamp into a tz-aware UTC datetime.

    The service emits JavaScript ISO strings ("2025-01-01T12:34:56.123Z");
    explicit offsets such as "+09:00" are accepted as well.

    Raises:
        ValueError: empty or malformed value, or a value without offset.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("timestamp must be a non-empty string")

    text = value.strip()
    if text.endswith(_UTC_SUFFIX):
        # fromisoformat rejects 'Z' before 3.11.
        text = text[: -len(_UTC_SUFFIX)] + "+00:00"
    return normalize_dt(datetime.fromisoformat(text)).astimezone(timezone.utc)


def parse_optional_rfc3339(value: object) -> datetime | None:
    """Lenient variant for payload fields: absent, null or malformed gives None."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def to_rfc3339(dt: datetime) -> str:
    utc = normalize_dt(dt).astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="microseconds") + _UTC_SUFFIX

from .ids import new_item_id, new_uuid
from .mime import DEFAULT_MIME, guess_mime_type
from .names import (
    FORBIDDEN_CHARS,
    MAX_NAME_LENGTH,
    default_copy_name,
    validate_name,
)
from .time import normalize_dt, now_utc, parse_optional_rfc3339, parse_rfc3339, to_rfc3339

__all__ = [
    "new_uuid",
    "new_item_id",
    "DEFAULT_MIME",
    "guess_mime_type",
    "FORBIDDEN_CHARS",
    "MAX_NAME_LENGTH",
    "validate_name",
    "default_copy_name",
    "now_utc",
    "parse_rfc3339",
    "parse_optional_rfc3339",
    "to_rfc3339",
    "normalize_dt",
]

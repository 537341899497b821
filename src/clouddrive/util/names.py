"""Name rules shared by folders and files."""

from __future__ import annotations

import re

from clouddrive.errors import ValidationError

MAX_NAME_LENGTH: int = 255
FORBIDDEN_CHARS: str = '<>:"/\\|?*'

_FORBIDDEN_RE = re.compile(r'[<>:"/\\|?*]')
_RESERVED_NAMES = frozenset({".", ".."})


def validate_name(name: object, what: str = "Name") -> str:
    """
    Validate an item name and return it stripped of surrounding whitespace.

    Raises:
        ValidationError: if the name is empty, longer than 255 characters or
            contains one of ``< > : " / \\ | ? *``, or is "." or "..".
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{what} is required", details={"field": "name"})

    stripped = name.strip()
    if len(stripped) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"{what} must be less than {MAX_NAME_LENGTH} characters",
            details={"field": "name", "length": len(stripped)},
        )
    if _FORBIDDEN_RE.search(stripped):
        raise ValidationError(
            f"{what} contains invalid characters",
            details={"field": "name", "forbidden": FORBIDDEN_CHARS},
        )
    if stripped in _RESERVED_NAMES:
        raise ValidationError(
            f"{what} cannot be '.' or '..'",
            details={"field": "name"},
        )
    return stripped


def default_copy_name(name: str) -> str:
    """Name proposed for a copy when the caller does not pick one."""
    return f"Copy of {name}"

from __future__ import annotations

import mimetypes

DEFAULT_MIME: str = "application/octet-stream"


def guess_mime_type(name: str) -> str:
    """Guess a MIME type from a file name, falling back to octet-stream."""
    mime_type, _ = mimetypes.guess_type(name, strict=False)
    return mime_type or DEFAULT_MIME

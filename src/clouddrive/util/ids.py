from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_item_id() -> str:
    """Generate a new id for a Folder or File record."""
    return uuid.uuid4().hex

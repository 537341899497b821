"""URL paths and parameter names of the files/folders service."""

from __future__ import annotations

from typing import Optional

from clouddrive.errors import InvalidArgumentError
from clouddrive.models import ItemKind

FILES_PATH: str = "/files"
FOLDERS_PATH: str = "/folders"
UPLOAD_PATH: str = "/files/upload"
BREADCRUMB_PATH: str = "/folders/breadcrumb"
OWNER_HEADER: str = "X-Owner-Id"


def collection_path(kind: ItemKind) -> str:
    if kind is ItemKind.FOLDER:
        return FOLDERS_PATH
    if kind is ItemKind.FILE:
        return FILES_PATH
    raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})


def item_path(kind: ItemKind, item_id: str, action: Optional[str] = None) -> str:
    if not item_id:
        raise InvalidArgumentError("item_id must be a non-empty string")
    path = f"{collection_path(kind)}/{item_id}"
    return f"{path}/{action}" if action else path


def parent_param(kind: ItemKind) -> str:
    """Query/body key naming an item's container: parentId for folders, folderId for files."""
    if kind is ItemKind.FOLDER:
        return "parentId"
    if kind is ItemKind.FILE:
        return "folderId"
    raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})


def list_key(kind: ItemKind) -> str:
    """Envelope key holding a listing: "folders" or "files"."""
    if kind is ItemKind.FOLDER:
        return "folders"
    if kind is ItemKind.FILE:
        return "files"
    raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})

"""JSON (camelCase) <-> entity conversion shared by the client and the local backend."""

from __future__ import annotations

from typing import Any, Optional

from clouddrive.util.time import parse_optional_rfc3339, to_rfc3339

from .entities import (
    BreadcrumbEntry,
    File,
    Folder,
    FolderStats,
    Item,
    ItemKind,
    Pagination,
)


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _ts(value: Any) -> Optional[str]:
    return to_rfc3339(value) if value is not None else None


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return default


def folder_to_dict(folder: Folder) -> dict[str, Any]:
    return {
        "id": folder.id,
        "name": folder.name,
        "parentId": folder.parent_id,
        "ownerId": folder.owner_id,
        "isStarred": folder.is_starred,
        "isDeleted": folder.is_deleted,
        "deletedAt": _ts(folder.deleted_at),
        "createdAt": _ts(folder.created_at),
        "updatedAt": _ts(folder.updated_at),
        "path": folder.path,
    }


def file_to_dict(file: File) -> dict[str, Any]:
    return {
        "id": file.id,
        "name": file.name,
        "folderId": file.folder_id,
        "ownerId": file.owner_id,
        "size": file.size,
        "mimeType": file.mime_type,
        "isStarred": file.is_starred,
        "isDeleted": file.is_deleted,
        "deletedAt": _ts(file.deleted_at),
        "createdAt": _ts(file.created_at),
        "updatedAt": _ts(file.updated_at),
    }


def folder_from_dict(data: dict[str, Any]) -> Folder:
    deleted_at = parse_optional_rfc3339(data.get("deletedAt"))
    # Keep the deleted_at/is_deleted pairing even if the payload is sloppy.
    is_deleted = bool(data.get("isDeleted", False)) and deleted_at is not None
    return Folder(
        id=str(data.get("id", "")),
        name=data.get("name") if isinstance(data.get("name"), str) else "",
        owner_id=str(data.get("ownerId", "")),
        parent_id=_opt_str(data.get("parentId")),
        is_starred=bool(data.get("isStarred", False)),
        is_deleted=is_deleted,
        deleted_at=deleted_at if is_deleted else None,
        created_at=parse_optional_rfc3339(data.get("createdAt")),
        updated_at=parse_optional_rfc3339(data.get("updatedAt")),
        path=data.get("path") if isinstance(data.get("path"), str) else "",
    )


def file_from_dict(data: dict[str, Any]) -> File:
    deleted_at = parse_optional_rfc3339(data.get("deletedAt"))
    is_deleted = bool(data.get("isDeleted", False)) and deleted_at is not None
    mime_type = data.get("mimeType")
    return File(
        id=str(data.get("id", "")),
        name=data.get("name") if isinstance(data.get("name"), str) else "",
        owner_id=str(data.get("ownerId", "")),
        folder_id=_opt_str(data.get("folderId")),
        size=max(0, _int(data.get("size"))),
        mime_type=mime_type if isinstance(mime_type, str) and mime_type else "application/octet-stream",
        is_starred=bool(data.get("isStarred", False)),
        is_deleted=is_deleted,
        deleted_at=deleted_at if is_deleted else None,
        created_at=parse_optional_rfc3339(data.get("createdAt")),
        updated_at=parse_optional_rfc3339(data.get("updatedAt")),
    )


def item_to_dict(item: Item) -> dict[str, Any]:
    if isinstance(item, Folder):
        return folder_to_dict(item)
    return file_to_dict(item)


def item_from_dict(kind: ItemKind, data: dict[str, Any]) -> Item:
    if kind is ItemKind.FOLDER:
        return folder_from_dict(data)
    return file_from_dict(data)


def breadcrumb_to_dict(entry: BreadcrumbEntry) -> dict[str, Any]:
    return {"id": entry.id, "name": entry.name, "path": entry.path}


def breadcrumb_from_dict(data: dict[str, Any]) -> BreadcrumbEntry:
    return BreadcrumbEntry(
        id=_opt_str(data.get("id")),
        name=str(data.get("name", "")),
        path=str(data.get("path", "")),
    )


def stats_to_dict(stats: FolderStats) -> dict[str, int]:
    return {
        "totalItems": stats.total_items,
        "totalFolders": stats.total_folders,
        "totalFiles": stats.total_files,
        "totalSize": stats.total_size,
    }


def stats_from_dict(data: dict[str, Any]) -> FolderStats:
    return FolderStats(
        total_items=_int(data.get("totalItems")),
        total_folders=_int(data.get("totalFolders")),
        total_files=_int(data.get("totalFiles")),
        total_size=_int(data.get("totalSize")),
    )


def pagination_to_dict(pagination: Pagination) -> dict[str, int]:
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "total": pagination.total,
        "pages": pagination.pages,
    }


def pagination_from_dict(data: Any, *, item_count: int) -> Pagination:
    """Read pagination info; services that omit it are treated as one full page."""
    if not isinstance(data, dict):
        return Pagination(page=1, limit=item_count, total=item_count, pages=1)
    return Pagination(
        page=_int(data.get("page"), 1),
        limit=_int(data.get("limit"), item_count),
        total=_int(data.get("total"), item_count),
        pages=_int(data.get("pages"), 1),
    )

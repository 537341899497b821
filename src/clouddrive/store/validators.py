"""Strict validation helpers for DriveStore."""

from __future__ import annotations

from typing import Optional

from clouddrive.errors import CyclicMoveError, NotFoundError, ValidationError
from clouddrive.models import File, Folder

from .snapshot import DriveIndex


def validate_owned_folder(index: DriveIndex, owner_id: str, folder_id: str, what: str) -> Folder:
    folder = index.folders_by_id.get(folder_id)
    # Someone else's folder is reported exactly like a missing one.
    if folder is None or folder.owner_id != owner_id:
        raise NotFoundError(f"{what} not found: {folder_id}", details={"id": folder_id})
    return folder


def validate_owned_file(index: DriveIndex, owner_id: str, file_id: str, what: str) -> File:
    file = index.files_by_id.get(file_id)
    if file is None or file.owner_id != owner_id:
        raise NotFoundError(f"{what} not found: {file_id}", details={"id": file_id})
    return file


def find_deleted_ancestor(index: DriveIndex, folder_id: Optional[str]) -> Optional[Folder]:
    """Return the nearest folder on the chain (folder itself included) that is deleted."""
    for folder in index.ancestors(folder_id):
        if folder.is_deleted:
            return folder
    return None


def validate_active_container(
    index: DriveIndex,
    owner_id: str,
    folder_id: Optional[str],
    what: str,
) -> Optional[Folder]:
    """
    Resolve a target container. None is the owner's root and always valid.

    Raises:
        NotFoundError: if the folder is missing, foreign or (logically) deleted.
    """
    if folder_id is None:
        return None
    folder = validate_owned_folder(index, owner_id, folder_id, what)
    if find_deleted_ancestor(index, folder_id) is not None:
        raise NotFoundError(f"{what} is in trash: {folder_id}", details={"id": folder_id})
    return folder


def validate_move_no_cycle(
    index: DriveIndex,
    target_folder_id: str,
    new_parent_id: Optional[str],
    action: str = "MOVE",
) -> None:
    """
    Reject cycles: if target appears on the ancestor chain of new_parent.

    Walk from new_parent towards the root; if target is hit, the move (or
    copy) would make the folder its own ancestor.
    """
    if new_parent_id is None:
        return
    if target_folder_id == new_parent_id:
        raise CyclicMoveError(
            f"{action} would create a cycle (target == new parent)",
            details={"id": target_folder_id, "target_parent_id": new_parent_id},
        )
    for ancestor in index.ancestors(new_parent_id):
        if ancestor.id == target_folder_id:
            raise CyclicMoveError(
                f"{action} would create a cycle",
                details={"id": target_folder_id, "target_parent_id": new_parent_id},
            )


def validate_paging(page: int, limit: int) -> None:
    if not isinstance(page, int) or page < 1:
        raise ValidationError("page must be an integer >= 1", details={"page": page})
    if not isinstance(limit, int) or limit < 1:
        raise ValidationError("limit must be an integer >= 1", details={"limit": limit})


def validate_upload_size(size: int, max_bytes: int) -> None:
    if size < 0:
        raise ValidationError("File size must be >= 0", details={"size": size})
    if size > max_bytes:
        raise ValidationError(
            f"File is too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
            details={"size": size, "max_bytes": max_bytes},
        )

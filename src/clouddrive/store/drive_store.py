"""DriveStore: in-memory folder/file hierarchy with soft delete (no external I/O)."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence, TypeVar, cast

from clouddrive.errors import ConflictError, InvalidArgumentError, NotFoundError
from clouddrive.models import (
    ROOT_PATH,
    BreadcrumbEntry,
    DownloadTicket,
    File,
    Folder,
    FolderDetails,
    FolderStats,
    Item,
    ItemKind,
    Page,
    Pagination,
)
from clouddrive.util.ids import new_item_id, new_uuid
from clouddrive.util.mime import guess_mime_type
from clouddrive.util.names import validate_name
from clouddrive.util.time import now_utc

from .snapshot import DriveIndex
from .validators import (
    find_deleted_ancestor,
    validate_active_container,
    validate_move_no_cycle,
    validate_owned_file,
    validate_owned_folder,
    validate_paging,
    validate_upload_size,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES: int = 100 * 1024 * 1024
DEFAULT_PAGE_SIZE: int = 20

T = TypeVar("T")


class DriveStore:
    """
    Owner-scoped folder/file hierarchy implementing the service contract.

    Policies:
        - Cascade on soft delete is resolved at read time: every entity below
          a deleted folder is reported with is_deleted=True and the deleted
          ancestor's deleted_at.
        - Restore clears the entity's own flag; if it still sits below a
          deleted folder it is moved to the root.
        - Trash lists only the top-most deleted entity of each deleted subtree.
        - Deleted entities are read-only: rename/move/copy/star/delete answer
          NotFoundError, restore/permanent_delete are the only transitions.
    """

    def __init__(
        self,
        *,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        clock: Callable[[], datetime] = now_utc,
        download_base_url: str = "memory://downloads",
    ) -> None:
        self._index = DriveIndex()
        self._max_upload_bytes = max_upload_bytes
        self._clock = clock
        self._download_base_url = download_base_url.rstrip("/")
        self._download_tokens: dict[str, str] = {}

    # ----------------------------
    # Read APIs
    # ----------------------------
    def get(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        """Return an entity in any state (deleted entities stay readable)."""
        if kind is ItemKind.FOLDER:
            return self._folder_view(validate_owned_folder(self._index, owner_id, item_id, "Folder"))
        if kind is ItemKind.FILE:
            return self._file_view(validate_owned_file(self._index, owner_id, item_id, "File"))
        raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})

    def get_folder_details(self, owner_id: str, folder_id: str) -> FolderDetails:
        folder = self._require_active_folder(owner_id, folder_id)
        folders = self._active_children_folders(owner_id, folder_id)
        files = self._active_children_files(owner_id, folder_id)
        return FolderDetails(
            folder=self._folder_view(folder),
            folders=[self._folder_view(f) for f in _sort_by_name(folders)],
            files=[self._file_view(f) for f in _sort_by_name(files)],
        )

    def list_folders(
        self,
        owner_id: str,
        parent_id: Optional[str] = None,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> Page[Folder]:
        validate_paging(page, limit)
        validate_active_container(self._index, owner_id, parent_id, "Parent folder")

        folders = _filter_search(self._active_children_folders(owner_id, parent_id), search)
        return _paginate([self._folder_view(f) for f in _sort_by_name(folders)], page, limit)

    def list_files(
        self,
        owner_id: str,
        folder_id: Optional[str] = None,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> Page[File]:
        validate_paging(page, limit)
        validate_active_container(self._index, owner_id, folder_id, "Folder")

        files = _filter_search(self._active_children_files(owner_id, folder_id), search)
        return _paginate([self._file_view(f) for f in _sort_by_name(files)], page, limit)

    def list_starred(
        self,
        owner_id: str,
        kind: ItemKind,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> Page[Item]:
        """Starred, non-deleted entities across the whole hierarchy."""
        validate_paging(page, limit)
        items = [
            item for item in self._iter_owner_items(owner_id, kind)
            if item.is_starred and not self._is_deleted(item)
        ]
        items = _filter_search(items, search)
        return _paginate([self._view(i) for i in _sort_by_name(items)], page, limit)

    def list_trash(
        self,
        owner_id: str,
        kind: ItemKind,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> Page[Item]:
        """
        Deleted entities, top-most only, newest first.

        An entity is listed iff its own flag is set and its container is not
        deleted; a file inside a deleted folder is represented by the folder.
        """
        validate_paging(page, limit)
        items = [
            item for item in self._iter_owner_items(owner_id, kind)
            if item.is_deleted and find_deleted_ancestor(self._index, item.container_id) is None
        ]
        items = _filter_search(items, search)
        items.sort(key=lambda x: (x.name.casefold(), x.id))
        items.sort(key=lambda x: x.deleted_at, reverse=True)  # type: ignore[arg-type, return-value]
        return _paginate([self._view(i) for i in items], page, limit)

    def breadcrumb(self, owner_id: str, folder_id: Optional[str]) -> list[BreadcrumbEntry]:
        """Root-to-folder path computed from the current parent chain."""
        crumbs = [BreadcrumbEntry.root()]
        if folder_id is None:
            return crumbs

        self._require_active_folder(owner_id, folder_id)
        chain = list(self._index.ancestors(folder_id))
        chain.reverse()

        path = ""
        for folder in chain:
            path = f"{path}/{folder.name}"
            crumbs.append(BreadcrumbEntry(id=folder.id, name=folder.name, path=path))
        return crumbs

    def folder_stats(self, owner_id: str, folder_id: str) -> FolderStats:
        """Totals over the folder's full non-deleted subtree (recursive)."""
        self._require_active_folder(owner_id, folder_id)

        total_folders = 0
        total_files = 0
        total_size = 0
        stack: list[str] = [folder_id]
        while stack:
            cur = stack.pop()
            for file in self._active_children_files(owner_id, cur):
                total_files += 1
                total_size += file.size
            for child in self._active_children_folders(owner_id, cur):
                total_folders += 1
                stack.append(child.id)

        return FolderStats(
            total_items=total_folders + total_files,
            total_folders=total_folders,
            total_files=total_files,
            total_size=total_size,
        )

    def folder_name_exists(self, owner_id: str, name: str, parent_id: Optional[str] = None) -> bool:
        """
        Best-effort sibling name check (case-insensitive, exact).

        Sibling names are never required to be unique; this only lets a UI
        warn before creating a duplicate.
        """
        wanted = name.strip().casefold()
        return any(
            f.name.casefold() == wanted
            for f in self._active_children_folders(owner_id, parent_id)
        )

    def download(self, owner_id: str, file_id: str) -> DownloadTicket:
        """
        Issue a one-off URL for the bytes of an active file.

        A file has at most one outstanding token; a new ticket replaces the old one.
        """
        file = self._require_active_file(owner_id, file_id)
        self._drop_download_tokens({file.id})
        token = new_uuid()
        self._download_tokens[token] = file.id
        return DownloadTicket(
            download_url=f"{self._download_base_url}/{file.id}?token={token}",
            file_name=file.name,
        )

    def redeem_download(self, file_id: str, token: str) -> bytes:
        """Return the bytes behind a download URL. Tokens are single-use."""
        if self._download_tokens.get(token) != file_id:
            raise NotFoundError("Download link is invalid or expired", details={"id": file_id})
        del self._download_tokens[token]
        file = self._index.files_by_id.get(file_id)
        if file is None or self._is_deleted(file):
            raise NotFoundError(f"File not found: {file_id}", details={"id": file_id})
        return self._index.contents_by_file_id.get(file_id, b"")

    # ----------------------------
    # Mutation APIs
    # ----------------------------
    def create_folder(self, owner_id: str, name: str, parent_id: Optional[str] = None) -> Folder:
        clean_name = validate_name(name, "Folder name")
        validate_active_container(self._index, owner_id, parent_id, "Parent folder")

        now = self._clock()
        folder = Folder(
            id=new_item_id(),
            name=clean_name,
            owner_id=owner_id,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )
        self._index.add_folder(folder)
        logger.info("Folder created: %s (ID: %s, parent: %s)", clean_name, folder.id, parent_id)
        return self._folder_view(folder)

    def upload_file(
        self,
        owner_id: str,
        name: str,
        content: bytes = b"",
        *,
        mime_type: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> File:
        clean_name = validate_name(name, "File name")
        validate_upload_size(len(content), self._max_upload_bytes)
        validate_active_container(self._index, owner_id, folder_id, "Folder")

        now = self._clock()
        file = File(
            id=new_item_id(),
            name=clean_name,
            owner_id=owner_id,
            folder_id=folder_id,
            size=len(content),
            mime_type=mime_type or guess_mime_type(clean_name),
            created_at=now,
            updated_at=now,
        )
        self._index.add_file(file, bytes(content))
        logger.info("File uploaded: %s (ID: %s, size: %d)", clean_name, file.id, file.size)
        return self._file_view(file)

    def rename(self, owner_id: str, kind: ItemKind, item_id: str, new_name: str) -> Item:
        what = "Folder name" if kind is ItemKind.FOLDER else "File name"
        clean_name = validate_name(new_name, what)
        item = self._require_active(owner_id, kind, item_id)

        item.name = clean_name
        item.updated_at = self._clock()
        logger.info("%s renamed: %s -> %s", kind.value.capitalize(), item_id, clean_name)
        return self._view(item)

    def move(
        self,
        owner_id: str,
        kind: ItemKind,
        item_id: str,
        target_parent_id: Optional[str],
    ) -> Item:
        item = self._require_active(owner_id, kind, item_id)
        if isinstance(item, Folder):
            validate_move_no_cycle(self._index, item.id, target_parent_id)
        validate_active_container(self._index, owner_id, target_parent_id, "Target folder")

        if isinstance(item, Folder):
            self._index.reparent_folder(item.id, target_parent_id)
        else:
            self._index.reparent_file(item.id, target_parent_id)
        item.updated_at = self._clock()

        logger.info("%s moved: %s -> %s", kind.value.capitalize(), item_id, target_parent_id)
        return self._view(item)

    def copy(
        self,
        owner_id: str,
        kind: ItemKind,
        item_id: str,
        target_parent_id: Optional[str] = None,
        new_name: Optional[str] = None,
    ) -> Item:
        """
        Duplicate an entity under target_parent_id.

        Folders are copied deep: every non-deleted descendant gets a new id and
        keeps its relative position. The copy belongs to the caller and is not
        starred.
        """
        item = self._require_active(owner_id, kind, item_id)
        copy_name = validate_name(new_name if new_name is not None else item.name,
                                  "Folder name" if kind is ItemKind.FOLDER else "File name")
        if isinstance(item, Folder):
            validate_move_no_cycle(self._index, item.id, target_parent_id, action="COPY")
        validate_active_container(self._index, owner_id, target_parent_id, "Target folder")

        now = self._clock()
        if isinstance(item, File):
            new_file = self._clone_file(item, owner_id, target_parent_id, copy_name, now)
            logger.info("File copied: %s -> %s", item.id, new_file.id)
            return self._file_view(new_file)

        new_root = Folder(
            id=new_item_id(),
            name=copy_name,
            owner_id=owner_id,
            parent_id=target_parent_id,
            created_at=now,
            updated_at=now,
        )
        self._index.add_folder(new_root)

        copied = 0
        stack: list[tuple[str, str]] = [(item.id, new_root.id)]
        while stack:
            src_id, dst_id = stack.pop()
            for file in self._active_children_files(item.owner_id, src_id):
                self._clone_file(file, owner_id, dst_id, file.name, now)
                copied += 1
            for child in self._active_children_folders(item.owner_id, src_id):
                clone = Folder(
                    id=new_item_id(),
                    name=child.name,
                    owner_id=owner_id,
                    parent_id=dst_id,
                    created_at=now,
                    updated_at=now,
                )
                self._index.add_folder(clone)
                copied += 1
                stack.append((child.id, clone.id))

        logger.info("Folder copied: %s -> %s (%d descendants)", item.id, new_root.id, copied)
        return self._folder_view(new_root)

    def delete(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        """Soft delete. Descendants of a folder become deleted through the folder."""
        item = self._require_active(owner_id, kind, item_id)
        now = self._clock()
        item.is_deleted = True
        item.deleted_at = now
        item.updated_at = now
        logger.info("%s moved to trash: %s (ID: %s)", kind.value.capitalize(), item.name, item.id)
        return self._view(item)

    def restore(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        """
        Bring a deleted entity back.

        Raises:
            ConflictError: if the entity is not in trash.
        """
        item = self._require_owned(owner_id, kind, item_id)
        if not self._is_deleted(item):
            raise ConflictError(
                f"{kind.value.capitalize()} is not in trash: {item_id}",
                details={"id": item_id, "kind": kind.value},
            )

        item.is_deleted = False
        item.deleted_at = None
        item.updated_at = self._clock()

        container = item.container_id
        if container is not None and find_deleted_ancestor(self._index, container) is not None:
            if isinstance(item, Folder):
                self._index.reparent_folder(item.id, None)
            else:
                self._index.reparent_file(item.id, None)
            logger.info(
                "%s restored to root (parent %s is in trash): %s",
                kind.value.capitalize(),
                container,
                item.id,
            )
        else:
            logger.info("%s restored: %s", kind.value.capitalize(), item.id)
        return self._view(item)

    def permanent_delete(self, owner_id: str, kind: ItemKind, item_id: str) -> int:
        """
        Erase a deleted entity and, for folders, every descendant.

        Returns:
            Number of records erased.

        Raises:
            ConflictError: if the entity is not in trash.
        """
        item = self._require_owned(owner_id, kind, item_id)
        if not self._is_deleted(item):
            raise ConflictError(
                f"{kind.value.capitalize()} must be in trash before permanent deletion: {item_id}",
                details={"id": item_id, "kind": kind.value},
            )

        if isinstance(item, File):
            self._index.remove_file(item.id)
            self._drop_download_tokens({item.id})
            logger.info("File permanently deleted: %s (ID: %s)", item.name, item.id)
            return 1

        folders, files = self._index.descendants(item.id)
        self._drop_download_tokens({f.id for f in files})
        for file in files:
            self._index.remove_file(file.id)
        for folder in folders:
            self._index.remove_folder(folder.id)
        self._index.remove_folder(item.id)

        erased = 1 + len(folders) + len(files)
        logger.info("Folder permanently deleted: %s (ID: %s, %d records)", item.name, item.id, erased)
        return erased

    def toggle_star(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        """Flip is_starred. No other field changes, so two toggles are a no-op."""
        item = self._require_active(owner_id, kind, item_id)
        item.is_starred = not item.is_starred
        return self._view(item)

    # ----------------------------
    # Internals
    # ----------------------------
    def _require_owned(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        if kind is ItemKind.FOLDER:
            return validate_owned_folder(self._index, owner_id, item_id, "Folder")
        if kind is ItemKind.FILE:
            return validate_owned_file(self._index, owner_id, item_id, "File")
        raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})

    def _require_active(self, owner_id: str, kind: ItemKind, item_id: str) -> Item:
        item = self._require_owned(owner_id, kind, item_id)
        if self._is_deleted(item):
            raise NotFoundError(
                f"{kind.value.capitalize()} is in trash: {item_id}",
                details={"id": item_id, "kind": kind.value},
            )
        return item

    def _require_active_folder(self, owner_id: str, folder_id: str) -> Folder:
        return cast(Folder, self._require_active(owner_id, ItemKind.FOLDER, folder_id))

    def _require_active_file(self, owner_id: str, file_id: str) -> File:
        return cast(File, self._require_active(owner_id, ItemKind.FILE, file_id))

    def _drop_download_tokens(self, file_ids: set[str]) -> None:
        stale = [t for t, fid in self._download_tokens.items() if fid in file_ids]
        for token in stale:
            del self._download_tokens[token]

    def _iter_owner_items(self, owner_id: str, kind: ItemKind) -> list[Item]:
        if kind is ItemKind.FOLDER:
            return list(self._index.iter_owner_folders(owner_id))
        if kind is ItemKind.FILE:
            return list(self._index.iter_owner_files(owner_id))
        raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})

    def _active_children_folders(self, owner_id: str, parent_id: Optional[str]) -> list[Folder]:
        children = (self._index.folders_by_id[cid]
                    for cid in self._index.child_folder_ids(owner_id, parent_id))
        return [f for f in children if not f.is_deleted]

    def _active_children_files(self, owner_id: str, folder_id: Optional[str]) -> list[File]:
        children = (self._index.files_by_id[fid]
                    for fid in self._index.child_file_ids(owner_id, folder_id))
        return [f for f in children if not f.is_deleted]

    def _clone_file(
        self,
        src: File,
        owner_id: str,
        folder_id: Optional[str],
        name: str,
        now: datetime,
    ) -> File:
        clone = File(
            id=new_item_id(),
            name=name,
            owner_id=owner_id,
            folder_id=folder_id,
            size=src.size,
            mime_type=src.mime_type,
            created_at=now,
            updated_at=now,
        )
        self._index.add_file(clone, self._index.contents_by_file_id.get(src.id, b""))
        return clone

    def _deleted_at(self, item: Item) -> Optional[datetime]:
        """Own deleted_at, else the nearest deleted ancestor's."""
        if item.is_deleted:
            return item.deleted_at
        ancestor = find_deleted_ancestor(self._index, item.container_id)
        return ancestor.deleted_at if ancestor is not None else None

    def _is_deleted(self, item: Item) -> bool:
        return self._deleted_at(item) is not None

    def _path_of(self, folder: Folder) -> str:
        names = [f.name for f in self._index.ancestors(folder.id)]
        if not names:
            return ROOT_PATH
        names.reverse()
        return "/" + "/".join(names)

    def _folder_view(self, folder: Folder) -> Folder:
        deleted_at = self._deleted_at(folder)
        return replace(
            folder,
            is_deleted=deleted_at is not None,
            deleted_at=deleted_at,
            path=self._path_of(folder),
        )

    def _file_view(self, file: File) -> File:
        deleted_at = self._deleted_at(file)
        return replace(file, is_deleted=deleted_at is not None, deleted_at=deleted_at)

    def _view(self, item: Item) -> Item:
        if isinstance(item, Folder):
            return self._folder_view(item)
        return self._file_view(item)


def _sort_by_name(items: Sequence[T]) -> list[T]:
    return sorted(items, key=lambda x: (x.name.casefold(), x.id))  # type: ignore[attr-defined]


def _filter_search(items: list[T], search: Optional[str]) -> list[T]:
    if not search:
        return items
    needle = search.casefold()
    return [i for i in items if needle in i.name.casefold()]  # type: ignore[attr-defined]


def _paginate(items: list[T], page: int, limit: int) -> Page[T]:
    total = len(items)
    pages = (total + limit - 1) // limit
    start = (page - 1) * limit
    return Page(
        items=items[start:start + limit],
        pagination=Pagination(page=page, limit=limit, total=total, pages=pages),
    )

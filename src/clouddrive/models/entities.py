"""Entity model: folders, files and the read-side records built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

ROOT_NAME: str = "My Drive"
ROOT_PATH: str = "/"


class ItemKind(str, Enum):
    """Discriminant of the Folder/File tagged union."""

    FOLDER = "folder"
    FILE = "file"


class ViewKind(str, Enum):
    """Listing scope of a view: one folder, everything starred, or the trash."""

    DRIVE = "drive"
    STARRED = "starred"
    TRASH = "trash"


def _check_deletion_state(is_deleted: bool, deleted_at: Optional[datetime]) -> None:
    if is_deleted and deleted_at is None:
        raise ValueError("deleted_at must be set when is_deleted is True")
    if not is_deleted and deleted_at is not None:
        raise ValueError("deleted_at must be None when is_deleted is False")


@dataclass(slots=True)
class Folder:
    """
    A folder in one owner's tree.

    Notes:
        - parent_id None means the folder sits at the root ("My Drive").
        - path is derived from the ancestor chain at read time.
    """

    id: str
    name: str
    owner_id: str
    parent_id: Optional[str] = None

    is_starred: bool = False
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    path: str = ""

    def __post_init__(self) -> None:
        _check_deletion_state(self.is_deleted, self.deleted_at)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.FOLDER

    @property
    def container_id(self) -> Optional[str]:
        return self.parent_id


@dataclass(slots=True)
class File:
    """A file stored in a folder (folder_id None = root). Files have no children."""

    id: str
    name: str
    owner_id: str
    folder_id: Optional[str] = None
    size: int = 0
    mime_type: str = "application/octet-stream"

    is_starred: bool = False
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("size must be >= 0")
        _check_deletion_state(self.is_deleted, self.deleted_at)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.FILE

    @property
    def container_id(self) -> Optional[str]:
        return self.folder_id


Item = Union[Folder, File]


@dataclass(slots=True, frozen=True)
class BreadcrumbEntry:
    """One step of the root-to-folder path. The root entry has id None."""

    id: Optional[str]
    name: str
    path: str

    @classmethod
    def root(cls) -> BreadcrumbEntry:
        return cls(id=None, name=ROOT_NAME, path=ROOT_PATH)


@dataclass(slots=True, frozen=True)
class FolderStats:
    """Aggregates over a folder's full non-deleted subtree."""

    total_items: int = 0
    total_folders: int = 0
    total_files: int = 0
    total_size: int = 0


@dataclass(slots=True, frozen=True)
class Pagination:
    """1-indexed page information returned with every listing."""

    page: int
    limit: int
    total: int
    pages: int


T = TypeVar("T")


@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    pagination: Pagination

    def __len__(self) -> int:
        return len(self.items)


@dataclass(slots=True, frozen=True)
class DownloadTicket:
    """Signed URL for a file download; the bytes are fetched separately."""

    download_url: str
    file_name: str


@dataclass(slots=True)
class FolderDetails:
    folder: Folder
    folders: list[Folder] = field(default_factory=list)
    files: list[File] = field(default_factory=list)


@dataclass(slots=True)
class Listing:
    """Folders and files of one view load, fetched together."""

    folders: list[Folder] = field(default_factory=list)
    files: list[File] = field(default_factory=list)
    folder_pagination: Optional[Pagination] = None
    file_pagination: Optional[Pagination] = None

    def __len__(self) -> int:
        return len(self.folders) + len(self.files)

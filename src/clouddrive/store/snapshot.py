"""In-memory records and indexes for DriveStore."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from clouddrive.models import File, Folder

# (owner_id, container_id); container_id None is the owner's root.
ContainerKey = tuple[str, Optional[str]]


@dataclass(slots=True)
class DriveIndex:
    """
    Records of every owner's folders and files.

    Entities are stored with their *own* deletion flag only; cascade through
    deleted ancestors is resolved by the store at read time.

    Indexes:
        - folders_by_id / files_by_id
        - child_folders / child_files, keyed by (owner_id, container_id)
        - contents_by_file_id (uploaded bytes)
    """

    folders_by_id: dict[str, Folder] = field(default_factory=dict)
    files_by_id: dict[str, File] = field(default_factory=dict)
    child_folders: dict[ContainerKey, set[str]] = field(default_factory=dict)
    child_files: dict[ContainerKey, set[str]] = field(default_factory=dict)
    contents_by_file_id: dict[str, bytes] = field(default_factory=dict)

    # ----------------------------
    # Query helpers
    # ----------------------------
    def child_folder_ids(self, owner_id: str, parent_id: Optional[str]) -> list[str]:
        return list(self.child_folders.get((owner_id, parent_id), set()))

    def child_file_ids(self, owner_id: str, folder_id: Optional[str]) -> list[str]:
        return list(self.child_files.get((owner_id, folder_id), set()))

    def iter_owner_folders(self, owner_id: str) -> Iterator[Folder]:
        return (f for f in self.folders_by_id.values() if f.owner_id == owner_id)

    def iter_owner_files(self, owner_id: str) -> Iterator[File]:
        return (f for f in self.files_by_id.values() if f.owner_id == owner_id)

    def ancestors(self, folder_id: Optional[str]) -> Iterator[Folder]:
        """Yield the folder itself, then its parent, up to the root."""
        seen: set[str] = set()
        cur = folder_id
        while cur is not None and cur not in seen:
            seen.add(cur)
            folder = self.folders_by_id.get(cur)
            if folder is None:
                return
            yield folder
            cur = folder.parent_id

    def descendants(self, folder_id: str) -> tuple[list[Folder], list[File]]:
        """All folders and files below folder_id regardless of deletion state."""
        root = self.folders_by_id[folder_id]
        folders: list[Folder] = []
        files: list[File] = []
        stack: list[str] = [folder_id]
        while stack:
            cur = stack.pop()
            for fid in self.child_file_ids(root.owner_id, cur):
                files.append(self.files_by_id[fid])
            for cid in self.child_folder_ids(root.owner_id, cur):
                folders.append(self.folders_by_id[cid])
                stack.append(cid)
        return folders, files

    # ----------------------------
    # Mutation helpers (keep indexes consistent)
    # ----------------------------
    def add_folder(self, folder: Folder) -> None:
        self.folders_by_id[folder.id] = folder
        self.child_folders.setdefault((folder.owner_id, folder.parent_id), set()).add(folder.id)

    def add_file(self, file: File, content: bytes = b"") -> None:
        self.files_by_id[file.id] = file
        self.child_files.setdefault((file.owner_id, file.folder_id), set()).add(file.id)
        self.contents_by_file_id[file.id] = content

    def reparent_folder(self, folder_id: str, new_parent_id: Optional[str]) -> None:
        folder = self.folders_by_id[folder_id]
        self._discard(self.child_folders, (folder.owner_id, folder.parent_id), folder_id)
        folder.parent_id = new_parent_id
        self.child_folders.setdefault((folder.owner_id, new_parent_id), set()).add(folder_id)

    def reparent_file(self, file_id: str, new_folder_id: Optional[str]) -> None:
        file = self.files_by_id[file_id]
        self._discard(self.child_files, (file.owner_id, file.folder_id), file_id)
        file.folder_id = new_folder_id
        self.child_files.setdefault((file.owner_id, new_folder_id), set()).add(file_id)

    def remove_folder(self, folder_id: str) -> None:
        """Remove a single folder record (children must be removed by the caller)."""
        folder = self.folders_by_id.pop(folder_id, None)
        if folder is None:
            return
        self._discard(self.child_folders, (folder.owner_id, folder.parent_id), folder_id)
        self.child_folders.pop((folder.owner_id, folder_id), None)
        self.child_files.pop((folder.owner_id, folder_id), None)

    def remove_file(self, file_id: str) -> None:
        file = self.files_by_id.pop(file_id, None)
        if file is None:
            return
        self._discard(self.child_files, (file.owner_id, file.folder_id), file_id)
        self.contents_by_file_id.pop(file_id, None)

    @staticmethod
    def _discard(index: dict[ContainerKey, set[str]], key: ContainerKey, item_id: str) -> None:
        children = index.get(key)
        if children is None:
            return
        children.discard(item_id)
        if not children:
            index.pop(key, None)

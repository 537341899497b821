"""ViewController: owns one view's state and drives it through DriveManager."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from clouddrive.controller import UploadSource
from clouddrive.errors import CloudDriveError, InvalidArgumentError, InvalidStateError
from clouddrive.manager import BatchProgressCallback, DriveManager
from clouddrive.models import BatchResult, File, Folder, FolderStats, Item, ItemKind, ViewKind
from clouddrive.util.names import validate_name

from .capabilities import DRIVE_VIEW, STARRED_VIEW, TRASH_VIEW, ViewCapabilities
from .state import ViewMode, ViewState

logger = logging.getLogger(__name__)

_DEFAULT_CAPABILITIES: dict[ViewKind, ViewCapabilities] = {
    ViewKind.DRIVE: DRIVE_VIEW,
    ViewKind.STARRED: STARRED_VIEW,
    ViewKind.TRASH: TRASH_VIEW,
}


class ViewController:
    """
    Single owner of a view's ViewState.

    Notes:
        - Nothing is applied optimistically: a mutation only changes the state
          through the re-list that follows it. A failed mutation leaves the
          state as it was and raises.
        - Actions outside the view's capabilities raise InvalidStateError
          before any request is sent.
        - Names are validated locally first so errors can be shown inline.
    """

    def __init__(
        self,
        manager: DriveManager,
        view: ViewKind = ViewKind.DRIVE,
        *,
        capabilities: Optional[ViewCapabilities] = None,
        folder_id: Optional[str] = None,
    ) -> None:
        if view is not ViewKind.DRIVE and folder_id is not None:
            raise InvalidArgumentError("folder_id only applies to the drive view")
        self._manager = manager
        self._view = view
        self._capabilities = capabilities or _DEFAULT_CAPABILITIES[view]
        self._state = ViewState(folder_id=folder_id)

    @property
    def view(self) -> ViewKind:
        return self._view

    @property
    def capabilities(self) -> ViewCapabilities:
        return self._capabilities

    @property
    def state(self) -> ViewState:
        return self._state

    # ----------------------------
    # Loading / navigation
    # ----------------------------
    async def load(self) -> ViewState:
        """
        (Re)list the view and, for the drive view, its breadcrumb.

        Raises:
            CloudDriveError: the load failure; the state records the message.
        """
        self._state = self._state.start_loading()
        folder_id = self._state.folder_id
        try:
            listing = await self._manager.load_view(
                self._view,
                folder_id,
                search=self._state.search_query or None,
            )
            breadcrumb = None
            if self._view is ViewKind.DRIVE:
                breadcrumb = await self._manager.breadcrumb(folder_id)
        except CloudDriveError as exc:
            self._state = self._state.with_error(str(exc))
            raise
        self._state = self._state.with_listing(listing, breadcrumb)
        return self._state

    async def navigate(self, folder_id: Optional[str]) -> ViewState:
        if self._view is not ViewKind.DRIVE:
            raise InvalidStateError("Only the drive view can navigate into folders")
        previous = self._state
        self._state = self._state.navigate(folder_id)
        return await self._load_or_revert(previous)

    async def search(self, query: str) -> ViewState:
        previous = self._state
        self._state = self._state.with_search(query)
        return await self._load_or_revert(previous)

    # ----------------------------
    # Local-only transitions
    # ----------------------------
    def toggle_selection(self, kind: ItemKind, item_id: str) -> ViewState:
        self._state = self._state.toggle_selection(kind, item_id)
        return self._state

    def select_all(self) -> ViewState:
        self._state = self._state.select_all()
        return self._state

    def clear_selection(self) -> ViewState:
        self._state = self._state.clear_selection()
        return self._state

    def set_view_mode(self, mode: ViewMode) -> ViewState:
        self._state = self._state.with_view_mode(mode)
        return self._state

    def open_context_menu(self, item: Item, x: int, y: int) -> ViewState:
        self._state = self._state.open_context_menu(item, x, y)
        return self._state

    def close_context_menu(self) -> ViewState:
        self._state = self._state.close_context_menu()
        return self._state

    # ----------------------------
    # Mutations
    # ----------------------------
    async def create_folder(self, name: str) -> Folder:
        self._check("create_folder")
        name = validate_name(name, "Folder name")
        folder = await self._manager.create_folder(name, self._state.folder_id)
        await self._refresh()
        return folder

    async def upload(
        self,
        sources: Sequence[UploadSource],
        *,
        on_progress: Optional[BatchProgressCallback] = None,
    ) -> BatchResult:
        self._check("upload")
        result = await self._manager.upload_batch(
            sources,
            self._state.folder_id,
            on_progress=on_progress,
        )
        return await self._refresh_after_batch(result)

    async def rename(self, item: Item, new_name: str) -> Item:
        self._check("rename")
        new_name = validate_name(new_name, _name_label(item))
        updated = await self._manager.rename(item, new_name)
        await self._refresh()
        return updated

    async def move(self, item: Item, target_parent_id: Optional[str]) -> Item:
        self._check("move")
        moved = await self._manager.move(item, target_parent_id)
        await self._refresh()
        return moved

    async def copy(
        self,
        item: Item,
        target_parent_id: Optional[str] = None,
        *,
        new_name: Optional[str] = None,
    ) -> Item:
        self._check("copy")
        if new_name is not None:
            new_name = validate_name(new_name, _name_label(item))
        copied = await self._manager.copy(item, target_parent_id, new_name=new_name)
        await self._refresh()
        return copied

    async def toggle_star(self, item: Item) -> Item:
        self._check("star")
        updated = await self._manager.toggle_star(item)
        await self._refresh()
        return updated

    async def delete(self, item: Item) -> None:
        self._check("delete")
        await self._manager.delete(item)
        await self._refresh()

    async def restore(self, item: Item) -> Item:
        self._check("restore")
        restored = await self._manager.restore(item)
        await self._refresh()
        return restored

    async def restore_selected(self) -> BatchResult:
        """Restore every selected item; the selection is cleared afterwards."""
        self._check("restore")
        items = self._state.selected_items
        if not items:
            raise InvalidStateError("No items selected")
        result = await self._manager.bulk_restore(items)
        self._state = self._state.clear_selection()
        return await self._refresh_after_batch(result)

    async def permanent_delete(self, item: Item) -> None:
        self._check("permanent_delete")
        await self._manager.permanent_delete(item)
        await self._refresh()

    async def download(self, item: Item, local_dir: str, *, overwrite: bool = False) -> str:
        self._check("download")
        if not isinstance(item, File):
            raise InvalidArgumentError("Only files can be downloaded", details={"id": item.id})
        return await self._manager.download_file(item, local_dir, overwrite=overwrite)

    async def show_info(self, item: Item) -> tuple[Item, Optional[FolderStats]]:
        """Fresh item details; folders also get subtree stats."""
        self._check("show_info")
        fresh = await self._manager.get_item(item.kind, item.id)
        stats = None
        if isinstance(fresh, Folder):
            stats = await self._manager.folder_stats(fresh.id)
        return fresh, stats

    async def folder_name_exists(self, name: str) -> bool:
        return await self._manager.folder_name_exists(name, self._state.folder_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _check(self, action: str) -> None:
        self._capabilities.require(action)
        if not self._state.loaded:
            raise InvalidStateError("View is not loaded. Call load() first.")

    async def _load_or_revert(self, previous: ViewState) -> ViewState:
        """Load the pending state; on failure go back to previous, keeping the error."""
        try:
            return await self.load()
        except CloudDriveError as exc:
            self._state = previous.with_error(str(exc))
            raise

    async def _refresh(self) -> bool:
        try:
            await self.load()
        except CloudDriveError as exc:
            logger.warning("Refresh of %s view failed: %s", self._view.value, exc)
            return False
        return True

    async def _refresh_after_batch(self, result: BatchResult) -> BatchResult:
        result.refreshed = await self._refresh()
        if not result.refreshed:
            result.summary["refresh_failed"] = result.summary.get("refresh_failed", 0) + 1
        return result


def _name_label(item: Item) -> str:
    return "Folder name" if item.kind is ItemKind.FOLDER else "File name"

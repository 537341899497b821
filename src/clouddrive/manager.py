"""DriveManager: view loads, batch uploads and bulk restore over DriveApiClient."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence

import httpx

from clouddrive.config import DriveSettings, get_settings
from clouddrive.controller import DriveApiClient, UploadSource
from clouddrive.errors import CloudDriveError, InvalidArgumentError
from clouddrive.models import (
    BatchResult,
    BreadcrumbEntry,
    File,
    Folder,
    FolderStats,
    Item,
    ItemKind,
    ItemOutcome,
    Listing,
    Page,
    ViewKind,
)

logger = logging.getLogger(__name__)

BatchProgressCallback = Callable[[int, int], None]
"""Called with (index in batch, percent) for each upload."""


class DriveManager:
    """
    High-level operations a view needs.

    Policy:
        - load_view is a fail-fast join: folders and files are listed
          concurrently and the first error propagates.
        - upload_batch and bulk_restore are partial: every item runs to
          completion, failures are reported per item, nothing is rolled back.
        - Single mutations are plain calls; the caller re-lists afterwards.
    """

    def __init__(self, client: DriveApiClient, *, view_page_size: int = 100) -> None:
        self._client = client
        self._view_page_size = view_page_size

    @classmethod
    def from_settings(
        cls,
        settings: Optional[DriveSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> DriveManager:
        settings = settings or get_settings()
        client = DriveApiClient.from_settings(settings, transport=transport)
        return cls(client, view_page_size=settings.view_page_size)

    @property
    def client(self) -> DriveApiClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    # ----------------------------
    # Loads
    # ----------------------------
    async def load_view(
        self,
        view: ViewKind,
        folder_id: Optional[str] = None,
        *,
        search: Optional[str] = None,
    ) -> Listing:
        """
        List folders and files of a view concurrently.

        folder_id only applies to ViewKind.DRIVE (None is the root).

        Raises:
            CloudDriveError: the first failure of either listing.
        """
        folders_page, files_page = await asyncio.gather(
            self._list(view, ItemKind.FOLDER, folder_id, search),
            self._list(view, ItemKind.FILE, folder_id, search),
        )
        return Listing(
            folders=[f for f in folders_page.items if isinstance(f, Folder)],
            files=[f for f in files_page.items if isinstance(f, File)],
            folder_pagination=folders_page.pagination,
            file_pagination=files_page.pagination,
        )

    async def breadcrumb(self, folder_id: Optional[str]) -> list[BreadcrumbEntry]:
        return await self._client.breadcrumb(folder_id)

    async def get_item(self, kind: ItemKind, item_id: str) -> Item:
        if kind is ItemKind.FILE:
            return await self._client.get_file(item_id)
        if kind is ItemKind.FOLDER:
            details = await self._client.get_folder_details(item_id)
            return details.folder
        raise InvalidArgumentError("Unsupported item kind", details={"kind": kind})

    async def folder_stats(self, folder_id: str) -> FolderStats:
        return await self._client.folder_stats(folder_id)

    async def folder_name_exists(self, name: str, parent_id: Optional[str] = None) -> bool:
        return await self._client.folder_name_exists(name, parent_id)

    # ----------------------------
    # Single mutations
    # ----------------------------
    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> Folder:
        return await self._client.create_folder(name, parent_id)

    async def rename(self, item: Item, new_name: str) -> Item:
        return await self._client.rename(item.kind, item.id, new_name)

    async def move(self, item: Item, target_parent_id: Optional[str]) -> Item:
        return await self._client.move(item.kind, item.id, target_parent_id)

    async def copy(
        self,
        item: Item,
        target_parent_id: Optional[str] = None,
        *,
        new_name: Optional[str] = None,
    ) -> Item:
        return await self._client.copy(item.kind, item.id, target_parent_id, new_name=new_name)

    async def toggle_star(self, item: Item) -> Item:
        return await self._client.toggle_star(item.kind, item.id)

    async def delete(self, item: Item) -> None:
        await self._client.delete(item.kind, item.id)

    async def restore(self, item: Item) -> Item:
        return await self._client.restore(item.kind, item.id)

    async def permanent_delete(self, item: Item) -> None:
        await self._client.permanent_delete(item.kind, item.id)

    async def download_file(self, file: File, local_dir: str, *, overwrite: bool = False) -> str:
        return await self._client.download_file(file.id, local_dir, overwrite=overwrite)

    # ----------------------------
    # Batches
    # ----------------------------
    async def upload_batch(
        self,
        sources: Sequence[UploadSource],
        folder_id: Optional[str] = None,
        *,
        on_progress: Optional[BatchProgressCallback] = None,
    ) -> BatchResult:
        """
        Upload several files concurrently.

        Each upload has its own progress stream (reported as (index, percent))
        and its own outcome; one failure never cancels its siblings.
        """
        if not sources:
            raise InvalidArgumentError("sources must not be empty")

        tasks = [
            self._client.upload_file(
                source,
                folder_id,
                on_progress=_bind_progress(on_progress, index),
            )
            for index, source in enumerate(sources)
        ]
        settled = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes = [
            _outcome(index, ItemKind.FILE, source.name, result)
            for index, (source, result) in enumerate(zip(sources, settled))
        ]
        return _batch_result(outcomes, "upload")

    async def bulk_restore(self, items: Sequence[Item]) -> BatchResult:
        """Restore trashed items concurrently, one request each (no transaction)."""
        if not items:
            raise InvalidArgumentError("items must not be empty")

        settled = await asyncio.gather(
            *(self._client.restore(item.kind, item.id) for item in items),
            return_exceptions=True,
        )
        outcomes = [
            _outcome(index, item.kind, item.name, result)
            for index, (item, result) in enumerate(zip(items, settled))
        ]
        return _batch_result(outcomes, "restore")

    # ----------------------------
    # Internals
    # ----------------------------
    async def _list(
        self,
        view: ViewKind,
        kind: ItemKind,
        folder_id: Optional[str],
        search: Optional[str],
    ) -> Page[Item]:
        limit = self._view_page_size
        if view is ViewKind.DRIVE:
            return await self._client.list_children(kind, folder_id, limit=limit, search=search)
        if view is ViewKind.STARRED:
            return await self._client.list_starred(kind, limit=limit, search=search)
        if view is ViewKind.TRASH:
            return await self._client.list_trash(kind, limit=limit, search=search)
        raise InvalidArgumentError("Unsupported view", details={"view": view})


def _bind_progress(
    on_progress: Optional[BatchProgressCallback],
    index: int,
) -> Optional[Callable[[int], None]]:
    if on_progress is None:
        return None
    return lambda percent: on_progress(index, percent)


def _outcome(index: int, kind: ItemKind, label: str, result: object) -> ItemOutcome:
    if isinstance(result, CloudDriveError):
        return ItemOutcome(
            index=index,
            kind=kind,
            label=label,
            status="failed",
            error_type=result.__class__.__name__,
            error_message=str(result),
            error_details=result.details,
        )
    if isinstance(result, BaseException):
        # Only clouddrive errors become item outcomes.
        raise result
    return ItemOutcome(index=index, kind=kind, label=label, status="success", item=result)  # type: ignore[arg-type]


def _batch_result(outcomes: list[ItemOutcome], action: str) -> BatchResult:
    summary: dict[str, int] = {"success": 0, "failed": 0}
    for o in outcomes:
        summary[o.status] = summary.get(o.status, 0) + 1

    if summary["failed"]:
        logger.warning(
            "Batch %s: %d succeeded, %d failed",
            action,
            summary["success"],
            summary["failed"],
        )
    else:
        logger.info("Batch %s: %d succeeded", action, summary["success"])
    return BatchResult(outcomes=outcomes, summary=summary)

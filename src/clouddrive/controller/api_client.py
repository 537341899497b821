"""Async client for the files/folders REST service."""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from clouddrive.config import DriveSettings
from clouddrive.errors import (
    CloudDriveError,
    HttpErrorInfo,
    InvalidArgumentError,
    TransportError,
    ValidationError,
    map_http_error,
)
from clouddrive.models import (
    BreadcrumbEntry,
    DownloadTicket,
    File,
    Folder,
    FolderDetails,
    FolderStats,
    Item,
    ItemKind,
    Page,
)
from clouddrive.models.codec import (
    breadcrumb_from_dict,
    file_from_dict,
    folder_from_dict,
    item_from_dict,
    pagination_from_dict,
    stats_from_dict,
)
from clouddrive.store import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_PAGE_SIZE
from clouddrive.util.mime import guess_mime_type

from .routes import (
    BREADCRUMB_PATH,
    FOLDERS_PATH,
    OWNER_HEADER,
    UPLOAD_PATH,
    collection_path,
    item_path,
    list_key,
    parent_param,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

_NAME_CHECK_PAGE_SIZE = 100


@dataclass(slots=True, frozen=True)
class UploadSource:
    """Bytes to upload under a given file name."""

    name: str
    content: bytes
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, local_path: str, name: Optional[str] = None) -> UploadSource:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")
        with open(local_path, "rb") as f:
            content = f.read()
        return cls(name=name if name is not None else os.path.basename(local_path), content=content)

    @property
    def size(self) -> int:
        return len(self.content)


class _ProgressBuffer(io.BytesIO):
    """BytesIO that reports the share already read as a monotonic percentage."""

    def __init__(self, content: bytes, on_progress: Optional[ProgressCallback]) -> None:
        super().__init__(content)
        self._total = len(content)
        self._on_progress = on_progress
        self.last_percent = -1

    def read(self, size: Optional[int] = -1) -> bytes:
        chunk = super().read(size)
        if chunk and self._total:
            self.report(round(self.tell() * 100 / self._total))
        return chunk

    def report(self, percent: int) -> None:
        # httpx may seek back to 0 before streaming; never report a decrease.
        if percent <= self.last_percent:
            return
        self.last_percent = percent
        if self._on_progress is not None:
            self._on_progress(percent)


class DriveApiClient:
    """
    Client for the files/folders service.

    Notes:
        - Every call is a single request; there is no retry and no cache.
        - Errors are mapped to clouddrive exceptions (see map_http_error);
          httpx transport failures become TransportError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        owner_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        headers = {OWNER_HEADER: owner_id} if owner_id else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._max_upload_bytes = max_upload_bytes
        self._page_size = page_size

    @classmethod
    def from_settings(
        cls,
        settings: DriveSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> DriveApiClient:
        return cls(
            settings.base_url,
            owner_id=settings.owner_id,
            timeout=settings.timeout_seconds,
            transport=transport,
            max_upload_bytes=settings.max_upload_bytes,
            page_size=settings.page_size,
        )

    @classmethod
    def from_client(
        cls,
        client: httpx.AsyncClient,
        *,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> DriveApiClient:
        """Create a client around a pre-built httpx.AsyncClient (useful for tests)."""
        obj = cls.__new__(cls)
        obj._client = client
        obj._max_upload_bytes = max_upload_bytes
        obj._page_size = page_size
        return obj

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> DriveApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ----------------------------
    # Files
    # ----------------------------
    async def upload_file(
        self,
        source: UploadSource,
        folder_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
    ) -> File:
        """
        Upload one file as multipart form data.

        on_progress receives increasing integer percentages and ends with 100
        once the service has accepted the file.

        Raises:
            ValidationError: if the file is over the client-side size limit
                (checked before any request is sent) or the service rejects it.
        """
        if source.size > self._max_upload_bytes:
            raise ValidationError(
                f"{source.name} is too large. Maximum size is "
                f"{self._max_upload_bytes // (1024 * 1024)}MB.",
                details={"name": source.name, "size": source.size},
            )

        buffer = _ProgressBuffer(source.content, on_progress)
        mime_type = source.mime_type or guess_mime_type(source.name)
        data = {"folderId": folder_id} if folder_id else None

        payload = await self._request(
            "POST",
            UPLOAD_PATH,
            files={"file": (source.name, buffer, mime_type)},
            data=data,
        )
        buffer.report(100)
        return file_from_dict(_require_dict(payload, "file"))

    async def list_files(
        self,
        folder_id: Optional[str] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[File]:
        return await self.list_children(  # type: ignore[return-value]
            ItemKind.FILE, folder_id, page=page, limit=limit, search=search
        )

    async def get_file(self, file_id: str) -> File:
        payload = await self._request("GET", item_path(ItemKind.FILE, file_id))
        return file_from_dict(_require_dict(payload, "file"))

    async def get_download(self, file_id: str) -> DownloadTicket:
        payload = await self._request("GET", item_path(ItemKind.FILE, file_id, "download"))
        url = payload.get("downloadUrl")
        if not isinstance(url, str) or not url:
            raise TransportError("Download response has no downloadUrl", details={"id": file_id})
        return DownloadTicket(download_url=url, file_name=str(payload.get("fileName") or file_id))

    async def fetch_download(self, ticket: DownloadTicket) -> bytes:
        """Fetch the bytes behind a signed download URL."""
        try:
            response = await self._client.get(ticket.download_url)
        except httpx.HTTPError as exc:
            raise TransportError("Network error", details={"url": ticket.download_url}, cause=exc) from exc
        if response.status_code >= 400:
            raise _response_error(response)
        return response.content

    async def download_file(self, file_id: str, local_dir: str, *, overwrite: bool = False) -> str:
        """
        Download a file into local_dir under its service-side name.

        Returns:
            Path of the written file.
        """
        ticket = await self.get_download(file_id)
        base_name = os.path.basename(ticket.file_name)
        if base_name in ("", ".", ".."):
            raise InvalidArgumentError(
                "Download name is not a usable file name",
                details={"id": file_id, "file_name": ticket.file_name},
            )
        local_path = os.path.join(local_dir, base_name)
        if not overwrite and os.path.exists(local_path):
            raise InvalidArgumentError(
                "Destination file exists and overwrite is False",
                details={"local_path": local_path},
            )

        content = await self.fetch_download(ticket)
        os.makedirs(local_dir, exist_ok=True)
        with open(local_path, "wb") as f:
            f.write(content)
        return local_path

    # ----------------------------
    # Folders
    # ----------------------------
    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> Folder:
        payload = await self._request("POST", FOLDERS_PATH, json={"name": name, "parentId": parent_id})
        return folder_from_dict(_require_dict(payload, "folder"))

    async def list_folders(
        self,
        parent_id: Optional[str] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Folder]:
        return await self.list_children(  # type: ignore[return-value]
            ItemKind.FOLDER, parent_id, page=page, limit=limit, search=search
        )

    async def get_folder_details(self, folder_id: str) -> FolderDetails:
        payload = await self._request("GET", item_path(ItemKind.FOLDER, folder_id))
        contents = payload.get("contents") if isinstance(payload.get("contents"), dict) else {}
        return FolderDetails(
            folder=folder_from_dict(_require_dict(payload, "folder")),
            folders=[folder_from_dict(d) for d in _dict_list(contents, "folders")],
            files=[file_from_dict(d) for d in _dict_list(contents, "files")],
        )

    async def breadcrumb(self, folder_id: Optional[str]) -> list[BreadcrumbEntry]:
        """Root-to-folder path. The root itself needs no request."""
        if folder_id is None:
            return [BreadcrumbEntry.root()]
        payload = await self._request("GET", f"{BREADCRUMB_PATH}/{folder_id}")
        return [breadcrumb_from_dict(d) for d in _dict_list(payload, "breadcrumb")]

    async def folder_stats(self, folder_id: str) -> FolderStats:
        payload = await self._request("GET", item_path(ItemKind.FOLDER, folder_id, "stats"))
        return stats_from_dict(payload)

    async def folder_name_exists(self, name: str, parent_id: Optional[str] = None) -> bool:
        """
        Best-effort duplicate check among a parent's folders (case-insensitive).

        Sibling names are not unique on the service; any failure answers False.
        """
        wanted = name.strip().casefold()
        page_number = 1
        while True:
            try:
                page = await self.list_folders(
                    parent_id,
                    page=page_number,
                    limit=_NAME_CHECK_PAGE_SIZE,
                    search=name.strip(),
                )
            except CloudDriveError as exc:
                logger.debug("Folder name check failed for %r: %s", name, exc)
                return False
            if any(f.name.casefold() == wanted for f in page.items):
                return True
            if page_number >= page.pagination.pages:
                return False
            page_number += 1

    # ----------------------------
    # Shared item operations (kind-dispatched)
    # ----------------------------
    async def list_children(
        self,
        kind: ItemKind,
        parent_id: Optional[str] = None,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Item]:
        params = self._paging_params(page, limit, search)
        if parent_id:
            params[parent_param(kind)] = parent_id
        payload = await self._request("GET", collection_path(kind), params=params)
        return _page_from_payload(kind, payload)

    async def list_starred(
        self,
        kind: ItemKind,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Item]:
        params = self._paging_params(page, limit, search)
        payload = await self._request("GET", f"{collection_path(kind)}/starred", params=params)
        return _page_from_payload(kind, payload)

    async def list_trash(
        self,
        kind: ItemKind,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Item]:
        params = self._paging_params(page, limit, search)
        payload = await self._request("GET", f"{collection_path(kind)}/trash", params=params)
        return _page_from_payload(kind, payload)

    async def rename(self, kind: ItemKind, item_id: str, new_name: str) -> Item:
        payload = await self._request("PUT", item_path(kind, item_id, "rename"), json={"name": new_name})
        return _item_from_payload(kind, payload)

    async def move(self, kind: ItemKind, item_id: str, target_parent_id: Optional[str]) -> Item:
        body = {parent_param(kind): target_parent_id}
        payload = await self._request("PUT", item_path(kind, item_id, "move"), json=body)
        return _item_from_payload(kind, payload)

    async def copy(
        self,
        kind: ItemKind,
        item_id: str,
        target_parent_id: Optional[str] = None,
        *,
        new_name: Optional[str] = None,
    ) -> Item:
        body: dict[str, Any] = {parent_param(kind): target_parent_id, "name": new_name}
        payload = await self._request("POST", item_path(kind, item_id, "copy"), json=body)
        return _item_from_payload(kind, payload)

    async def delete(self, kind: ItemKind, item_id: str) -> None:
        await self._request("DELETE", item_path(kind, item_id))

    async def toggle_star(self, kind: ItemKind, item_id: str) -> Item:
        payload = await self._request("PUT", item_path(kind, item_id, "star"))
        return _item_from_payload(kind, payload)

    async def restore(self, kind: ItemKind, item_id: str) -> Item:
        payload = await self._request("PUT", item_path(kind, item_id, "restore"))
        return _item_from_payload(kind, payload)

    async def permanent_delete(self, kind: ItemKind, item_id: str) -> None:
        await self._request("DELETE", item_path(kind, item_id, "permanent"))

    # ----------------------------
    # Internals
    # ----------------------------
    def _paging_params(self, page: int, limit: Optional[int], search: Optional[str]) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "limit": limit or self._page_size}
        if search:
            params["search"] = search
        return params

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        files: Optional[dict[str, Any]] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Send one request and return the envelope's data object."""
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                files=files,
                data=data,
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                "Network error",
                details={"method": method, "path": path},
                cause=exc,
            ) from exc

        if response.status_code >= 400:
            raise _response_error(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                "Malformed response body",
                details={"method": method, "path": path, "status_code": response.status_code},
                cause=exc,
            ) from exc

        if not isinstance(body, dict) or body.get("success") is False:
            raise TransportError(
                "Unexpected response envelope",
                details={"method": method, "path": path},
            )
        data_obj = body.get("data")
        return data_obj if isinstance(data_obj, dict) else {}


def _response_error(response: httpx.Response) -> CloudDriveError:
    reason = None
    message = None
    details: dict[str, Any] = {}
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        if isinstance(body.get("message"), str):
            message = body["message"]
        err = body.get("error")
        if isinstance(err, dict):
            if isinstance(err.get("reason"), str):
                reason = err["reason"]
            if isinstance(err.get("details"), dict):
                details.update(err["details"])

    details["url"] = str(response.request.url) if response.request is not None else None
    info = HttpErrorInfo(
        status_code=response.status_code,
        reason=reason,
        message=message,
        details=details,
    )
    return map_http_error(info)


def _require_dict(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if not isinstance(value, dict):
        raise TransportError(f"Response has no '{key}' object", details={"key": key})
    return value


def _dict_list(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = payload.get(key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _item_from_payload(kind: ItemKind, payload: dict[str, Any]) -> Item:
    return item_from_dict(kind, _require_dict(payload, kind.value))


def _page_from_payload(kind: ItemKind, payload: dict[str, Any]) -> Page[Item]:
    items = [item_from_dict(kind, d) for d in _dict_list(payload, list_key(kind))]
    return Page(items=items, pagination=pagination_from_dict(payload.get("pagination"), item_count=len(items)))

"""LocalDriveApp: the service HTTP contract as a FastAPI app over a DriveStore."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import FastAPI

from clouddrive.store import DriveStore

from .exceptions import register_exception_handlers
from .routes import downloads_router, files_router, folders_router

logger = logging.getLogger(__name__)

LOCAL_BASE_URL: str = "http://clouddrive.local"


def create_app(store: DriveStore, *, root_path: str = "") -> FastAPI:
    """
    Build the service app around store.

    root_path is the path part of the base URL clients use ("/api" for
    "http://host/api"); every route is mounted below it.
    """
    app = FastAPI(title="clouddrive", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.store = store

    prefix = root_path.rstrip("/")
    for router in (files_router, folders_router, downloads_router):
        app.include_router(router, prefix=prefix)

    register_exception_handlers(app)
    return app


class LocalDriveApp:
    """
    Serve the files/folders REST contract from an in-memory DriveStore.

    Plug it into an httpx client with ``app.transport()``; no socket is
    opened. The caller is identified by the X-Owner-Id header.
    """

    def __init__(
        self,
        store: Optional[DriveStore] = None,
        *,
        base_url: str = LOCAL_BASE_URL,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.store = store or DriveStore(download_base_url=f"{self.base_url}/downloads")
        self.api = create_app(self.store, root_path=httpx.URL(self.base_url).path)
        logger.debug("Local drive service ready at %s", self.base_url)

    def transport(self) -> httpx.ASGITransport:
        return httpx.ASGITransport(app=self.api)

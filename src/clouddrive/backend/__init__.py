"""Local (in-process) service backend for clouddrive."""

from __future__ import annotations

from clouddrive.controller.routes import OWNER_HEADER

from .app import LOCAL_BASE_URL, LocalDriveApp, create_app

__all__ = ["LocalDriveApp", "LOCAL_BASE_URL", "OWNER_HEADER", "create_app"]

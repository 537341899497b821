"""Public model exports for clouddrive."""

from __future__ import annotations

from .entities import (
    ROOT_NAME,
    ROOT_PATH,
    BreadcrumbEntry,
    DownloadTicket,
    File,
    Folder,
    FolderDetails,
    FolderStats,
    Item,
    ItemKind,
    Listing,
    Page,
    Pagination,
    ViewKind,
)
from .results import BatchResult, ItemOutcome, OutcomeStatus

__all__ = [
    "ROOT_NAME",
    "ROOT_PATH",
    "ItemKind",
    "ViewKind",
    "Folder",
    "File",
    "Item",
    "BreadcrumbEntry",
    "FolderStats",
    "FolderDetails",
    "Pagination",
    "Page",
    "DownloadTicket",
    "Listing",
    "OutcomeStatus",
    "ItemOutcome",
    "BatchResult",
]

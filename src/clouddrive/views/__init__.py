"""Per-view state, capabilities and controllers."""

from __future__ import annotations

from .capabilities import DRIVE_VIEW, STARRED_VIEW, TRASH_VIEW, ViewCapabilities
from .controller import ViewController
from .state import ContextMenu, ItemKey, ViewMode, ViewState, item_key

__all__ = [
    "ViewController",
    "ViewState",
    "ViewMode",
    "ContextMenu",
    "ItemKey",
    "item_key",
    "ViewCapabilities",
    "DRIVE_VIEW",
    "STARRED_VIEW",
    "TRASH_VIEW",
]

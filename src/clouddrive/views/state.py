"""Immutable per-view UI state and its transitions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from clouddrive.models import BreadcrumbEntry, File, Folder, Item, ItemKind, Listing

ItemKey = tuple[ItemKind, str]


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


def item_key(item: Item) -> ItemKey:
    return (item.kind, item.id)


@dataclass(slots=True, frozen=True)
class ContextMenu:
    """Open context menu anchored at (x, y) for one item."""

    kind: ItemKind
    item_id: str
    x: int
    y: int


@dataclass(slots=True, frozen=True)
class ViewState:
    """
    Snapshot of one view.

    Every transition returns a new instance; nothing is mutated in place.
    Selection is keyed by (kind, id).
    """

    folder_id: Optional[str] = None
    folders: tuple[Folder, ...] = ()
    files: tuple[File, ...] = ()
    breadcrumb: tuple[BreadcrumbEntry, ...] = (BreadcrumbEntry.root(),)
    selection: frozenset[ItemKey] = frozenset()
    search_query: str = ""
    view_mode: ViewMode = ViewMode.GRID
    context_menu: Optional[ContextMenu] = None
    loading: bool = False
    loaded: bool = False
    error: Optional[str] = None

    # ----------------------------
    # Derived
    # ----------------------------
    @property
    def items(self) -> list[Item]:
        """Folders first, then files, each in listing order."""
        return [*self.folders, *self.files]

    @property
    def is_empty(self) -> bool:
        return not self.folders and not self.files

    @property
    def selected_items(self) -> list[Item]:
        return [i for i in self.items if item_key(i) in self.selection]

    def find(self, kind: ItemKind, item_id: str) -> Optional[Item]:
        for item in self.items:
            if item.kind is kind and item.id == item_id:
                return item
        return None

    # ----------------------------
    # Loading
    # ----------------------------
    def start_loading(self) -> ViewState:
        return replace(self, loading=True, error=None)

    def with_listing(
        self,
        listing: Listing,
        breadcrumb: Optional[list[BreadcrumbEntry]] = None,
    ) -> ViewState:
        """Replace the items; selection keeps only keys still listed."""
        folders = tuple(listing.folders)
        files = tuple(listing.files)
        present = {item_key(i) for i in (*folders, *files)}
        return replace(
            self,
            folders=folders,
            files=files,
            breadcrumb=tuple(breadcrumb) if breadcrumb is not None else self.breadcrumb,
            selection=frozenset(k for k in self.selection if k in present),
            loading=False,
            loaded=True,
            error=None,
        )

    def with_error(self, message: str) -> ViewState:
        return replace(self, loading=False, error=message)

    def navigate(self, folder_id: Optional[str]) -> ViewState:
        """Enter another folder: selection, search and menu are reset."""
        return replace(
            self,
            folder_id=folder_id,
            selection=frozenset(),
            search_query="",
            context_menu=None,
            loaded=False,
        )

    # ----------------------------
    # Selection
    # ----------------------------
    def toggle_selection(self, kind: ItemKind, item_id: str) -> ViewState:
        key = (kind, item_id)
        if key in self.selection:
            return replace(self, selection=self.selection - {key})
        return replace(self, selection=self.selection | {key})

    def select_all(self) -> ViewState:
        return replace(self, selection=frozenset(item_key(i) for i in self.items))

    def clear_selection(self) -> ViewState:
        return replace(self, selection=frozenset())

    # ----------------------------
    # Search / presentation
    # ----------------------------
    def with_search(self, query: str) -> ViewState:
        return replace(self, search_query=query.strip(), selection=frozenset())

    def with_view_mode(self, mode: ViewMode) -> ViewState:
        return replace(self, view_mode=ViewMode(mode))

    def open_context_menu(self, item: Item, x: int, y: int) -> ViewState:
        return replace(self, context_menu=ContextMenu(kind=item.kind, item_id=item.id, x=x, y=y))

    def close_context_menu(self) -> ViewState:
        if self.context_menu is None:
            return self
        return replace(self, context_menu=None)

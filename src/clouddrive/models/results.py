"""Result models for batch operations (multi-upload, bulk restore)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from .entities import Item, ItemKind

OutcomeStatus = Literal["success", "failed"]


@dataclass(slots=True)
class ItemOutcome:
    """Result for a single item of a batch."""

    index: int
    kind: ItemKind
    label: str
    status: OutcomeStatus

    item: Optional[Item] = None

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class BatchResult:
    """
    Aggregate result of a batch that is never all-or-nothing.

    Failed items do not roll back succeeded ones; callers report the two
    counts independently.
    """

    outcomes: list[ItemOutcome]

    summary: dict[str, int] = field(default_factory=dict)
    refreshed: bool = False

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "success")

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")

    @property
    def items(self) -> list[Item]:
        return [o.item for o in self.outcomes if o.status == "success" and o.item is not None]

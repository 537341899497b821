"""Per-view feature sets."""

from __future__ import annotations

from dataclasses import dataclass, fields

from clouddrive.errors import InvalidArgumentError, InvalidStateError


@dataclass(slots=True, frozen=True)
class ViewCapabilities:
    """Actions a view offers. Anything not granted is refused by its controller."""

    can_upload: bool = False
    can_create_folder: bool = False
    can_download: bool = False
    can_rename: bool = False
    can_move: bool = False
    can_copy: bool = False
    can_star: bool = False
    can_delete: bool = False
    can_restore: bool = False
    can_permanent_delete: bool = False
    can_show_info: bool = False

    def allows(self, action: str) -> bool:
        attr = f"can_{action}"
        if attr not in _CAPABILITY_NAMES:
            raise InvalidArgumentError("Unknown action", details={"action": action})
        return bool(getattr(self, attr))

    def require(self, action: str) -> None:
        """Raise InvalidStateError if the view does not offer action."""
        if not self.allows(action):
            raise InvalidStateError(
                f"Action '{action}' is not available in this view",
                details={"action": action},
            )

    def granted(self) -> frozenset[str]:
        return frozenset(
            name[len("can_"):] for name in _CAPABILITY_NAMES if getattr(self, name)
        )


_CAPABILITY_NAMES: frozenset[str] = frozenset(f.name for f in fields(ViewCapabilities))


DRIVE_VIEW = ViewCapabilities(
    can_upload=True,
    can_create_folder=True,
    can_download=True,
    can_rename=True,
    can_move=True,
    can_copy=True,
    can_star=True,
    can_delete=True,
    can_show_info=True,
)

STARRED_VIEW = ViewCapabilities(
    can_create_folder=True,
    can_download=True,
    can_rename=True,
    can_star=True,
    can_delete=True,
)

# Trashed files are not downloadable: the service only issues tickets for active files.
TRASH_VIEW = ViewCapabilities(
    can_restore=True,
    can_permanent_delete=True,
)

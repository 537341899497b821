"""FastAPI dependencies of the local service."""

from typing import Optional

from fastapi import Header, Query, Request

from clouddrive.controller.routes import OWNER_HEADER
from clouddrive.errors import AuthError
from clouddrive.store import DriveStore


def get_store(request: Request) -> DriveStore:
    return request.app.state.store


def get_owner_id(owner_id: Optional[str] = Header(None, alias=OWNER_HEADER)) -> str:
    """The caller's id; the session layer in front of the service is not modelled."""
    if not owner_id:
        raise AuthError("Missing owner header", details={"header": OWNER_HEADER})
    return owner_id


class Paging:
    """page/limit/search query parameters shared by every listing."""

    def __init__(
        self,
        page: int = Query(1),
        limit: int = Query(20),
        search: Optional[str] = Query(None),
    ) -> None:
        self.page = page
        self.limit = limit
        self.search = search or None

"""Signed download URLs; the token stands in for the owner header."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from clouddrive.store import DriveStore

from ..deps import get_store

router = APIRouter(prefix="/downloads", tags=["downloads"])


@router.get("/{file_id}")
async def download_content(
    file_id: str,
    token: str = Query(""),
    store: DriveStore = Depends(get_store),
) -> Response:
    content = store.redeem_download(file_id, token)
    return Response(content=content, media_type="application/octet-stream")

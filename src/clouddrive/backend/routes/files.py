"""/files routes."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse

from clouddrive.models import ItemKind
from clouddrive.models.codec import file_to_dict, item_to_dict, pagination_to_dict
from clouddrive.store import DriveStore

from ..deps import Paging, get_owner_id, get_store
from ..responses import ok
from .items import build_item_router, build_projection_router

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload", status_code=201)
async def upload_file(
    file: UploadFile = File(...),
    folder_id: Optional[str] = Form(None, alias="folderId"),
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    content = await file.read()
    created = store.upload_file(
        owner_id,
        file.filename,
        content,
        mime_type=file.content_type,
        folder_id=folder_id or None,
    )
    return ok({"file": file_to_dict(created)}, status_code=201)


@router.get("")
async def list_files(
    folder_id: Optional[str] = Query(None, alias="folderId"),
    paging: Paging = Depends(),
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    page = store.list_files(
        owner_id,
        folder_id or None,
        page=paging.page,
        limit=paging.limit,
        search=paging.search,
    )
    return ok({
        "files": [file_to_dict(f) for f in page.items],
        "pagination": pagination_to_dict(page.pagination),
    })


router.include_router(build_projection_router(ItemKind.FILE, "files"))


@router.get("/{file_id}")
async def get_file(
    file_id: str,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    return ok({"file": item_to_dict(store.get(owner_id, ItemKind.FILE, file_id))})


@router.get("/{file_id}/download")
async def get_download(
    file_id: str,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    ticket = store.download(owner_id, file_id)
    return ok({"downloadUrl": ticket.download_url, "fileName": ticket.file_name})


router.include_router(build_item_router(ItemKind.FILE))

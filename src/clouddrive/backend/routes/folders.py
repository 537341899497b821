"""/folders routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from clouddrive.models import ItemKind
from clouddrive.models.codec import (
    breadcrumb_to_dict,
    file_to_dict,
    folder_to_dict,
    pagination_to_dict,
    stats_to_dict,
)
from clouddrive.store import DriveStore

from ..deps import Paging, get_owner_id, get_store
from ..responses import ok
from ..schemas import CreateFolderBody
from .items import build_item_router, build_projection_router

router = APIRouter(prefix="/folders", tags=["folders"])


@router.post("", status_code=201)
async def create_folder(
    body: CreateFolderBody,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    created = store.create_folder(owner_id, body.name, body.parent_id or None)
    return ok({"folder": folder_to_dict(created)}, status_code=201)


@router.get("")
async def list_folders(
    parent_id: Optional[str] = Query(None, alias="parentId"),
    paging: Paging = Depends(),
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    page = store.list_folders(
        owner_id,
        parent_id or None,
        page=paging.page,
        limit=paging.limit,
        search=paging.search,
    )
    return ok({
        "folders": [folder_to_dict(f) for f in page.items],
        "pagination": pagination_to_dict(page.pagination),
    })


router.include_router(build_projection_router(ItemKind.FOLDER, "folders"))


@router.get("/breadcrumb/{folder_id}")
async def breadcrumb(
    folder_id: str,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    crumbs = store.breadcrumb(owner_id, folder_id)
    return ok({"breadcrumb": [breadcrumb_to_dict(c) for c in crumbs]})


@router.get("/{folder_id}")
async def get_folder(
    folder_id: str,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    details = store.get_folder_details(owner_id, folder_id)
    return ok({
        "folder": folder_to_dict(details.folder),
        "contents": {
            "folders": [folder_to_dict(f) for f in details.folders],
            "files": [file_to_dict(f) for f in details.files],
        },
    })


@router.get("/{folder_id}/stats")
async def folder_stats(
    folder_id: str,
    owner_id: str = Depends(get_owner_id),
    store: DriveStore = Depends(get_store),
) -> JSONResponse:
    return ok(stats_to_dict(store.folder_stats(owner_id, folder_id)))


router.include_router(build_item_router(ItemKind.FOLDER))

"""Item actions shared by /files and /folders."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clouddrive.models import ItemKind
from clouddrive.models.codec import item_to_dict, pagination_to_dict
from clouddrive.store import DriveStore

from ..deps import Paging, get_owner_id, get_store
from ..responses import ok
from ..schemas import NameBody, TargetBody


def build_projection_router(kind: ItemKind, key: str) -> APIRouter:
    """GET /starred and GET /trash for one kind."""
    router = APIRouter()

    @router.get("/starred")
    async def list_starred(
        paging: Paging = Depends(),
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        page = store.list_starred(owner_id, kind, page=paging.page, limit=paging.limit, search=paging.search)
        return ok({
            key: [item_to_dict(i) for i in page.items],
            "pagination": pagination_to_dict(page.pagination),
        })

    @router.get("/trash")
    async def list_trash(
        paging: Paging = Depends(),
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        page = store.list_trash(owner_id, kind, page=paging.page, limit=paging.limit, search=paging.search)
        return ok({
            key: [item_to_dict(i) for i in page.items],
            "pagination": pagination_to_dict(page.pagination),
        })

    return router


def build_item_router(kind: ItemKind) -> APIRouter:
    """Rename, move, copy, star, delete, restore and permanent delete for one kind."""
    router = APIRouter()
    key = kind.value

    @router.put("/{item_id}/rename")
    async def rename(
        item_id: str,
        body: NameBody,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({key: item_to_dict(store.rename(owner_id, kind, item_id, body.name))})

    @router.put("/{item_id}/move")
    async def move(
        item_id: str,
        body: TargetBody,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({key: item_to_dict(store.move(owner_id, kind, item_id, body.target(kind)))})

    @router.post("/{item_id}/copy", status_code=201)
    async def copy(
        item_id: str,
        body: TargetBody,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        copied = store.copy(owner_id, kind, item_id, body.target(kind), new_name=body.name or None)
        return ok({key: item_to_dict(copied)}, status_code=201)

    @router.put("/{item_id}/star")
    async def toggle_star(
        item_id: str,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({key: item_to_dict(store.toggle_star(owner_id, kind, item_id))})

    @router.put("/{item_id}/restore")
    async def restore(
        item_id: str,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({key: item_to_dict(store.restore(owner_id, kind, item_id))})

    @router.delete("/{item_id}/permanent")
    async def permanent_delete(
        item_id: str,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({"deleted": store.permanent_delete(owner_id, kind, item_id)})

    @router.delete("/{item_id}")
    async def delete(
        item_id: str,
        owner_id: str = Depends(get_owner_id),
        store: DriveStore = Depends(get_store),
    ) -> JSONResponse:
        return ok({key: item_to_dict(store.delete(owner_id, kind, item_id))})

    return router

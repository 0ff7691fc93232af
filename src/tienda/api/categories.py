"""Category API routes."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.api.deps import get_cache, get_channels
from tienda.api.pagination import link_header
from tienda.api.products import SORT_DIRECTION
from tienda.auth.dependencies import require_admin
from tienda.cache import Cache
from tienda.config import settings
from tienda.db.engine import get_db
from tienda.realtime.channels import ChannelRegistry
from tienda.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from tienda.schemas.page import PageResponse
from tienda.services.category_service import CategoryService

router = APIRouter(prefix="/categories")


def _svc(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    channels: ChannelRegistry = Depends(get_channels),
) -> CategoryService:
    return CategoryService(db, cache, channels)


@router.get("", response_model=PageResponse[CategoryRead])
async def list_categories(
    request: Request,
    response: Response,
    name: Optional[str] = None,
    is_deleted: Optional[bool] = None,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = "name",
    direction: str = Query("asc", pattern=SORT_DIRECTION),
    svc: CategoryService = Depends(_svc),
):
    result = await svc.find_all(
        name=name,
        is_deleted=is_deleted,
        page=page,
        size=size,
        sort_by=sort_by,
        direction=direction,
    )
    response.headers["link"] = link_header(request, result)
    return result


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: uuid.UUID, svc: CategoryService = Depends(_svc)):
    return await svc.get(category_id)


@router.post("", response_model=CategoryRead, dependencies=[Depends(require_admin)])
async def create_category(body: CategoryCreate, svc: CategoryService = Depends(_svc)):
    return await svc.create(body)


@router.put(
    "/{category_id}", response_model=CategoryRead, dependencies=[Depends(require_admin)]
)
async def update_category(
    category_id: uuid.UUID,
    body: CategoryUpdate,
    svc: CategoryService = Depends(_svc),
):
    return await svc.update(category_id, body)


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_category(category_id: uuid.UUID, svc: CategoryService = Depends(_svc)):
    """Delete a category. Refused with 409 while products or suppliers use it."""
    await svc.delete(category_id)
    return Response(status_code=204)

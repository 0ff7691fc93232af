"""Product API routes.

Reads need the USER role (applied when the router is mounted);
writes additionally need ADMIN.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.api.deps import get_cache, get_channels
from tienda.api.pagination import link_header
from tienda.auth.dependencies import require_admin
from tienda.cache import Cache
from tienda.config import settings
from tienda.db.engine import get_db
from tienda.realtime.channels import ChannelRegistry
from tienda.schemas.page import PageResponse
from tienda.schemas.product import ProductCreate, ProductRead, ProductUpdate
from tienda.services.product_service import ProductService

router = APIRouter(prefix="/products")

SORT_DIRECTION = r"^(asc|desc|ASC|DESC)$"


def _svc(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    channels: ChannelRegistry = Depends(get_channels),
) -> ProductService:
    return ProductService(db, cache, channels)


@router.get("", response_model=PageResponse[ProductRead])
async def list_products(
    request: Request,
    response: Response,
    name: Optional[str] = None,
    category: Optional[str] = None,
    max_price: Optional[float] = Query(None, ge=0),
    max_stock: Optional[int] = Query(None, ge=0),
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = "id",
    direction: str = Query("asc", pattern=SORT_DIRECTION),
    svc: ProductService = Depends(_svc),
):
    result = await svc.find_all(
        name=name,
        category=category,
        max_price=max_price,
        max_stock=max_stock,
        page=page,
        size=size,
        sort_by=sort_by,
        direction=direction,
    )
    response.headers["link"] = link_header(request, result)
    return result


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: uuid.UUID, svc: ProductService = Depends(_svc)):
    return await svc.get(product_id)


@router.post("", response_model=ProductRead, dependencies=[Depends(require_admin)])
async def create_product(body: ProductCreate, svc: ProductService = Depends(_svc)):
    return await svc.create(body)


@router.put(
    "/{product_id}", response_model=ProductRead, dependencies=[Depends(require_admin)]
)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    svc: ProductService = Depends(_svc),
):
    return await svc.update(product_id, body)


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_product(product_id: uuid.UUID, svc: ProductService = Depends(_svc)):
    await svc.delete(product_id)
    return Response(status_code=204)

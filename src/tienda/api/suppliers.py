"""Supplier API routes."""

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
from tienda.schemas.page import PageResponse
from tienda.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from tienda.services.supplier_service import SupplierService

router = APIRouter(prefix="/suppliers")


def _svc(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    channels: ChannelRegistry = Depends(get_channels),
) -> SupplierService:
    return SupplierService(db, cache, channels)


@router.get("", response_model=PageResponse[SupplierRead])
async def list_suppliers(
    request: Request,
    response: Response,
    name: Optional[str] = None,
    address: Optional[str] = None,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = "name",
    direction: str = Query("asc", pattern=SORT_DIRECTION),
    svc: SupplierService = Depends(_svc),
):
    result = await svc.find_all(
        name=name,
        address=address,
        page=page,
        size=size,
        sort_by=sort_by,
        direction=direction,
    )
    response.headers["link"] = link_header(request, result)
    return result


@router.get("/{supplier_id}", response_model=SupplierRead)
async def get_supplier(supplier_id: uuid.UUID, svc: SupplierService = Depends(_svc)):
    return await svc.get(supplier_id)


@router.post("", response_model=SupplierRead, dependencies=[Depends(require_admin)])
async def create_supplier(body: SupplierCreate, svc: SupplierService = Depends(_svc)):
    return await svc.create(body)


@router.put(
    "/{supplier_id}", response_model=SupplierRead, dependencies=[Depends(require_admin)]
)
async def update_supplier(
    supplier_id: uuid.UUID,
    body: SupplierUpdate,
    svc: SupplierService = Depends(_svc),
):
    return await svc.update(supplier_id, body)


@router.delete("/{supplier_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_supplier(supplier_id: uuid.UUID, svc: SupplierService = Depends(_svc)):
    await svc.delete(supplier_id)
    return Response(status_code=204)

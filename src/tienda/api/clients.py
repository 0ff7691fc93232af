"""Client API routes.

Listing hides soft-deleted clients unless is_deleted=true is asked for.
"""

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
from tienda.schemas.client import ClientCreate, ClientRead, ClientUpdate
from tienda.schemas.page import PageResponse
from tienda.services.client_service import ClientService

router = APIRouter(prefix="/clients")


def _svc(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    channels: ChannelRegistry = Depends(get_channels),
) -> ClientService:
    return ClientService(db, cache, channels)


@router.get("", response_model=PageResponse[ClientRead])
async def list_clients(
    request: Request,
    response: Response,
    username: Optional[str] = None,
    is_deleted: bool = False,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = "id",
    direction: str = Query("asc", pattern=SORT_DIRECTION),
    svc: ClientService = Depends(_svc),
):
    result = await svc.find_all(
        username=username,
        is_deleted=is_deleted,
        page=page,
        size=size,
        sort_by=sort_by,
        direction=direction,
    )
    response.headers["link"] = link_header(request, result)
    return result


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(client_id: int, svc: ClientService = Depends(_svc)):
    return await svc.get(client_id)


@router.post("", response_model=ClientRead, dependencies=[Depends(require_admin)])
async def create_client(body: ClientCreate, svc: ClientService = Depends(_svc)):
    return await svc.create(body)


@router.put("/{client_id}", response_model=ClientRead, dependencies=[Depends(require_admin)])
async def update_client(
    client_id: int,
    body: ClientUpdate,
    svc: ClientService = Depends(_svc),
):
    return await svc.update(client_id, body)


@router.delete("/{client_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_client(client_id: int, svc: ClientService = Depends(_svc)):
    await svc.delete(client_id)
    return Response(status_code=204)

"""Employee API routes."""

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
from tienda.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from tienda.schemas.page import PageResponse
from tienda.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees")


def _svc(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    channels: ChannelRegistry = Depends(get_channels),
) -> EmployeeService:
    return EmployeeService(db, cache, channels)


@router.get("", response_model=PageResponse[EmployeeRead])
async def list_employees(
    request: Request,
    response: Response,
    name: Optional[str] = None,
    position: Optional[str] = None,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = "id",
    direction: str = Query("asc", pattern=SORT_DIRECTION),
    svc: EmployeeService = Depends(_svc),
):
    result = await svc.find_all(
        name=name,
        position=position,
        page=page,
        size=size,
        sort_by=sort_by,
        direction=direction,
    )
    response.headers["link"] = link_header(request, result)
    return result


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(employee_id: int, svc: EmployeeService = Depends(_svc)):
    return await svc.get(employee_id)


@router.post("", response_model=EmployeeRead, dependencies=[Depends(require_admin)])
async def create_employee(body: EmployeeCreate, svc: EmployeeService = Depends(_svc)):
    return await svc.create(body)


@router.put(
    "/{employee_id}", response_model=EmployeeRead, dependencies=[Depends(require_admin)]
)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    svc: EmployeeService = Depends(_svc),
):
    return await svc.update(employee_id, body)


@router.delete("/{employee_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_employee(employee_id: int, svc: EmployeeService = Depends(_svc)):
    await svc.delete(employee_id)
    return Response(status_code=204)

"""Employee service."""

from typing import Optional

from tienda.db.models import Employee
from tienda.realtime.notifications import EMPLOYEE
from tienda.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from tienda.schemas.page import PageResponse
from tienda.services.base import EntityService, like


class EmployeeService(EntityService):
    entity = EMPLOYEE
    namespace = "employees"
    model = Employee
    read_schema = EmployeeRead
    sort_fields = ("id", "name", "salary", "position", "created_at", "updated_at")

    async def find_all(
        self,
        name: Optional[str] = None,
        position: Optional[str] = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: str = "asc",
    ) -> PageResponse:
        query = self.base_query()
        if like(name):
            query = query.where(Employee.name.ilike(like(name)))
        if like(position):
            query = query.where(Employee.position.ilike(like(position)))
        return await self.paginate(query, page, size, sort_by, direction)

    async def create(self, body: EmployeeCreate) -> EmployeeRead:
        return await self._finish_create(Employee(**body.model_dump()))

    async def update(self, employee_id: int, body: EmployeeUpdate) -> EmployeeRead:
        employee = await self._load(employee_id)
        self._apply(employee, body.model_dump(exclude_unset=True, exclude_none=True))
        return await self._finish_update(employee)

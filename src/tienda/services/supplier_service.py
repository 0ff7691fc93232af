"""Supplier service — vendors, each serving one category."""

from typing import Optional

from tienda.db.models import Category, Supplier
from tienda.errors import NotFoundError
from tienda.realtime.notifications import CATEGORY, SUPPLIERS
from tienda.schemas.page import PageResponse
from tienda.schemas.supplier import SupplierCreate, SupplierRead, SupplierUpdate
from tienda.services.base import EntityService, like


class SupplierService(EntityService):
    entity = SUPPLIERS
    namespace = "suppliers"
    model = Supplier
    read_schema = SupplierRead
    sort_fields = ("id", "name", "contact", "address", "date_of_hire")

    async def find_all(
        self,
        name: Optional[str] = None,
        address: Optional[str] = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "name",
        direction: str = "asc",
    ) -> PageResponse:
        query = self.base_query()
        if like(name):
            query = query.where(Supplier.name.ilike(like(name)))
        if like(address):
            query = query.where(Supplier.address.ilike(like(address)))
        return await self.paginate(query, page, size, sort_by, direction)

    async def create(self, body: SupplierCreate) -> SupplierRead:
        category = await self._category(body.category_id)
        supplier = Supplier(
            name=body.name,
            contact=body.contact,
            address=body.address,
            category=category,
        )
        return await self._finish_create(supplier)

    async def update(self, supplier_id, body: SupplierUpdate) -> SupplierRead:
        supplier = await self._load(supplier_id)
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        category_id = changes.pop("category_id", None)
        if category_id is not None:
            supplier.category = await self._category(category_id)
        self._apply(supplier, changes)
        return await self._finish_update(supplier)

    async def _category(self, category_id) -> Category:
        category = await self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError(CATEGORY, category_id)
        return category

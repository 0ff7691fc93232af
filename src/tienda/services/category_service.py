"""Category service — product families shared by products and suppliers."""

from typing import Optional

from sqlalchemy import func, select

from tienda.db.models import Category, Product, Supplier
from tienda.errors import ConflictError
from tienda.realtime.notifications import CATEGORY
from tienda.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from tienda.schemas.page import PageResponse
from tienda.services.base import EntityService, like


class CategoryService(EntityService):
    entity = CATEGORY
    namespace = "categories"
    model = Category
    read_schema = CategoryRead
    sort_fields = ("id", "name", "created_at", "updated_at")

    async def find_all(
        self,
        name: Optional[str] = None,
        is_deleted: Optional[bool] = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "name",
        direction: str = "asc",
    ) -> PageResponse:
        query = self.base_query()
        if like(name):
            query = query.where(Category.name.ilike(like(name)))
        if is_deleted is not None:
            query = query.where(Category.is_deleted == is_deleted)
        return await self.paginate(query, page, size, sort_by, direction)

    async def create(self, body: CategoryCreate) -> CategoryRead:
        name = body.name.upper()
        await self._ensure_name_free(name)
        return await self._finish_create(Category(name=name))

    async def update(self, category_id, body: CategoryUpdate) -> CategoryRead:
        category = await self._load(category_id)
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].upper()
            if changes["name"] != category.name:
                await self._ensure_name_free(changes["name"])
        self._apply(category, changes)
        return await self._finish_update(category)

    async def _ensure_name_free(self, name: str) -> None:
        result = await self.db.execute(select(Category.id).where(Category.name == name))
        if result.first() is not None:
            raise ConflictError(f"Category with name {name} already exists")

    async def _evict_related(self, category: Category) -> None:
        """Drop cached products and suppliers that embed this category."""
        for model, namespace in ((Product, "products"), (Supplier, "suppliers")):
            ids = (
                await self.db.execute(select(model.id).where(model.category_id == category.id))
            ).scalars().all()
            for entity_id in ids:
                await self.cache.evict(namespace, str(entity_id))

    async def _check_deletable(self, category: Category) -> None:
        for model, label in ((Product, "products"), (Supplier, "suppliers")):
            count = (
                await self.db.execute(
                    select(func.count()).select_from(model).where(
                        model.category_id == category.id
                    )
                )
            ).scalar_one()
            if count:
                raise ConflictError(
                    f"Category {category.name} still has {count} {label}; "
                    "mark it deleted instead"
                )

"""Product service — catalog items, each filed under one category.

A product can only point at an existing category; an unknown
category_id fails the write before anything is committed, so no
notification goes out.
"""

from typing import Optional

from tienda.db.models import Category, Product
from tienda.errors import NotFoundError
from tienda.realtime.notifications import CATEGORY, PRODUCT
from tienda.schemas.page import PageResponse
from tienda.schemas.product import ProductCreate, ProductRead, ProductUpdate
from tienda.services.base import EntityService, like


class ProductService(EntityService):
    entity = PRODUCT
    namespace = "products"
    model = Product
    read_schema = ProductRead
    sort_fields = ("id", "name", "price", "stock", "weight", "created_at", "updated_at")

    async def find_all(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        max_price: Optional[float] = None,
        max_stock: Optional[int] = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: str = "asc",
    ) -> PageResponse:
        query = self.base_query()
        if like(name):
            query = query.where(Product.name.ilike(like(name)))
        if like(category):
            query = query.join(Product.category).where(Category.name.ilike(like(category)))
        if max_price is not None:
            query = query.where(Product.price <= max_price)
        if max_stock is not None:
            query = query.where(Product.stock <= max_stock)
        return await self.paginate(query, page, size, sort_by, direction)

    async def create(self, body: ProductCreate) -> ProductRead:
        category = await self._category(body.category_id)
        product = Product(
            **body.model_dump(exclude={"category_id"}),
            category=category,
        )
        return await self._finish_create(product)

    async def update(self, product_id, body: ProductUpdate) -> ProductRead:
        product = await self._load(product_id)
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        category_id = changes.pop("category_id", None)
        if category_id is not None:
            product.category = await self._category(category_id)
        self._apply(product, changes)
        return await self._finish_update(product)

    async def _category(self, category_id) -> Category:
        category = await self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError(CATEGORY, category_id)
        return category

"""Entity service base — shared CRUD plumbing for every collection.

Service layer separates business logic from HTTP routing: routers call
services, services call the database, the cache and the channel.

Every write follows the same order:
1. Mutate rows and commit (errors propagate, nothing else happens)
2. Update the cache (put on create/update, evict on delete, plus any
   cached rows that embed the changed one)
3. Broadcast one Notification on the entity's channel

So a subscriber never hears about a change that did not commit.
"""

import math
from typing import Any, ClassVar, Optional

import structlog
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.cache import Cache
from tienda.errors import BadRequestError, ConflictError, NotFoundError
from tienda.realtime.channels import ChannelRegistry
from tienda.realtime.notifications import Notification, NotificationType
from tienda.schemas.page import PageResponse

logger = structlog.get_logger()


class EntityService:
    """CRUD orchestration for one entity type.

    Subclasses set the class attributes and add their own create/update
    rules and list filters.
    """

    entity: ClassVar[str]  # channel tag, e.g. "Product"
    namespace: ClassVar[str]  # cache namespace, e.g. "products"
    model: ClassVar[type]
    read_schema: ClassVar[type[BaseModel]]
    sort_fields: ClassVar[tuple[str, ...]] = ("id",)

    def __init__(self, db: AsyncSession, cache: Cache, channels: ChannelRegistry):
        self.db = db
        self.cache = cache
        self.channel = channels.get(self.entity)

    # ─── Reads ──────────────────────────────────────────

    async def _load(self, entity_id: Any):
        row = await self.db.get(self.model, entity_id)
        if row is None:
            raise NotFoundError(self.entity, entity_id)
        return row

    async def get(self, entity_id: Any) -> BaseModel:
        """Lookup by id, read-through the cache."""
        key = str(entity_id)
        cached = await self.cache.get(self.namespace, key)
        if cached is not None:
            return self.read_schema.model_validate(cached)

        dto = self.to_read(await self._load(entity_id))
        await self.cache.put(self.namespace, key, self._snapshot(dto))
        return dto

    async def paginate(
        self,
        query: Select,
        page: int,
        size: int,
        sort_by: str,
        direction: str,
    ) -> PageResponse:
        if sort_by not in self.sort_fields:
            raise BadRequestError(
                f"Cannot sort {self.namespace} by {sort_by!r}; "
                f"allowed: {', '.join(self.sort_fields)}"
            )
        column = getattr(self.model, sort_by)
        order = column.desc() if direction.lower() == "desc" else column.asc()

        total = (
            await self.db.execute(select(func.count()).select_from(query.subquery()))
        ).scalar_one()

        result = await self.db.execute(
            query.order_by(order).offset(page * size).limit(size)
        )
        rows = list(result.scalars().all())

        return PageResponse[self.read_schema](
            content=[self.to_read(row) for row in rows],
            total_pages=math.ceil(total / size) if size else 0,
            total_elements=total,
            page_size=size,
            page_number=page,
            total_page_elements=len(rows),
            sort_by=sort_by,
            direction=direction.lower(),
        )

    def base_query(self) -> Select:
        return select(self.model)

    # ─── Writes ─────────────────────────────────────────

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError(f"{self.entity} violates a uniqueness or reference rule") from e

    async def _finish_create(self, row) -> BaseModel:
        self.db.add(row)
        await self._commit()
        dto = self.to_read(row)
        await self.cache.put(self.namespace, str(row.id), self._snapshot(dto))
        logger.info(f"{self.namespace}.created", id=str(row.id))
        await self._publish(NotificationType.CREATE, dto)
        return dto

    async def _finish_update(self, row) -> BaseModel:
        await self._commit()
        dto = self.to_read(row)
        await self.cache.put(self.namespace, str(row.id), self._snapshot(dto))
        await self._evict_related(row)
        logger.info(f"{self.namespace}.updated", id=str(row.id))
        await self._publish(NotificationType.UPDATE, dto)
        return dto

    async def delete(self, entity_id: Any) -> None:
        row = await self._load(entity_id)
        await self._check_deletable(row)
        dto = self.to_read(row)

        await self.db.delete(row)
        await self._commit()
        await self.cache.evict(self.namespace, str(entity_id))
        logger.info(f"{self.namespace}.deleted", id=str(entity_id))
        await self._publish(NotificationType.DELETE, dto)

    async def _check_deletable(self, row) -> None:
        """Hook for subclasses that refuse deletes (e.g. rows still referenced)."""

    async def _evict_related(self, row) -> None:
        """Hook for subclasses whose rows are embedded in other cached DTOs."""

    @staticmethod
    def _apply(row, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(row, field, value)

    # ─── Mapping + notification ─────────────────────────

    def to_read(self, row) -> BaseModel:
        return self.read_schema.model_validate(row)

    @staticmethod
    def _snapshot(dto: BaseModel) -> dict[str, Any]:
        return dto.model_dump(mode="json")

    async def _publish(self, op: NotificationType, dto: BaseModel) -> None:
        message = Notification(entity=self.entity, type=op, data=self._snapshot(dto))
        delivered = await self.channel.broadcast(message)
        logger.debug(
            "channel.broadcast",
            channel=self.entity,
            type=op.value,
            delivered=delivered,
        )


def like(value: Optional[str]) -> Optional[str]:
    """Case-insensitive 'contains' pattern, or None when no filter."""
    if not value:
        return None
    return f"%{value}%"

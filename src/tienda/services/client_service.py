"""Client service — store customers.

Usernames and emails are unique across clients; a clash is a 409
before anything is written.
"""

from typing import Optional

from sqlalchemy import or_, select

from tienda.db.models import Client
from tienda.errors import ConflictError
from tienda.realtime.notifications import CLIENT
from tienda.schemas.client import ClientCreate, ClientRead, ClientUpdate
from tienda.schemas.page import PageResponse
from tienda.services.base import EntityService, like


class ClientService(EntityService):
    entity = CLIENT
    namespace = "clients"
    model = Client
    read_schema = ClientRead
    sort_fields = ("id", "username", "full_name", "email", "created_at", "updated_at")

    async def find_all(
        self,
        username: Optional[str] = None,
        is_deleted: Optional[bool] = False,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: str = "asc",
    ) -> PageResponse:
        query = self.base_query()
        if like(username):
            query = query.where(Client.username.ilike(like(username)))
        if is_deleted is not None:
            query = query.where(Client.is_deleted == is_deleted)
        return await self.paginate(query, page, size, sort_by, direction)

    async def create(self, body: ClientCreate) -> ClientRead:
        await self._ensure_unique(body.username, body.email)
        return await self._finish_create(Client(**body.model_dump()))

    async def update(self, client_id: int, body: ClientUpdate) -> ClientRead:
        client = await self._load(client_id)
        changes = body.model_dump(exclude_unset=True, exclude_none=True)
        await self._ensure_unique(
            changes.get("username"), changes.get("email"), exclude_id=client.id
        )
        self._apply(client, changes)
        return await self._finish_update(client)

    async def _ensure_unique(
        self,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> None:
        clauses = []
        if username:
            clauses.append(Client.username == username)
        if email:
            clauses.append(Client.email == email)
        if not clauses:
            return
        query = select(Client.id).where(or_(*clauses))
        if exclude_id is not None:
            query = query.where(Client.id != exclude_id)
        if (await self.db.execute(query)).first() is not None:
            raise ConflictError("A client with that username or email already exists")

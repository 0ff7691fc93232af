"""Test fixtures — a fresh in-memory database and fresh app state per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite in-memory engine (StaticPool keeps the
   single connection alive) with the full schema created up front.
2. The app's get_db dependency is overridden to hand out that session.
3. app.state.channels and app.state.cache are replaced per test, so
   subscribers and cached entries never leak between tests.
4. Identity is overridden so routes run without real JWTs; auth tests
   use the unauthenticated client with real tokens instead.
"""

import asyncio
import json
import os

os.environ.setdefault("TIENDA_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tienda.auth.dependencies import CurrentIdentity, get_current_user
from tienda.cache import MemoryCache
from tienda.db.engine import get_db
from tienda.db.models import Base
from tienda.main import app
from tienda.realtime.channels import build_channels

TEST_DB_URL = "sqlite+aiosqlite://"


class FakeConnection:
    """Stand-in for a WebSocket: records frames, can fail or stall on send."""

    def __init__(self, name: str = "conn", fail: bool = False, delay: float = 0.0):
        self.name = name
        self.fail = fail
        self.delay = delay
        self.sent: list[str] = []
        self.closed = False

    async def send_text(self, data: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError(f"{self.name}: connection closed")
        self.sent.append(data)

    async def close(self) -> None:
        self.closed = True

    def messages(self) -> list[dict]:
        return [json.loads(frame) for frame in self.sent]

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


@pytest.fixture
def make_connection():
    """Factory for FakeConnection instances."""
    return FakeConnection


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand-new in-memory database."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
    await engine.dispose()


@pytest.fixture
def channels():
    """Fresh channel registry installed on the app for this test."""
    registry = build_channels(send_timeout=0.5)
    previous = app.state.channels
    app.state.channels = registry
    yield registry
    app.state.channels = previous


@pytest.fixture
def cache():
    """Fresh in-memory cache installed on the app for this test."""
    store = MemoryCache(ttl_seconds=60)
    previous = app.state.cache
    app.state.cache = store
    yield store
    app.state.cache = previous


def _identity(*roles: str):
    def override_get_current_user():
        return CurrentIdentity(user_id=1, username="tester", roles=list(roles))

    return override_get_current_user


async def _client_with(db_session, identity_override=None):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    if identity_override is not None:
        app.dependency_overrides[get_current_user] = identity_override

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture()
async def client(db_session, channels, cache):
    """HTTP client acting as an ADMIN (full read/write access)."""
    async with await _client_with(db_session, _identity("USER", "ADMIN")) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def user_client(db_session, channels, cache):
    """HTTP client acting as a plain USER (read-only)."""
    async with await _client_with(db_session, _identity("USER")) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauthenticated_client(db_session, channels, cache):
    """HTTP client WITHOUT identity override — exercises real JWT handling."""
    async with await _client_with(db_session) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def category(client):
    """A category every catalog test can file products under."""
    resp = await client.post("/api/v1/categories", json={"name": "portatiles"})
    assert resp.status_code == 200
    return resp.json()

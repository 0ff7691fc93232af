"""Entity cache tests — in-memory backend and backend selection."""

import pytest

from tienda.cache import MemoryCache, RedisCache, build_cache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_put_then_get_returns_copy():
    cache = MemoryCache(ttl_seconds=60)
    value = {"id": "1", "name": "Producto A"}
    await cache.put("products", "1", value)

    hit = await cache.get("products", "1")
    assert hit == value

    hit["name"] = "mutated"
    assert (await cache.get("products", "1"))["name"] == "Producto A"


@pytest.mark.asyncio
async def test_namespaces_are_isolated():
    cache = MemoryCache()
    await cache.put("products", "1", {"kind": "product"})
    await cache.put("clients", "1", {"kind": "client"})

    assert (await cache.get("products", "1"))["kind"] == "product"
    assert (await cache.get("clients", "1"))["kind"] == "client"


@pytest.mark.asyncio
async def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = MemoryCache(ttl_seconds=10, clock=clock)
    await cache.put("products", "1", {"id": "1"})

    clock.now += 9
    assert await cache.get("products", "1") is not None

    clock.now += 2
    assert await cache.get("products", "1") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_put_sweeps_expired_entries_never_read_again():
    clock = FakeClock()
    cache = MemoryCache(ttl_seconds=10, clock=clock)
    for i in range(5):
        await cache.put("products", str(i), {"id": str(i)})

    clock.now += 11
    await cache.put("clients", "1", {"id": 1})

    assert len(cache) == 1
    assert await cache.get("clients", "1") == {"id": 1}


@pytest.mark.asyncio
async def test_evict_removes_and_is_idempotent():
    cache = MemoryCache()
    await cache.put("products", "1", {"id": "1"})

    await cache.evict("products", "1")
    await cache.evict("products", "1")

    assert await cache.get("products", "1") is None


def test_build_cache_selects_backend():
    assert isinstance(build_cache("memory", ttl_seconds=5), MemoryCache)
    redis_cache = build_cache("redis", ttl_seconds=5, redis_url="redis://localhost:6379/0")
    assert isinstance(redis_cache, RedisCache)
    assert redis_cache.ttl_seconds == 5

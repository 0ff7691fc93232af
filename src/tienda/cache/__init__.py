"""Entity cache — explicit get/put/evict called by the services.

Services use the cache three ways:
- read-through on lookup by id (get → miss → load → put)
- write-through on create/update (put after commit)
- evict on delete

Values are the JSON-ready dict of the response schema, keyed by
(namespace, id) where the namespace is the entity collection name.
Two backends share one interface: an in-process TTL store (default)
and Redis.
"""

from typing import Any, Optional, Protocol

from tienda.cache.memory import MemoryCache
from tienda.cache.redis_cache import RedisCache


class Cache(Protocol):
    async def get(self, namespace: str, key: str) -> Optional[dict[str, Any]]: ...

    async def put(self, namespace: str, key: str, value: dict[str, Any]) -> None: ...

    async def evict(self, namespace: str, key: str) -> None: ...

    async def close(self) -> None: ...


def build_cache(backend: str, ttl_seconds: int, redis_url: str = "") -> Cache:
    """Create the configured cache backend. Called once by the app factory."""
    if backend == "redis":
        return RedisCache.from_url(redis_url, ttl_seconds=ttl_seconds)
    return MemoryCache(ttl_seconds=ttl_seconds)


__all__ = ["Cache", "MemoryCache", "RedisCache", "build_cache"]

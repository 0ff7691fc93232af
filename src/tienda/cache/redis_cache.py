"""Redis-backed cache.

Key pattern: tienda:cache:{namespace}:{id} → JSON string, with TTL.

Cache failures never fail the request: errors are logged and treated
as a miss (get) or skipped (put/evict). The database stays the source
of truth.
"""

import json
from typing import Any, Optional

import redis.asyncio as aioredis
import structlog

logger = structlog.get_logger()


class RedisCache:
    def __init__(self, client: aioredis.Redis, ttl_seconds: int = 600):
        self._redis = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int = 600) -> "RedisCache":
        client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client, ttl_seconds=ttl_seconds)

    @staticmethod
    def _key(namespace: str, key: str) -> str:
        return f"tienda:cache:{namespace}:{key}"

    async def get(self, namespace: str, key: str) -> Optional[dict[str, Any]]:
        try:
            raw = await self._redis.get(self._key(namespace, key))
        except aioredis.RedisError as e:
            logger.warning("cache.get_failed", namespace=namespace, key=key, error=str(e))
            return None
        if raw is None:
            return None
        return json.loads(raw)

    async def put(self, namespace: str, key: str, value: dict[str, Any]) -> None:
        try:
            await self._redis.set(
                self._key(namespace, key), json.dumps(value), ex=self.ttl_seconds
            )
        except aioredis.RedisError as e:
            logger.warning("cache.put_failed", namespace=namespace, key=key, error=str(e))

    async def evict(self, namespace: str, key: str) -> None:
        try:
            await self._redis.delete(self._key(namespace, key))
        except aioredis.RedisError as e:
            logger.warning("cache.evict_failed", namespace=namespace, key=key, error=str(e))

    async def close(self) -> None:
        await self._redis.aclose()

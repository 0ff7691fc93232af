"""In-process TTL cache.

An expired entry is dropped when it is next read. Every put also sweeps
expired entries, so keys that are never read again do not pile up.
"""

import asyncio
import copy
import time
from typing import Any, Optional


class MemoryCache:
    def __init__(self, ttl_seconds: int = 600, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    async def get(self, namespace: str, key: str) -> Optional[dict[str, Any]]:
        async with self._lock:
            entry = self._entries.get((namespace, key))
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[(namespace, key)]
                return None
            return copy.deepcopy(value)

    async def put(self, namespace: str, key: str, value: dict[str, Any]) -> None:
        async with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[(namespace, key)] = (
                now + self.ttl_seconds,
                copy.deepcopy(value),
            )

    async def evict(self, namespace: str, key: str) -> None:
        async with self._lock:
            self._entries.pop((namespace, key), None)

    async def close(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]

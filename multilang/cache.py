"""Cache stores holding loaded translation tables."""

from __future__ import annotations

import json
import time
from typing import Any, Protocol

from redis import asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from multilang.config import CacheSettings
from multilang.exceptions import ConfigurationInvalid, StorageUnavailable
from multilang.logging import logger


class CacheStore(Protocol):
    async def has(self, key: str) -> bool: ...

    async def get(self, key: str) -> Any: ...

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def forget(self, key: str) -> None: ...


class MemoryCacheStore:
    """Process-local store with per-entry expiry."""

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._items: dict[str, tuple[float, Any]] = {}

    def _alive(self, key: str) -> bool:
        item = self._items.get(key)
        if item is None:
            return False
        expires_at, _ = item
        if expires_at <= self._clock():
            self._items.pop(key, None)
            return False
        return True

    async def has(self, key: str) -> bool:
        return self._alive(key)

    async def get(self, key: str) -> Any:
        if not self._alive(key):
            return None
        return self._items[key][1]

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._items[key] = (self._clock() + ttl_seconds, value)

    async def forget(self, key: str) -> None:
        self._items.pop(key, None)


class RedisCacheStore:
    """Redis-backed store; values are serialized as JSON."""

    def __init__(self, client: aioredis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def _call(self, operation: str, coro):
        try:
            return await coro
        except (RedisConnectionError, RedisTimeoutError) as exc:
            logger.warning("cache_unavailable", operation=operation, error=str(exc))
            raise StorageUnavailable(f"Cache store unreachable during {operation}") from exc

    async def has(self, key: str) -> bool:
        return bool(await self._call("has", self.client.exists(key)))

    async def get(self, key: str) -> Any:
        raw = await self._call("get", self.client.get(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self._call("put", self.client.set(key, json.dumps(value), ex=ttl_seconds))

    async def forget(self, key: str) -> None:
        await self._call("forget", self.client.delete(key))


def build_cache_store(settings: CacheSettings) -> CacheStore:
    if settings.store == "redis":
        if not settings.url:
            raise ConfigurationInvalid("cache.url is required for the redis store")
        return RedisCacheStore.from_url(settings.url)
    return MemoryCacheStore()


__all__ = ["CacheStore", "MemoryCacheStore", "RedisCacheStore", "build_cache_store"]

"""Redis-backed cache adapter."""

import json
import logging
from dataclasses import dataclass

import redis.asyncio as redis

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.services.cache import Cache, CacheResult

_logger = logging.getLogger(__name__)

_BACKEND_ERRORS = (redis.RedisError, OSError)


@dataclass
class RedisCache(Cache):
    """Cache over Redis; connection and command errors become failed results."""

    client: LazyClient[redis.Redis]

    @classmethod
    def create(cls, url: str, connect_timeout: float = 10.0) -> "RedisCache":
        """Create a cache whose Redis connection is opened on first use."""

        async def connect() -> redis.Redis:
            return redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=connect_timeout,
            )

        return cls(client=LazyClient(connect))

    async def get(self, key: str) -> CacheResult:
        try:
            client = await self.client.get()
            raw = await client.get(key)
        except _BACKEND_ERRORS as exc:
            return _failed("get", key, exc)
        if raw is None:
            return CacheResult.success(None)
        try:
            return CacheResult.success(json.loads(raw))
        except json.JSONDecodeError as exc:
            return _failed("get", key, exc)

    async def set(self, key: str, value: object, ttl_seconds: int) -> CacheResult:
        try:
            client = await self.client.get()
            await client.setex(key, ttl_seconds, json.dumps(value))
        except _BACKEND_ERRORS as exc:
            return _failed("set", key, exc)
        return CacheResult.success()

    async def set_if_absent(self, key: str, value: object) -> CacheResult:
        try:
            client = await self.client.get()
            written = await client.set(key, json.dumps(value), nx=True)
        except _BACKEND_ERRORS as exc:
            return _failed("set_if_absent", key, exc)
        return CacheResult.success(bool(written))

    async def delete(self, key: str) -> CacheResult:
        try:
            client = await self.client.get()
            await client.delete(key)
        except _BACKEND_ERRORS as exc:
            return _failed("delete", key, exc)
        return CacheResult.success()

    async def incr(self, key: str) -> CacheResult:
        try:
            client = await self.client.get()
            value = await client.incr(key)
        except _BACKEND_ERRORS as exc:
            return _failed("incr", key, exc)
        return CacheResult.success(int(value))

    async def close(self) -> None:
        """Close the Redis connection pool if it was opened."""
        client = self.client.peek()
        if client is not None:
            await client.aclose()


def _failed(operation: str, key: str, exc: Exception) -> CacheResult:
    _logger.warning("Redis %s failed for %s: %s", operation, key, exc)
    return CacheResult.failure(f"{type(exc).__name__}: {exc}")

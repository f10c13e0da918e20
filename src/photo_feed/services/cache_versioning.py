"""Versioned cache keys and invalidation for photo reads.

Single-entity reads use deterministic point keys (``photo:<id>``) that are
deleted on every write to the entity. Paginated listings embed a
per-collection generation counter (``photos:v<g>:page:<p>:limit:<l>``);
creates and deletes bump the counter, which orphans every cached page of the
previous generation until its TTL expires. The cache is never authoritative:
every failure degrades to a miss or a skipped invalidation.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from photo_feed.services.cache import Cache

PHOTOS = "photos"
DEFAULT_GENERATION = 1

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def photo_key(photo_id: str) -> str:
    """Point key for a single photo."""
    return f"photo:{photo_id}"


def generation_key(collection: str) -> str:
    """Key holding the generation counter of a collection."""
    return f"{collection}:version"


def page_key(collection: str, generation: int, page: int, limit: int) -> str:
    """Listing key for one page of a collection under a generation."""
    return f"{collection}:v{generation}:page:{page}:limit:{limit}"


@dataclass
class CacheVersioning:
    """Generation counters, point invalidation and read-through caching."""

    cache: Cache

    async def current_generation(self, collection: str) -> int:
        """Return the collection's generation, initializing it to 1 if absent."""
        key = generation_key(collection)
        result = await self.cache.get(key)
        if not result.ok:
            _logger.warning("Generation lookup failed for %s: %s", key, result.error)
            return DEFAULT_GENERATION
        if result.value is not None:
            return _as_generation(result.value)

        created = await self.cache.set_if_absent(key, DEFAULT_GENERATION)
        if not created.ok:
            _logger.warning("Generation init failed for %s: %s", key, created.error)
            return DEFAULT_GENERATION
        if created.value:
            return DEFAULT_GENERATION
        # Another writer initialized or bumped the counter first.
        reread = await self.cache.get(key)
        if not reread.ok or reread.value is None:
            return DEFAULT_GENERATION
        return _as_generation(reread.value)

    async def bump_generation(self, collection: str) -> None:
        """Advance the collection's generation; a missing counter ends at 2."""
        key = generation_key(collection)
        seeded = await self.cache.set_if_absent(key, DEFAULT_GENERATION)
        if not seeded.ok:
            _logger.warning("Generation bump skipped for %s: %s", key, seeded.error)
            return
        bumped = await self.cache.incr(key)
        if not bumped.ok:
            _logger.warning("Generation bump skipped for %s: %s", key, bumped.error)
            return
        _logger.debug("Generation for %s is now %s", collection, bumped.value)

    async def point_invalidate(self, key: str) -> None:
        """Delete a single key, best effort."""
        result = await self.cache.delete(key)
        if not result.ok:
            _logger.warning("Invalidation skipped for %s: %s", key, result.error)

    async def listing_key(self, collection: str, page: int, limit: int) -> str:
        """Listing key for a page under the collection's current generation."""
        generation = await self.current_generation(collection)
        return page_key(collection, generation, page, limit)

    async def read_through(
        self,
        key: str,
        loader: Callable[[], Awaitable[T | None]],
        ttl_seconds: int,
    ) -> T | None:
        """Return the cached value for key, loading and caching it on a miss.

        A loader result of None (entity absent) is returned without caching.
        """
        cached = await self.cache.get(key)
        if cached.ok and cached.value is not None:
            _logger.debug("Cache hit: %s", key)
            return cached.value  # type: ignore[return-value]
        if not cached.ok:
            _logger.warning("Cache read failed for %s: %s", key, cached.error)
        else:
            _logger.debug("Cache miss: %s", key)

        value = await loader()
        if value is None:
            return None
        stored = await self.cache.set(key, value, ttl_seconds=ttl_seconds)
        if not stored.ok:
            _logger.warning("Cache write failed for %s: %s", key, stored.error)
        return value


def _as_generation(raw: object) -> int:
    try:
        generation = int(raw)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return DEFAULT_GENERATION
    return max(generation, DEFAULT_GENERATION)

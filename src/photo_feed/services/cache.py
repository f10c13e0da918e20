"""Cache abstractions with explicit success/failure results."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


@dataclass(frozen=True)
class CacheResult:
    """Outcome of a cache operation.

    ``ok`` is false when the backend could not be reached or rejected the
    call; ``value`` carries the payload for reads (``None`` on a miss), the
    new counter for increments, and whether a write happened for
    ``set_if_absent``.
    """

    ok: bool
    value: object | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: object | None = None) -> "CacheResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "CacheResult":
        return cls(ok=False, error=error)


class Cache(Protocol):
    """Best-effort key-value cache for JSON-compatible values."""

    async def get(self, key: str) -> CacheResult:
        """Return the cached value, or a successful result with None on a miss."""

    async def set(self, key: str, value: object, ttl_seconds: int) -> CacheResult:
        """Store a value with a TTL in seconds."""

    async def set_if_absent(self, key: str, value: object) -> CacheResult:
        """Store a value without TTL unless the key exists; value reports the write."""

    async def delete(self, key: str) -> CacheResult:
        """Remove a key."""

    async def incr(self, key: str) -> CacheResult:
        """Atomically increment an integer key and return the new value."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime | None


@dataclass
class InMemoryCache(Cache):
    """In-process cache used locally and when no Redis URL is configured."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    async def get(self, key: str) -> CacheResult:
        """Return a cached value if it hasn't expired."""
        entry = self._live_entry(key)
        if entry is None:
            return CacheResult.success(None)
        return CacheResult.success(entry.value)

    async def set(self, key: str, value: object, ttl_seconds: int) -> CacheResult:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)
        return CacheResult.success()

    async def set_if_absent(self, key: str, value: object) -> CacheResult:
        if self._live_entry(key) is not None:
            return CacheResult.success(False)
        self._entries[key] = _CacheEntry(value=value, expires_at=None)
        return CacheResult.success(True)

    async def delete(self, key: str) -> CacheResult:
        self._entries.pop(key, None)
        return CacheResult.success()

    async def incr(self, key: str) -> CacheResult:
        entry = self._live_entry(key)
        if entry is None:
            entry = _CacheEntry(value=0, expires_at=None)
        if not isinstance(entry.value, int):
            return CacheResult.failure(f"value at {key} is not an integer")
        entry.value += 1
        self._entries[key] = entry
        return CacheResult.success(entry.value)

    def _live_entry(self, key: str) -> _CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry

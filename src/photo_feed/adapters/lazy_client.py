"""Lazily created, process-wide backend clients."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class LazyClient(Generic[T]):
    """Creates a backend client on first use and reuses it afterwards.

    The factory runs at most once per instance, even when several requests
    ask for the client concurrently. The wrapped clients are themselves safe
    for concurrent reuse.
    """

    factory: Callable[[], Awaitable[T]]
    _client: T | None = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def get(self) -> T:
        """Return the client, creating it on the first call."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = await self.factory()
        return self._client

    def peek(self) -> T | None:
        """Return the client if it has been created, without creating it."""
        return self._client

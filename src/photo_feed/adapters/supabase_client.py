"""Lazy Supabase async client."""

from supabase import AsyncClient, acreate_client

from photo_feed.adapters.lazy_client import LazyClient


def lazy_supabase_client(url: str, service_key: str) -> LazyClient[AsyncClient]:
    """Return a holder that creates the Supabase client on first use."""

    async def connect() -> AsyncClient:
        return await acreate_client(url, service_key)

    return LazyClient(connect)

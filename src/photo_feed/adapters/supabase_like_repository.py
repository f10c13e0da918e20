"""Supabase-backed like repository."""

from dataclasses import dataclass

from supabase import AsyncClient

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.domain.photos import LikeKey
from photo_feed.services.likes import LikeRepository


@dataclass
class SupabaseLikeRepository(LikeRepository):
    """Supabase implementation for likes, unique on (photo_id, user_id)."""

    client: LazyClient[AsyncClient]

    async def add_like(self, key: LikeKey) -> bool:
        """Insert a like, ignoring the row if the user already liked the photo."""
        client = await self.client.get()
        response = (
            await client.table("likes")
            .upsert(
                {"photo_id": key.photo_id, "user_id": key.user_id},
                on_conflict="photo_id,user_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        return bool(response.data)

    async def remove_like(self, key: LikeKey) -> bool:
        """Delete the user's like for a photo."""
        client = await self.client.get()
        response = (
            await client.table("likes")
            .delete()
            .eq("photo_id", key.photo_id)
            .eq("user_id", key.user_id)
            .execute()
        )
        return bool(response.data)

    async def count_likes(self, photo_id: str) -> int:
        """Count like rows for a photo."""
        client = await self.client.get()
        response = (
            await client.table("likes")
            .select("id", count="exact")
            .eq("photo_id", photo_id)
            .execute()
        )
        return int(response.count or 0)

    async def has_liked(self, key: LikeKey) -> bool:
        """Return true when a like row exists for the key."""
        client = await self.client.get()
        response = (
            await client.table("likes")
            .select("id")
            .eq("photo_id", key.photo_id)
            .eq("user_id", key.user_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)

"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import AsyncClient

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.domain.photos import Photo
from photo_feed.services.photos import PhotoRepository

_COLUMNS = (
    "id, creator_id, creator_name, creator_role, image_url, title, caption, "
    "location, people, likes, created_at"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo persistence."""

    client: LazyClient[AsyncClient]

    async def create_photo(self, photo: Photo) -> Photo:
        """Insert a photo row and return it."""
        client = await self.client.get()
        response = (
            await client.table("photos")
            .insert(
                {
                    "id": photo.id,
                    "creator_id": photo.creator_id,
                    "creator_name": photo.creator_name,
                    "creator_role": photo.creator_role,
                    "image_url": photo.image_url,
                    "title": photo.title,
                    "caption": photo.caption,
                    "location": photo.location,
                    "people": photo.people,
                    "likes": photo.likes,
                    "created_at": photo.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo")
        return _parse_photo(response.data[0])

    async def get_photo(self, photo_id: str) -> Photo | None:
        """Return a photo by id, if present."""
        client = await self.client.get()
        response = (
            await client.table("photos")
            .select(_COLUMNS)
            .eq("id", photo_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    async def list_photos(self, offset: int, limit: int | None) -> list[Photo]:
        """Return photos newest first, optionally one page of them."""
        client = await self.client.get()
        query = (
            client.table("photos").select(_COLUMNS).order("created_at", desc=True)
        )
        if limit is not None:
            query = query.range(offset, offset + limit - 1)
        response = await query.execute()
        return [_parse_photo(row) for row in response.data or []]

    async def delete_photo(self, photo_id: str) -> None:
        """Delete a photo row."""
        client = await self.client.get()
        await client.table("photos").delete().eq("id", photo_id).execute()

    async def adjust_likes(self, photo_id: str, delta: int) -> int:
        """Adjust the like counter in a single database statement."""
        client = await self.client.get()
        response = await client.rpc(
            "adjust_photo_likes", {"target_photo_id": photo_id, "delta": delta}
        ).execute()
        return _parse_count(response.data)


def _parse_photo(row: dict[str, object]) -> Photo:
    people = row.get("people")
    return Photo(
        id=str(row["id"]),
        creator_id=str(row["creator_id"]),
        creator_name=str(row.get("creator_name") or ""),
        creator_role=str(row.get("creator_role") or ""),
        image_url=str(row["image_url"]),
        title=str(row["title"]),
        caption=str(row.get("caption") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        likes=int(row.get("likes") or 0),  # type: ignore[call-overload]
        location=row.get("location") or None,  # type: ignore[arg-type]
        people=list(people) if isinstance(people, list) and people else None,
    )


def _parse_count(data: object) -> int:
    """Read the scalar returned by the counter function."""
    if isinstance(data, list):
        if not data:
            raise RuntimeError("Failed to update like counter")
        data = data[0]
    if isinstance(data, dict):
        data = data.get("adjust_photo_likes", data.get("likes"))
    if data is None:
        raise RuntimeError("Failed to update like counter")
    return int(data)  # type: ignore[call-overload]

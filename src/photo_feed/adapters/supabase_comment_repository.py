"""Supabase-backed comment repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import AsyncClient

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.domain.comments import Comment
from photo_feed.services.comments import CommentRepository

_COLUMNS = "id, photo_id, user_id, user_name, user_role, content, created_at"


@dataclass
class SupabaseCommentRepository(CommentRepository):
    """Supabase implementation for comments."""

    client: LazyClient[AsyncClient]

    async def create_comment(self, comment: Comment) -> Comment:
        """Insert a comment row and return it."""
        client = await self.client.get()
        response = (
            await client.table("comments")
            .insert(
                {
                    "id": comment.id,
                    "photo_id": comment.photo_id,
                    "user_id": comment.user_id,
                    "user_name": comment.user_name,
                    "user_role": comment.user_role,
                    "content": comment.content,
                    "created_at": comment.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create comment")
        return _parse_comment(response.data[0])

    async def list_comments(self, photo_id: str) -> list[Comment]:
        """Return comments for a photo, newest first."""
        client = await self.client.get()
        response = (
            await client.table("comments")
            .select(_COLUMNS)
            .eq("photo_id", photo_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_comment(row) for row in response.data or []]

    async def find_comment(self, comment_id: str) -> Comment | None:
        """Return a comment by id, if present."""
        client = await self.client.get()
        response = (
            await client.table("comments")
            .select(_COLUMNS)
            .eq("id", comment_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_comment(response.data[0])

    async def delete_comment(self, comment_id: str, photo_id: str) -> None:
        """Delete a comment row scoped to its photo."""
        client = await self.client.get()
        await (
            client.table("comments")
            .delete()
            .eq("id", comment_id)
            .eq("photo_id", photo_id)
            .execute()
        )


def _parse_comment(row: dict[str, object]) -> Comment:
    return Comment(
        id=str(row["id"]),
        photo_id=str(row["photo_id"]),
        user_id=str(row["user_id"]),
        user_name=str(row.get("user_name") or "Anonymous"),
        user_role=row.get("user_role") or None,  # type: ignore[arg-type]
        content=str(row["content"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )

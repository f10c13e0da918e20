"""Comment operations."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from photo_feed.domain.comments import Comment
from photo_feed.domain.users import Caller
from photo_feed.services.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class CommentRepository(Protocol):
    """Persistence interface for comments, partitioned by photo id."""

    async def create_comment(self, comment: Comment) -> Comment:
        """Insert a comment and return it."""

    async def list_comments(self, photo_id: str) -> list[Comment]:
        """Return comments for a photo, newest first."""

    async def find_comment(self, comment_id: str) -> Comment | None:
        """Return a comment by id across all photos, if present."""

    async def delete_comment(self, comment_id: str, photo_id: str) -> None:
        """Delete a comment by id within its photo partition."""


@dataclass
class CommentService:
    """Application service for photo comments."""

    repository: CommentRepository

    async def list_comments(self, photo_id: str | None) -> list[Comment]:
        """Return the comments on a photo."""
        if not photo_id:
            raise ValidationError("Photo ID required")
        return await self.repository.list_comments(photo_id)

    async def create_comment(  # noqa: PLR0913
        self,
        photo_id: str | None,
        user_id: str | None,
        content: str | None,
        user_name: str | None = None,
        user_role: str | None = None,
    ) -> Comment:
        """Validate and store a new comment."""
        if not photo_id:
            raise ValidationError("Photo ID required")
        if not user_id:
            raise AuthenticationError()
        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment content required")

        comment = Comment(
            id=str(uuid4()),
            photo_id=photo_id,
            user_id=user_id,
            user_name=user_name or "Anonymous",
            user_role=user_role or None,
            content=text,
            created_at=datetime.now(tz=UTC),
        )
        return await self.repository.create_comment(comment)

    async def delete_comment(self, caller: Caller | None, comment_id: str) -> None:
        """Delete a comment written by the caller (or any comment for admins)."""
        if not comment_id:
            raise ValidationError("Comment ID required")
        if caller is None:
            raise AuthenticationError()
        comment = await self.repository.find_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.user_id != caller.id and not caller.is_admin:
            raise AuthorizationError("Not authorized to delete this comment")
        await self.repository.delete_comment(comment.id, comment.photo_id)

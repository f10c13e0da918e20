"""Like and unlike operations.

Like records are authoritative. The ``likes`` field on a photo is a
denormalized counter adjusted with an atomic store-level increment, only
when a like record was actually inserted or removed.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_feed.domain.photos import LikeKey, LikeResult, LikeSummary
from photo_feed.services.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from photo_feed.services.photos import PhotoRepository

_logger = logging.getLogger(__name__)


class LikeRepository(Protocol):
    """Persistence interface for like records."""

    async def add_like(self, key: LikeKey) -> bool:
        """Insert a like unless one exists for the key; return whether it was added."""

    async def remove_like(self, key: LikeKey) -> bool:
        """Delete the like for the key; return whether one was removed."""

    async def count_likes(self, photo_id: str) -> int:
        """Return the number of likes recorded for a photo."""

    async def has_liked(self, key: LikeKey) -> bool:
        """Return true when the user has liked the photo."""


@dataclass
class LikeService:
    """Application service for photo likes."""

    repository: LikeRepository
    photo_repository: PhotoRepository

    async def like(self, photo_id: str | None, user_id: str | None) -> LikeResult:
        """Record a like and return the updated counter; repeated likes are no-ops."""
        key = await self._resolve(photo_id, user_id)
        if await self.repository.add_like(key):
            likes = await self.photo_repository.adjust_likes(key.photo_id, 1)
        else:
            likes = await self._current_likes(key.photo_id)
        _logger.info("Photo %s liked by %s (likes=%s)", key.photo_id, key.user_id, likes)
        return LikeResult(likes=likes, liked=True)

    async def unlike(self, photo_id: str | None, user_id: str | None) -> LikeResult:
        """Remove a like and return the updated counter."""
        key = await self._resolve(photo_id, user_id)
        if await self.repository.remove_like(key):
            likes = await self.photo_repository.adjust_likes(key.photo_id, -1)
        else:
            likes = await self._current_likes(key.photo_id)
        return LikeResult(likes=likes, liked=False)

    async def summary(self, photo_id: str | None, user_id: str | None) -> LikeSummary:
        """Count likes from the like records and report the user's state."""
        if not photo_id:
            raise ValidationError("Photo ID required")
        count = await self.repository.count_likes(photo_id)
        user_has_liked = False
        if user_id:
            user_has_liked = await self.repository.has_liked(
                LikeKey(photo_id=photo_id, user_id=user_id)
            )
        return LikeSummary(count=count, user_has_liked=user_has_liked)

    async def _resolve(self, photo_id: str | None, user_id: str | None) -> LikeKey:
        if not photo_id:
            raise ValidationError("Photo ID required")
        if not user_id:
            raise AuthenticationError()
        if await self.photo_repository.get_photo(photo_id) is None:
            raise NotFoundError("Photo not found")
        return LikeKey(photo_id=photo_id, user_id=user_id)

    async def _current_likes(self, photo_id: str) -> int:
        photo = await self.photo_repository.get_photo(photo_id)
        if photo is None:
            raise NotFoundError("Photo not found")
        return photo.likes

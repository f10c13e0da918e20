"""Photo feed operations with versioned read-through caching."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import unquote, urlsplit
from uuid import uuid4

from photo_feed.domain.photos import NewPhoto, Photo, PhotoUpload
from photo_feed.domain.users import CREATOR, Caller
from photo_feed.services.cache_versioning import PHOTOS, CacheVersioning, photo_key
from photo_feed.services.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)

_logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photos."""

    async def create_photo(self, photo: Photo) -> Photo:
        """Insert a photo and return the stored record."""

    async def get_photo(self, photo_id: str) -> Photo | None:
        """Return a photo by id, if present."""

    async def list_photos(self, offset: int, limit: int | None) -> list[Photo]:
        """Return photos newest first; a None limit returns all of them."""

    async def delete_photo(self, photo_id: str) -> None:
        """Delete a photo by id."""

    async def adjust_likes(self, photo_id: str, delta: int) -> int:
        """Atomically add delta to the like counter (floored at 0) and return it."""


class BlobStorage(Protocol):
    """Interface for storing photo image files."""

    async def upload(self, name: str, content: bytes, content_type: str) -> str:
        """Store a file under name and return its public URL."""

    async def delete(self, name: str) -> None:
        """Delete a stored file; missing files are ignored."""


@dataclass
class PhotoService:
    """Application service for the photo feed."""

    repository: PhotoRepository
    blob_storage: BlobStorage
    versioning: CacheVersioning
    photo_ttl_seconds: int = 300
    page_ttl_seconds: int = 60
    default_page_size: int = 20

    async def list_photos(self, page: int = 1, limit: int | None = None) -> list[Photo]:
        """Return one page of photos, newest first.

        A limit of zero or less disables pagination and returns every photo.
        """
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        resolved_limit = self.default_page_size if limit is None else limit
        key = await self.versioning.listing_key(PHOTOS, page, resolved_limit)

        async def load() -> list[dict[str, object]]:
            if resolved_limit > 0:
                offset = (page - 1) * resolved_limit
                photos = await self.repository.list_photos(offset, resolved_limit)
            else:
                photos = await self.repository.list_photos(0, None)
            _logger.info(
                "Fetched %s photos (page: %s, limit: %s)",
                len(photos),
                page,
                resolved_limit,
            )
            return [photo.to_payload() for photo in photos]

        payload = await self.versioning.read_through(
            key, load, ttl_seconds=self.page_ttl_seconds
        )
        return [Photo.from_payload(item) for item in payload or []]

    async def get_photo(self, photo_id: str) -> Photo:
        """Return a single photo, served from cache when possible."""
        if not photo_id:
            raise ValidationError("Photo ID required")

        async def load() -> dict[str, object] | None:
            photo = await self.repository.get_photo(photo_id)
            return photo.to_payload() if photo else None

        payload = await self.versioning.read_through(
            photo_key(photo_id), load, ttl_seconds=self.photo_ttl_seconds
        )
        if payload is None:
            raise NotFoundError("Photo not found")
        return Photo.from_payload(payload)

    async def create_photo(
        self, caller: Caller | None, upload: PhotoUpload | None, details: NewPhoto
    ) -> Photo:
        """Upload the image, store the photo and invalidate cached listings."""
        if caller is None:
            raise AuthenticationError()
        if caller.role != CREATOR:
            raise AuthorizationError("Only creators can upload photos")
        if upload is None or not upload.content:
            raise ValidationError("File is required")
        if not details.title:
            raise ValidationError("Image and title are required")

        photo_id = str(uuid4())
        blob_name = f"{photo_id}-{upload.file_name}"
        image_url = await self.blob_storage.upload(
            blob_name, upload.content, upload.content_type
        )
        photo = Photo(
            id=photo_id,
            creator_id=caller.id,
            creator_name=caller.name or "",
            creator_role=caller.role,
            image_url=image_url,
            title=details.title,
            caption=details.caption,
            created_at=datetime.now(tz=UTC),
            likes=0,
            location=details.location or None,
            people=details.people or None,
        )
        created = await self.repository.create_photo(photo)
        await self.versioning.bump_generation(PHOTOS)
        _logger.info("Created photo %s", created.id)
        return created

    async def delete_photo(self, caller: Caller | None, photo_id: str) -> None:
        """Delete a photo owned by the caller (or any photo for admins)."""
        if not photo_id:
            raise ValidationError("Photo ID required")
        if caller is None:
            raise AuthenticationError()
        photo = await self.repository.get_photo(photo_id)
        if photo is None:
            raise NotFoundError("Photo not found")
        if photo.creator_id != caller.id and not caller.is_admin:
            raise AuthorizationError("Not authorized to delete this photo")

        blob_name = blob_name_from_url(photo.image_url)
        if blob_name:
            await self.blob_storage.delete(blob_name)
        await self.repository.delete_photo(photo_id)

        await self.versioning.point_invalidate(photo_key(photo_id))
        await self.versioning.bump_generation(PHOTOS)
        _logger.info("Deleted photo %s", photo_id)


def blob_name_from_url(image_url: str) -> str | None:
    """Return the stored file name, i.e. the last path segment of the URL."""
    path = urlsplit(image_url).path
    name = unquote(path.rsplit("/", maxsplit=1)[-1])
    return name or None

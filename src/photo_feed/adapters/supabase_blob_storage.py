"""Supabase Storage adapter for photo files."""

import logging
from dataclasses import dataclass

from supabase import AsyncClient

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.services.photos import BlobStorage

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseBlobStorage(BlobStorage):
    """Stores photo files in a public Supabase Storage bucket."""

    client: LazyClient[AsyncClient]
    bucket: str

    async def upload(self, name: str, content: bytes, content_type: str) -> str:
        """Upload file bytes and return the public URL."""
        client = await self.client.get()
        bucket = client.storage.from_(self.bucket)
        try:
            await bucket.upload(
                path=name, file=content, file_options={"content-type": content_type}
            )
        except Exception:
            _logger.exception("Blob upload failed", extra={"blob_name": name})
            raise
        url = await bucket.get_public_url(name)
        return url.rstrip("?")

    async def delete(self, name: str) -> None:
        """Delete a file from the bucket."""
        client = await self.client.get()
        await client.storage.from_(self.bucket).remove([name])

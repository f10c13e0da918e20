"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_feed.adapters.redis_cache import RedisCache
from photo_feed.adapters.supabase_blob_storage import SupabaseBlobStorage
from photo_feed.adapters.supabase_client import lazy_supabase_client
from photo_feed.adapters.supabase_comment_repository import (
    SupabaseCommentRepository,
)
from photo_feed.adapters.supabase_like_repository import SupabaseLikeRepository
from photo_feed.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_feed.adapters.supabase_user_repository import SupabaseUserRepository
from photo_feed.config import Settings
from photo_feed.services.cache import Cache, InMemoryCache
from photo_feed.services.cache_versioning import CacheVersioning
from photo_feed.services.comments import CommentService
from photo_feed.services.likes import LikeService
from photo_feed.services.photos import PhotoService
from photo_feed.services.security import TokenService
from photo_feed.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: Cache
    tokens: TokenService
    photo_service: PhotoService
    like_service: LikeService
    comment_service: CommentService
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Backend connections are opened lazily on first use, once per process.
    """
    resolved_settings = settings or Settings()
    supabase_client = lazy_supabase_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    redis_cache: RedisCache | None = None
    cache: Cache
    if resolved_settings.redis_url:
        redis_cache = RedisCache.create(
            resolved_settings.redis_url,
            connect_timeout=resolved_settings.redis_connect_timeout_seconds,
        )
        cache = redis_cache
    else:
        cache = InMemoryCache()

    photo_repository = SupabasePhotoRepository(supabase_client)
    tokens = TokenService(
        secret=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        expire_days=resolved_settings.token_expire_days,
    )
    photo_service = PhotoService(
        repository=photo_repository,
        blob_storage=SupabaseBlobStorage(
            supabase_client, bucket=resolved_settings.supabase_photos_bucket
        ),
        versioning=CacheVersioning(cache),
        photo_ttl_seconds=resolved_settings.photo_cache_ttl_seconds,
        page_ttl_seconds=resolved_settings.photos_page_cache_ttl_seconds,
        default_page_size=resolved_settings.default_page_size,
    )
    like_service = LikeService(
        repository=SupabaseLikeRepository(supabase_client),
        photo_repository=photo_repository,
    )
    comment_service = CommentService(SupabaseCommentRepository(supabase_client))
    user_service = UserService(SupabaseUserRepository(supabase_client), tokens)

    async def close_resources() -> None:
        if redis_cache is not None:
            await redis_cache.close()

    return AppContainer(
        settings=resolved_settings,
        cache=cache,
        tokens=tokens,
        photo_service=photo_service,
        like_service=like_service,
        comment_service=comment_service,
        user_service=user_service,
        close_resources=close_resources,
    )

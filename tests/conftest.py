"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from photo_feed.config import Settings
from photo_feed.containers import AppContainer
from photo_feed.domain.comments import Comment
from photo_feed.domain.photos import LikeKey, Photo
from photo_feed.domain.users import UserRecord
from photo_feed.services.cache import Cache, CacheResult, InMemoryCache
from photo_feed.services.cache_versioning import CacheVersioning
from photo_feed.services.comments import CommentRepository, CommentService
from photo_feed.services.errors import DuplicateRecordError
from photo_feed.services.likes import LikeRepository, LikeService
from photo_feed.services.photos import BlobStorage, PhotoRepository, PhotoService
from photo_feed.services.security import TokenService
from photo_feed.services.users import UserRepository, UserService


def make_photo(
    creator_id: str = "creator-1", title: str = "Sunset", minutes_ago: int = 0
) -> Photo:
    photo_id = str(uuid4())
    return Photo(
        id=photo_id,
        creator_id=creator_id,
        creator_name="Ada",
        creator_role="creator",
        image_url=f"https://blobs.example.com/photos/{photo_id}-sunset.jpg",
        title=title,
        caption="Golden hour",
        created_at=datetime.now(tz=UTC) - timedelta(minutes=minutes_ago),
    )


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository that counts store reads."""

    photos: dict[str, Photo] = field(default_factory=dict)
    get_calls: int = 0
    list_calls: int = 0

    async def create_photo(self, photo: Photo) -> Photo:
        self.photos[photo.id] = photo
        return photo

    async def get_photo(self, photo_id: str) -> Photo | None:
        self.get_calls += 1
        await asyncio.sleep(0)
        return self.photos.get(photo_id)

    async def list_photos(self, offset: int, limit: int | None) -> list[Photo]:
        self.list_calls += 1
        ordered = sorted(
            self.photos.values(), key=lambda photo: photo.created_at, reverse=True
        )
        if limit is None:
            return ordered[offset:]
        return ordered[offset : offset + limit]

    async def delete_photo(self, photo_id: str) -> None:
        self.photos.pop(photo_id, None)

    async def adjust_likes(self, photo_id: str, delta: int) -> int:
        current = self.photos[photo_id]
        likes = max(current.likes + delta, 0)
        self.photos[photo_id] = Photo(
            id=current.id,
            creator_id=current.creator_id,
            creator_name=current.creator_name,
            creator_role=current.creator_role,
            image_url=current.image_url,
            title=current.title,
            caption=current.caption,
            created_at=current.created_at,
            likes=likes,
            location=current.location,
            people=current.people,
        )
        return likes


@dataclass
class InMemoryBlobStorage(BlobStorage):
    """In-memory blob storage for tests."""

    files: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    async def upload(self, name: str, content: bytes, content_type: str) -> str:
        self.files[name] = content
        return f"https://blobs.example.com/photos/{name}"

    async def delete(self, name: str) -> None:
        self.deleted.append(name)
        self.files.pop(name, None)


@dataclass
class InMemoryLikeRepository(LikeRepository):
    """In-memory like repository keyed by (photo, user)."""

    likes: set[LikeKey] = field(default_factory=set)

    async def add_like(self, key: LikeKey) -> bool:
        await asyncio.sleep(0)
        if key in self.likes:
            return False
        self.likes.add(key)
        return True

    async def remove_like(self, key: LikeKey) -> bool:
        if key not in self.likes:
            return False
        self.likes.discard(key)
        return True

    async def count_likes(self, photo_id: str) -> int:
        return sum(1 for key in self.likes if key.photo_id == photo_id)

    async def has_liked(self, key: LikeKey) -> bool:
        return key in self.likes


@dataclass
class InMemoryCommentRepository(CommentRepository):
    """In-memory comment repository for tests."""

    comments: dict[str, Comment] = field(default_factory=dict)

    async def create_comment(self, comment: Comment) -> Comment:
        self.comments[comment.id] = comment
        return comment

    async def list_comments(self, photo_id: str) -> list[Comment]:
        matching = [c for c in self.comments.values() if c.photo_id == photo_id]
        return sorted(matching, key=lambda c: c.created_at, reverse=True)

    async def find_comment(self, comment_id: str) -> Comment | None:
        return self.comments.get(comment_id)

    async def delete_comment(self, comment_id: str, photo_id: str) -> None:
        comment = self.comments.get(comment_id)
        if comment and comment.photo_id == photo_id:
            del self.comments[comment_id]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository with a unique email constraint."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    async def get_by_email(self, email: str) -> UserRecord | None:
        return self.users.get(email)

    async def create_user(self, user: UserRecord) -> UserRecord:
        if user.email in self.users:
            raise DuplicateRecordError(user.email)
        self.users[user.email] = user
        return user


@dataclass
class FailingCache(Cache):
    """Cache whose backend is unreachable for every operation."""

    calls: int = 0

    async def get(self, key: str) -> CacheResult:
        return self._fail()

    async def set(self, key: str, value: object, ttl_seconds: int) -> CacheResult:
        return self._fail()

    async def set_if_absent(self, key: str, value: object) -> CacheResult:
        return self._fail()

    async def delete(self, key: str) -> CacheResult:
        return self._fail()

    async def incr(self, key: str) -> CacheResult:
        return self._fail()

    def _fail(self) -> CacheResult:
        self.calls += 1
        return CacheResult.failure("ConnectionError: cache unreachable")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret="test-secret",
    )


@pytest.fixture
def cache() -> Cache:
    return InMemoryCache()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def blob_storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def like_repository() -> InMemoryLikeRepository:
    return InMemoryLikeRepository()


@pytest.fixture
def comment_repository() -> InMemoryCommentRepository:
    return InMemoryCommentRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(secret=settings.jwt_secret)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    cache: Cache,
    tokens: TokenService,
    photo_repository: InMemoryPhotoRepository,
    blob_storage: InMemoryBlobStorage,
    like_repository: InMemoryLikeRepository,
    comment_repository: InMemoryCommentRepository,
    user_repository: InMemoryUserRepository,
) -> AppContainer:
    photo_service = PhotoService(
        repository=photo_repository,
        blob_storage=blob_storage,
        versioning=CacheVersioning(cache),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        cache=cache,
        tokens=tokens,
        photo_service=photo_service,
        like_service=LikeService(like_repository, photo_repository),
        comment_service=CommentService(comment_repository),
        user_service=UserService(user_repository, tokens),
        close_resources=close_resources,
    )

"""Tests for likes and the denormalized like counter."""

import asyncio

import pytest

from photo_feed.domain.photos import LikeKey
from photo_feed.services.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from photo_feed.services.likes import LikeService
from tests.conftest import InMemoryLikeRepository, InMemoryPhotoRepository, make_photo


def _service() -> tuple[LikeService, InMemoryLikeRepository, InMemoryPhotoRepository]:
    likes = InMemoryLikeRepository()
    photos = InMemoryPhotoRepository()
    return LikeService(likes, photos), likes, photos


def test_like_increments_counter() -> None:
    service, likes, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    result = asyncio.run(service.like(photo.id, "u1"))

    assert result.likes == 1
    assert result.liked is True
    assert LikeKey(photo.id, "u1") in likes.likes


def test_concurrent_likes_from_different_users_both_count() -> None:
    service, _, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    async def like_twice() -> None:
        await asyncio.gather(service.like(photo.id, "u1"), service.like(photo.id, "u2"))

    asyncio.run(like_twice())

    assert photos.photos[photo.id].likes == 2
    summary = asyncio.run(service.summary(photo.id, "u1"))
    assert summary.count == 2


def test_repeated_like_is_idempotent() -> None:
    service, likes, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    asyncio.run(service.like(photo.id, "u1"))
    again = asyncio.run(service.like(photo.id, "u1"))

    assert again.likes == 1
    assert len(likes.likes) == 1


def test_concurrent_duplicate_likes_count_once() -> None:
    service, likes, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    async def like_twice() -> None:
        await asyncio.gather(service.like(photo.id, "u1"), service.like(photo.id, "u1"))

    asyncio.run(like_twice())

    assert photos.photos[photo.id].likes == 1
    assert len(likes.likes) == 1


def test_unlike_removes_record_and_decrements() -> None:
    service, likes, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo
    asyncio.run(service.like(photo.id, "u1"))

    result = asyncio.run(service.unlike(photo.id, "u1"))

    assert result.likes == 0
    assert result.liked is False
    assert likes.likes == set()


def test_unlike_without_like_never_goes_negative() -> None:
    service, _, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    result = asyncio.run(service.unlike(photo.id, "u1"))

    assert result.likes == 0
    assert photos.photos[photo.id].likes == 0


def test_like_validates_input() -> None:
    service, _, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo

    with pytest.raises(ValidationError, match="Photo ID required"):
        asyncio.run(service.like(None, "u1"))
    with pytest.raises(AuthenticationError):
        asyncio.run(service.like(photo.id, None))
    with pytest.raises(NotFoundError):
        asyncio.run(service.like("missing", "u1"))


def test_summary_reports_user_state() -> None:
    service, _, photos = _service()
    photo = make_photo()
    photos.photos[photo.id] = photo
    asyncio.run(service.like(photo.id, "u1"))

    mine = asyncio.run(service.summary(photo.id, "u1"))
    theirs = asyncio.run(service.summary(photo.id, "u2"))
    anonymous = asyncio.run(service.summary(photo.id, None))

    assert (mine.count, mine.user_has_liked) == (1, True)
    assert (theirs.count, theirs.user_has_liked) == (1, False)
    assert anonymous.user_has_liked is False
    with pytest.raises(ValidationError):
        asyncio.run(service.summary(None, "u1"))

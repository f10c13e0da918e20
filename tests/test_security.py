"""Tests for password hashing and access tokens."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from photo_feed.domain.users import UserRecord
from photo_feed.services.errors import AuthenticationError
from photo_feed.services.security import TokenService, hash_password, verify_password

USER = UserRecord(
    id="user-1",
    email="ada@example.com",
    name="Ada",
    password_hash="",
    role="creator",
    created_at=datetime(2024, 1, 1, tzinfo=UTC),
)


def test_hash_and_verify_password() -> None:
    hashed = hash_password("correct horse")

    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
    assert not verify_password("correct horse", "not-a-bcrypt-hash")


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = hash_password(base + "a")

    assert not verify_password(base + "b", hashed)


def test_token_round_trip_carries_identity() -> None:
    tokens = TokenService(secret="s3cret")

    caller = tokens.verify(tokens.issue(USER))

    assert caller.id == "user-1"
    assert caller.name == "Ada"
    assert caller.role == "creator"
    assert caller.email == "ada@example.com"


def test_token_signed_with_other_key_is_rejected() -> None:
    token = TokenService(secret="other").issue(USER)

    with pytest.raises(AuthenticationError):
        TokenService(secret="s3cret").verify(token)


def test_expired_token_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "user-1", "exp": datetime.now(tz=UTC) - timedelta(minutes=1)},
        "s3cret",
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationError):
        TokenService(secret="s3cret").verify(token)


def test_caller_from_header() -> None:
    tokens = TokenService(secret="s3cret")
    token = tokens.issue(USER)

    assert tokens.caller_from_header(None) is None
    assert tokens.caller_from_header(f"Bearer {token}").id == "user-1"
    with pytest.raises(AuthenticationError):
        tokens.caller_from_header(f"Basic {token}")
    with pytest.raises(AuthenticationError):
        tokens.caller_from_header("Bearer ")

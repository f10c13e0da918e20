"""Sign-up and sign-in."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from photo_feed.domain.users import CONSUMER, CREATOR, UserRecord, normalize_email
from photo_feed.services.errors import (
    ConflictError,
    DuplicateRecordError,
    ValidationError,
)
from photo_feed.services.security import TokenService, hash_password, verify_password

_logger = logging.getLogger(__name__)

_SIGNUP_ROLES = {CONSUMER, CREATOR}
_INVALID_CREDENTIALS = "Invalid email or password."


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with a normalized email, if present."""

    async def create_user(self, user: UserRecord) -> UserRecord:
        """Insert a user; raise DuplicateRecordError if the email is taken."""


@dataclass(frozen=True)
class SignInResult:
    """Token and profile returned after a successful sign-in."""

    token: str
    user: UserRecord


@dataclass
class UserService:
    """Application service for account lifecycle actions."""

    repository: UserRepository
    tokens: TokenService

    async def sign_up(
        self,
        email: str | None,
        password: str | None,
        name: str | None,
        role: str = CONSUMER,
    ) -> UserRecord:
        """Register a user with a unique, case-insensitive email."""
        if not email or not password or not name:
            raise ValidationError("Name, email, and password are required.")
        if role not in _SIGNUP_ROLES:
            raise ValidationError(f"Unsupported role: {role}")
        normalized = normalize_email(email)
        label = role.capitalize()
        if await self.repository.get_by_email(normalized) is not None:
            raise ConflictError(f"User ({label}) with this email already exists.")

        user = UserRecord(
            id=str(uuid4()),
            email=normalized,
            name=name,
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.now(tz=UTC),
        )
        try:
            created = await self.repository.create_user(user)
        except DuplicateRecordError as exc:
            raise ConflictError(
                f"User ({label}) with this email already exists."
            ) from exc
        _logger.info("Registered %s user %s", role, created.id)
        return created

    async def sign_in(self, email: str | None, password: str | None) -> SignInResult:
        """Verify credentials and issue an access token."""
        if not email or not password:
            raise ValidationError("Email and password are required.")
        user = await self.repository.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise ValidationError(_INVALID_CREDENTIALS)
        return SignInResult(token=self.tokens.issue(user), user=user)

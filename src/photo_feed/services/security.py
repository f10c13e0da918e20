"""Password hashing and signed access tokens."""

import base64
import hashlib
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from photo_feed.domain.users import Caller, UserRecord
from photo_feed.services.errors import AuthenticationError


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash so bcrypt never truncates long passwords at 72 bytes."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return a bcrypt hash of the password."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return true if the password matches the stored hash."""
    try:
        return bool(bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8")))
    except (ValueError, TypeError):
        return False


@dataclass
class TokenService:
    """Issues and verifies JWT access tokens for signed-in users."""

    secret: str
    algorithm: str = "HS256"
    expire_days: int = 7

    def issue(self, user: UserRecord) -> str:
        """Return a signed token carrying the user's identity and role."""
        claims = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "exp": datetime.now(tz=UTC) + timedelta(days=self.expire_days),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Caller:
        """Decode a token into the caller it identifies.

        Raises AuthenticationError when the token is malformed, expired or
        signed with another key.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as exc:
            raise AuthenticationError("Invalid or missing token") from exc
        return Caller(
            id=str(payload["sub"]),
            name=payload.get("name"),
            role=payload.get("role"),
            email=payload.get("email"),
        )

    def caller_from_header(self, authorization: str | None) -> Caller | None:
        """Return the caller for a ``Bearer`` header, or None when absent."""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme != "Bearer" or not token.strip():
            raise AuthenticationError("Invalid or missing token")
        return self.verify(token.strip())

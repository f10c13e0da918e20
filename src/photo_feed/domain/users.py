"""Domain models for users and callers."""

from dataclasses import dataclass
from datetime import datetime

CREATOR = "creator"
CONSUMER = "consumer"
ADMIN = "admin"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    email: str
    name: str
    password_hash: str
    role: str
    created_at: datetime

    def public_payload(self) -> dict[str, str]:
        """Return the user fields safe to send to clients."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


@dataclass(frozen=True)
class Caller:
    """Identity of the client making a request."""

    id: str
    name: str | None = None
    role: str | None = None
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address for lookups and storage."""
    return email.strip().lower()

"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import AsyncClient, PostgrestAPIError

from photo_feed.adapters.lazy_client import LazyClient
from photo_feed.domain.users import UserRecord
from photo_feed.services.errors import DuplicateRecordError
from photo_feed.services.users import UserRepository

_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: LazyClient[AsyncClient]

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for a normalized email, if present."""
        client = await self.client.get()
        response = (
            await client.table("users")
            .select("id, email, name, password_hash, role, created_at")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    async def create_user(self, user: UserRecord) -> UserRecord:
        """Insert a user row; the unique email constraint rejects duplicates."""
        client = await self.client.get()
        try:
            response = (
                await client.table("users")
                .insert(
                    {
                        "id": user.id,
                        "email": user.email,
                        "name": user.name,
                        "password_hash": user.password_hash,
                        "role": user.role,
                        "created_at": user.created_at.isoformat(),
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateRecordError(user.email) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        email=str(row["email"]),
        name=str(row["name"]),
        password_hash=str(row["password_hash"]),
        role=str(row["role"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )

"""Domain models for photos and likes."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Photo:
    """A published photo with its denormalized like counter."""

    id: str
    creator_id: str
    creator_name: str
    creator_role: str
    image_url: str
    title: str
    caption: str
    created_at: datetime
    likes: int = 0
    location: str | None = None
    people: list[str] | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the JSON wire form (camelCase keys, optional fields omitted)."""
        payload: dict[str, object] = {
            "id": self.id,
            "creatorId": self.creator_id,
            "creatorName": self.creator_name,
            "creatorRole": self.creator_role,
            "imageUrl": self.image_url,
            "title": self.title,
            "caption": self.caption,
            "likes": self.likes,
            "createdAt": self.created_at.isoformat(),
        }
        if self.location:
            payload["location"] = self.location
        if self.people:
            payload["people"] = list(self.people)
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Photo":
        """Rebuild a photo from its wire form."""
        people = payload.get("people")
        return cls(
            id=str(payload["id"]),
            creator_id=str(payload["creatorId"]),
            creator_name=str(payload.get("creatorName") or ""),
            creator_role=str(payload.get("creatorRole") or ""),
            image_url=str(payload["imageUrl"]),
            title=str(payload["title"]),
            caption=str(payload.get("caption") or ""),
            created_at=datetime.fromisoformat(str(payload["createdAt"])),
            likes=int(payload.get("likes") or 0),  # type: ignore[call-overload]
            location=payload.get("location") or None,  # type: ignore[arg-type]
            people=list(people) if isinstance(people, list) else None,
        )


@dataclass(frozen=True)
class NewPhoto:
    """Fields supplied when publishing a photo."""

    title: str
    caption: str
    location: str | None = None
    people: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LikeKey:
    """Composite identity of a like; at most one like per user and photo."""

    photo_id: str
    user_id: str


@dataclass(frozen=True)
class LikeResult:
    """Like counter after a like or unlike."""

    likes: int
    liked: bool


@dataclass(frozen=True)
class LikeSummary:
    """Authoritative like count for a photo and the caller's like state."""

    count: int
    user_has_liked: bool


@dataclass(frozen=True)
class PhotoUpload:
    """Image file received with a new photo."""

    file_name: str
    content: bytes
    content_type: str


def parse_people(raw: str | None) -> list[str]:
    """Split a comma-separated list of tagged people."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]

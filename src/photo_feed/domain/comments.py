"""Domain models for comments."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Comment:
    """A comment on a photo; partitioned by photo id."""

    id: str
    photo_id: str
    user_id: str
    user_name: str
    content: str
    created_at: datetime
    user_role: str | None = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "photoId": self.photo_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
        }
        if self.user_role:
            payload["userRole"] = self.user_role
        return payload

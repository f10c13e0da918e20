"""Pydantic models for JSON request bodies.

Required fields are optional here so the services can report which one is
missing with a descriptive 400 error.
"""

from pydantic import BaseModel, Field


class LikeRequest(BaseModel):
    """Like or unlike payload."""

    photo_id: str | None = Field(default=None, alias="photoId")
    user_id: str | None = Field(default=None, alias="userId")


class CommentRequest(BaseModel):
    """New comment payload."""

    photo_id: str | None = Field(default=None, alias="photoId")
    user_id: str | None = Field(default=None, alias="userId")
    user_name: str | None = Field(default=None, alias="userName")
    user_role: str | None = Field(default=None, alias="userRole")
    content: str | None = None


class SignInRequest(BaseModel):
    """Sign-in payload."""

    email: str | None = None
    password: str | None = None


class SignUpRequest(BaseModel):
    """Sign-up payload."""

    email: str | None = None
    password: str | None = None
    name: str | None = None

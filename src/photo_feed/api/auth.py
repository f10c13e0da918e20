"""Sign-in and sign-up endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from photo_feed.api.models import SignInRequest, SignUpRequest
from photo_feed.domain.users import CONSUMER, CREATOR

if TYPE_CHECKING:
    from photo_feed.containers import AppContainer

router = APIRouter(tags=["auth"])


@router.post("/signin")
async def signin(body: SignInRequest, request: Request) -> dict[str, object]:
    """Exchange email and password for an access token."""
    container: AppContainer = request.app.state.container
    result = await container.user_service.sign_in(body.email, body.password)
    return {
        "token": result.token,
        "message": "Sign-in successful.",
        "user": result.user.public_payload(),
    }


@router.post("/signup-consumer", status_code=status.HTTP_201_CREATED)
async def signup_consumer(body: SignUpRequest, request: Request) -> dict[str, object]:
    """Register a consumer account."""
    return await _sign_up(request, body, CONSUMER)


@router.post("/signup-creator", status_code=status.HTTP_201_CREATED)
async def signup_creator(body: SignUpRequest, request: Request) -> dict[str, object]:
    """Register a creator account."""
    return await _sign_up(request, body, CREATOR)


async def _sign_up(
    request: Request, body: SignUpRequest, role: str
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    user = await container.user_service.sign_up(
        body.email, body.password, body.name, role=role
    )
    return {
        "message": f"User ({role.capitalize()}) registered successfully",
        "user": user.public_payload(),
    }

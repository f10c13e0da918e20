"""Comment endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, Response, status

from photo_feed.api.identity import get_caller
from photo_feed.api.models import CommentRequest
from photo_feed.domain.users import Caller

if TYPE_CHECKING:
    from photo_feed.containers import AppContainer

router = APIRouter(tags=["comments"])


@router.get("/comments")
async def list_comments(
    request: Request, x_photo_id: str | None = Header(default=None)
) -> list[dict[str, object]]:
    """Return the comments on a photo, newest first."""
    container: AppContainer = request.app.state.container
    comments = await container.comment_service.list_comments(x_photo_id)
    return [comment.to_payload() for comment in comments]


@router.post("/comment", status_code=status.HTTP_201_CREATED)
async def create_comment(
    body: CommentRequest,
    request: Request,
    caller: Caller | None = Depends(get_caller),
) -> dict[str, object]:
    """Add a comment to a photo."""
    container: AppContainer = request.app.state.container
    comment = await container.comment_service.create_comment(
        photo_id=body.photo_id,
        user_id=body.user_id or (caller.id if caller else None),
        content=body.content,
        user_name=body.user_name or (caller.name if caller else None),
        user_role=body.user_role or (caller.role if caller else None),
    )
    return comment.to_payload()


@router.delete("/comment/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    request: Request,
    caller: Caller | None = Depends(get_caller),
) -> Response:
    """Delete a comment written by the caller."""
    container: AppContainer = request.app.state.container
    await container.comment_service.delete_comment(caller, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

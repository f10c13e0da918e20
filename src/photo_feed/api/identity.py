"""Caller identity resolution for request handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from photo_feed.domain.users import Caller

if TYPE_CHECKING:
    from photo_feed.containers import AppContainer


async def get_caller(  # noqa: PLR0913
    request: Request,
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller | None:
    """Resolve the caller from a Bearer token or the identity headers.

    A token, when present, wins and must be valid. Without one the
    ``x-user-*`` headers set by the front end are used.
    """
    container: AppContainer = request.app.state.container
    caller = container.tokens.caller_from_header(authorization)
    if caller is not None:
        return caller
    if not x_user_id:
        return None
    return Caller(id=x_user_id, name=x_user_name, role=x_user_role)

"""Exception handlers mapping failures to ``{"error": ...}`` responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from photo_feed.services.errors import PhotoFeedError

_logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "list_photos": "Failed to fetch photos",
    "get_photo": "Failed to fetch photo",
    "create_photo": "Failed to create photo",
    "delete_photo": "Failed to delete photo",
    "like_photo": "Failed to like photo",
    "unlike_photo": "Failed to unlike photo",
    "get_likes": "Failed to fetch likes",
    "list_comments": "Failed to fetch comments",
    "create_comment": "Failed to create comment",
    "delete_comment": "Failed to delete comment",
    "signin": "Failed to sign in.",
    "signup_consumer": "Failed to register user (Consumer).",
    "signup_creator": "Failed to register user (Creator).",
}


def register_exception_handlers(app: FastAPI) -> None:
    """Install the API's exception handlers on the app."""
    app.add_exception_handler(PhotoFeedError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)


async def _service_error_handler(
    request: Request, exc: PhotoFeedError
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted(
        {".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()}
    )
    detail = ", ".join(field for field in fields if field) or "body"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {detail}"},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    route_name = _route_name(request)
    _logger.error("Unhandled error in %s", route_name or request.url.path, exc_info=exc)
    message = _FAILURE_MESSAGES.get(route_name or "", "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


def _route_name(request: Request) -> str | None:
    route = request.scope.get("route")
    if route is not None:
        return getattr(route, "name", None)
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None)

"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import (
    Depends,
    FastAPI,
    File,
    Form,
    Header,
    Request,
    Response,
    UploadFile,
    status,
)

from photo_feed.api.auth import router as auth_router
from photo_feed.api.comments import router as comments_router
from photo_feed.api.errors import register_exception_handlers
from photo_feed.api.identity import get_caller
from photo_feed.api.models import LikeRequest
from photo_feed.app_logging import configure_logging
from photo_feed.containers import AppContainer
from photo_feed.domain.photos import LikeResult, NewPhoto, PhotoUpload, parse_people
from photo_feed.domain.users import Caller


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    register_exception_handlers(app)

    app.include_router(comments_router)
    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/photos")
    async def list_photos(
        request: Request, page: int = 1, limit: int | None = None
    ) -> list[dict[str, object]]:
        """Return a page of photos, newest first."""
        state_container: AppContainer = request.app.state.container
        photos = await state_container.photo_service.list_photos(page, limit)
        return [photo.to_payload() for photo in photos]

    @app.get("/photo/{photo_id}")
    async def get_photo(photo_id: str, request: Request) -> dict[str, object]:
        """Return a single photo."""
        state_container: AppContainer = request.app.state.container
        photo = await state_container.photo_service.get_photo(photo_id)
        return photo.to_payload()

    @app.post("/photo", status_code=status.HTTP_201_CREATED)
    async def create_photo(  # noqa: PLR0913
        request: Request,
        caller: Caller | None = Depends(get_caller),
        file: UploadFile | None = File(default=None),
        title: str | None = Form(default=None),
        caption: str | None = Form(default=None),
        location: str | None = Form(default=None),
        people: str | None = Form(default=None),
    ) -> dict[str, object]:
        """Publish a photo; only creators may upload."""
        state_container: AppContainer = request.app.state.container
        upload = None
        if file is not None:
            upload = PhotoUpload(
                file_name=file.filename or "upload",
                content=await file.read(),
                content_type=file.content_type or "application/octet-stream",
            )
        details = NewPhoto(
            title=(title or "").strip(),
            caption=caption or "",
            location=location or None,
            people=parse_people(people),
        )
        photo = await state_container.photo_service.create_photo(
            caller, upload, details
        )
        return photo.to_payload()

    @app.delete("/photo/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_photo(
        photo_id: str,
        request: Request,
        caller: Caller | None = Depends(get_caller),
    ) -> Response:
        """Delete a photo owned by the caller."""
        state_container: AppContainer = request.app.state.container
        await state_container.photo_service.delete_photo(caller, photo_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/like")
    async def like_photo(
        body: LikeRequest,
        request: Request,
        caller: Caller | None = Depends(get_caller),
    ) -> dict[str, object]:
        """Like a photo and return its like count."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.like_service.like(
            body.photo_id, _like_user_id(body, caller)
        )
        return _like_payload(result)

    @app.post("/unlike")
    async def unlike_photo(
        body: LikeRequest,
        request: Request,
        caller: Caller | None = Depends(get_caller),
    ) -> dict[str, object]:
        """Remove the caller's like and return the like count."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.like_service.unlike(
            body.photo_id, _like_user_id(body, caller)
        )
        return _like_payload(result)

    @app.get("/likes")
    async def get_likes(
        request: Request,
        x_photo_id: str | None = Header(default=None),
        x_user_id: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Return the like count of a photo and whether the user liked it."""
        state_container: AppContainer = request.app.state.container
        summary = await state_container.like_service.summary(x_photo_id, x_user_id)
        return {"count": summary.count, "userHasLiked": summary.user_has_liked}

    return app


def _like_user_id(body: LikeRequest, caller: Caller | None) -> str | None:
    if body.user_id:
        return body.user_id
    return caller.id if caller else None


def _like_payload(result: LikeResult) -> dict[str, object]:
    return {"likes": result.likes, "liked": result.liked}

"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from api.dependencies import get_bookmark_store, require_api_token
from schemas.bookmark import BookmarkResponse
from services import bookmark_service
from services.bookmark_store import BookmarkStore

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(require_api_token)],
)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    return await bookmark_service.list_bookmarks(store)


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    The body is validated by the service rather than by a pydantic body model so
    that the first violated rule is reported with its exact message.
    """
    bookmark = await bookmark_service.create_bookmark(store, payload)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{bookmark.id}"
    return bookmark


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return await bookmark_service.get_bookmark(store, bookmark_id)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(store, bookmark_id)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: int,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """Apply a partial update; fields not in the body keep their values."""
    await bookmark_service.update_bookmark(store, bookmark_id, payload)

"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from api.dependencies import get_bookmark_store, get_existing_bookmark, get_settings
from core.config import Settings
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse, ErrorResponse
from services import bookmark_service
from services.bookmark_store import BookmarkStore

router = APIRouter(prefix="/bookmark", tags=["bookmarks"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Bookmark doesn't exist"}}
INVALID = {400: {"model": ErrorResponse, "description": "Invalid request body"}}


def _field_bag(payload: Any) -> dict[str, Any]:
    """Treat anything other than a JSON object as an empty payload."""
    return payload if isinstance(payload, dict) else {}


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await bookmark_service.list_bookmarks(store)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    responses=INVALID,
)
async def create_bookmark(
    response: Response,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
    settings: Settings = Depends(get_settings),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    - **title**, **url**, **rating** are required
    - **rating** must be a whole number within the configured range (1-5 by default)
    - **url** must be an absolute http/https URL
    """
    bookmark = await bookmark_service.create_bookmark(store, _field_bag(payload), settings)
    response.headers["Location"] = f"{router.prefix}/{bookmark.id}"
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse, responses=NOT_FOUND)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", status_code=204, responses={**NOT_FOUND, **INVALID})
async def update_bookmark(
    payload: Any = Body(default=None),
    bookmark: Bookmark = Depends(get_existing_bookmark),
    store: BookmarkStore = Depends(get_bookmark_store),
    settings: Settings = Depends(get_settings),
) -> None:
    """Update any of title, url, description or rating. Other fields are left as they are."""
    await bookmark_service.update_bookmark(store, bookmark, _field_bag(payload), settings)


@router.delete("/{bookmark_id}", status_code=204, responses=NOT_FOUND)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(store, bookmark)

"""FastAPI dependencies for injection."""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.bookmark import Bookmark
from services.bookmark_store import BookmarkStore, InMemoryBookmarkStore, SqlBookmarkStore
from services.exceptions import BookmarkNotFoundError


@lru_cache
def get_memory_store() -> InMemoryBookmarkStore:
    """Process-wide in-memory store, created on first use."""
    return InMemoryBookmarkStore()


async def get_bookmark_store(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> BookmarkStore:
    """Return the configured bookmark store for this request."""
    if settings.bookmark_store == "memory":
        return get_memory_store()
    return SqlBookmarkStore(db)


async def get_existing_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Bookmark:
    """
    Resolve the path id to a stored bookmark.

    Raises BookmarkNotFoundError before the endpoint runs, so GET/PATCH/DELETE on
    an unknown id never reach storage writes. An id that isn't an integer can't
    name a stored record, so it is reported the same way.
    """
    try:
        key = int(bookmark_id)
    except ValueError:
        raise BookmarkNotFoundError(bookmark_id) from None

    bookmark = await store.get_by_id(key)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


__all__ = [
    "get_async_session",
    "get_bookmark_store",
    "get_existing_bookmark",
    "get_memory_store",
    "get_settings",
]

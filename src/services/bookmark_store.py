"""
Storage backends for bookmarks.

Both backends implement `BookmarkStore` and hand out `Bookmark` model instances,
so the service layer and the response schema don't care where records live:

- `SqlBookmarkStore` persists through an `AsyncSession` (one per request).
- `InMemoryBookmarkStore` keeps records in a process-wide dict.
"""
import asyncio
import logging
from typing import Any, Protocol

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark

logger = logging.getLogger(__name__)


class BookmarkStore(Protocol):
    """Key-indexed bookmark storage."""

    async def list_bookmarks(self) -> list[Bookmark]:
        """Return all bookmarks ordered by id."""
        ...

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with this id, or None."""
        ...

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        """Store a new bookmark and return it with its generated id."""
        ...

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        """Overwrite the given fields. Returns None if the id is unknown."""
        ...

    async def delete(self, bookmark_id: int) -> bool:
        """Remove a bookmark. Returns False if the id is unknown."""
        ...

    async def ping(self) -> bool:
        """Return True if the backend is reachable."""
        ...


class SqlBookmarkStore:
    """
    Bookmark store backed by a SQLAlchemy async session.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_bookmarks(self) -> list[Bookmark]:
        result = await self._db.execute(select(Bookmark).order_by(Bookmark.id))
        return list(result.scalars().all())

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        return await self._db.get(Bookmark, bookmark_id)

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        bookmark = Bookmark(**fields)
        self._db.add(bookmark)
        await self._db.flush()
        await self._db.refresh(bookmark)
        return bookmark

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        bookmark = await self.get_by_id(bookmark_id)
        if bookmark is None:
            return None

        for field, value in fields.items():
            setattr(bookmark, field, value)

        await self._db.flush()
        await self._db.refresh(bookmark)
        return bookmark

    async def delete(self, bookmark_id: int) -> bool:
        bookmark = await self.get_by_id(bookmark_id)
        if bookmark is None:
            return False

        await self._db.delete(bookmark)
        await self._db.flush()
        return True

    async def ping(self) -> bool:
        try:
            await self._db.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database health check failed")
            return False
        return True


class InMemoryBookmarkStore:
    """
    Bookmark store that keeps records in process memory.

    Mutations are serialized with an asyncio lock. Ids come from a counter that
    only moves forward, so a deleted id is never handed out again.
    """

    def __init__(self) -> None:
        self._bookmarks: dict[int, Bookmark] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def list_bookmarks(self) -> list[Bookmark]:
        return [self._bookmarks[key] for key in sorted(self._bookmarks)]

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        return self._bookmarks.get(bookmark_id)

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        async with self._lock:
            bookmark = Bookmark(id=self._next_id, **fields)
            self._bookmarks[bookmark.id] = bookmark
            self._next_id += 1
        return bookmark

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        async with self._lock:
            current = self._bookmarks.get(bookmark_id)
            if current is None:
                return None
            # Build the replacement first so a rejected value leaves the record as it was
            values = {
                column.key: getattr(current, column.key)
                for column in Bookmark.__table__.columns
            }
            values.update(fields)
            bookmark = Bookmark(**values)
            self._bookmarks[bookmark_id] = bookmark
        return bookmark

    async def delete(self, bookmark_id: int) -> bool:
        async with self._lock:
            return self._bookmarks.pop(bookmark_id, None) is not None

    async def ping(self) -> bool:
        return True

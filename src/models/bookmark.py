"""Bookmark model for storing bookmarks."""
from typing import Any

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from models.base import Base, TimestampMixin
from schemas.validators import coerce_rating
from services.exceptions import BookmarkStoreError


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model - a rated URL with a title and optional description.

    Column values are checked on assignment. SQLite's loose column types would
    otherwise store a text rating that the response schema can't serialize, so
    a write that PostgreSQL would refuse is refused here for every backend.
    """

    __tablename__ = "bookmarks"
    # Without AUTOINCREMENT, SQLite hands out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    @validates("title", "url")
    def validate_required_text(self, key: str, value: Any) -> str:
        if not isinstance(value, str):
            raise BookmarkStoreError(key, value)
        return value

    @validates("description")
    def validate_description(self, key: str, value: Any) -> str | None:
        if value is not None and not isinstance(value, str):
            raise BookmarkStoreError(key, value)
        return value

    @validates("rating")
    def validate_rating(self, key: str, value: Any) -> int:
        rating = coerce_rating(value)
        if rating is None:
            raise BookmarkStoreError(key, value)
        return rating

    def __repr__(self) -> str:
        return f"<Bookmark id={self.id} url={self.url!r}>"

"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import escape_markup, sanitize_html

# Fields a client may set on create and change on patch, in the order they are
# reported in the empty-patch message.
MUTABLE_FIELDS = ("title", "url", "description", "rating")


class BookmarkResponse(BaseModel):
    """
    Public representation of a stored bookmark.

    Text fields are sanitized on the way out, so every response (single record
    or list) goes through the same transform. The url only has its angle
    brackets escaped, which keeps query strings intact.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None = None
    rating: int

    @field_validator("title", "description", mode="after")
    @classmethod
    def sanitize_text_fields(cls, v: str | None) -> str | None:
        """Neutralize embedded markup."""
        return sanitize_html(v)

    @field_validator("url", mode="after")
    @classmethod
    def escape_url(cls, v: str) -> str:
        return escape_markup(v)


class ErrorDetail(BaseModel):
    """Human-readable error message."""

    message: str = Field(description="Fixed message describing the rejection")


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    error: ErrorDetail

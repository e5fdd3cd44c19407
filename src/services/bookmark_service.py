"""Service layer for bookmark validation and CRUD operations."""
import logging
from typing import Any

from core.config import Settings
from models.bookmark import Bookmark
from schemas.bookmark import MUTABLE_FIELDS
from schemas.validators import coerce_rating, is_web_url
from services.bookmark_store import BookmarkStore
from services.exceptions import (
    BookmarkNotFoundError,
    EmptyPatchError,
    InvalidRatingError,
    InvalidUrlError,
    MissingFieldError,
)

logger = logging.getLogger(__name__)


def required_fields(settings: Settings) -> tuple[str, ...]:
    """Fields a create payload must contain, in the order they are checked."""
    fields: tuple[str, ...] = ("title", "url", "rating")
    if settings.require_description:
        fields += ("description",)
    return fields


def _check_rating(value: Any, settings: Settings) -> int:
    rating = coerce_rating(value)
    if rating is None or not settings.min_rating <= rating <= settings.max_rating:
        logger.warning("Rejected bookmark rating: %r", value)
        raise InvalidRatingError(settings.min_rating, settings.max_rating)
    return rating


def _check_url(value: Any) -> str:
    if not is_web_url(value):
        logger.warning("Rejected bookmark url: %r", value)
        raise InvalidUrlError()
    return value


def validate_new_bookmark(payload: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """
    Validate a create payload and return the fields to persist.

    Checks run in a fixed order and stop at the first failure:
    1. Required fields (title, url, rating, and description if configured) must be truthy
    2. Rating must be a whole number within the configured range
    3. Url must be an absolute http/https URL

    Unknown keys, including a client-supplied id, are dropped.

    Raises:
        MissingFieldError: A required field is missing or empty.
        InvalidRatingError: The rating is not an integer in range.
        InvalidUrlError: The url is not a valid web URL.
    """
    for field in required_fields(settings):
        if not payload.get(field):
            logger.warning("Rejected bookmark: missing %s", field)
            raise MissingFieldError(field)

    rating = _check_rating(payload["rating"], settings)
    url = _check_url(payload["url"])

    return {
        "title": payload["title"],
        "url": url,
        "rating": rating,
        "description": payload.get("description"),
    }


def validate_patch(payload: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """
    Validate a patch payload and return the recognized fields it sets.

    Only title, url, description and rating are considered; other keys are
    ignored. At least one of them must have a non-empty value, but once that
    holds every recognized key is written as sent, so `"description": null`
    clears the description.

    Url and rating are only re-checked when `settings.validate_patch_fields`
    is on.

    Raises:
        EmptyPatchError: None of the mutable fields has a non-empty value.
        InvalidRatingError, InvalidUrlError: With field validation enabled.
    """
    if not any(payload.get(field) for field in MUTABLE_FIELDS):
        logger.warning("Rejected bookmark patch: no recognized fields")
        raise EmptyPatchError(MUTABLE_FIELDS)

    changes = {field: payload[field] for field in MUTABLE_FIELDS if field in payload}

    if settings.validate_patch_fields:
        if "rating" in changes:
            changes["rating"] = _check_rating(changes["rating"], settings)
        if "url" in changes:
            changes["url"] = _check_url(changes["url"])

    return changes


def merge_patch(bookmark: Bookmark, changes: dict[str, Any]) -> dict[str, Any]:
    """Return the bookmark's fields with `changes` written over them."""
    merged = {field: getattr(bookmark, field) for field in MUTABLE_FIELDS}
    merged.update(changes)
    return merged


async def create_bookmark(
    store: BookmarkStore,
    payload: dict[str, Any],
    settings: Settings,
) -> Bookmark:
    """Validate a create payload and store the new bookmark."""
    fields = validate_new_bookmark(payload, settings)
    bookmark = await store.insert(fields)
    logger.info("Created bookmark %s", bookmark.id)
    return bookmark


async def list_bookmarks(store: BookmarkStore) -> list[Bookmark]:
    """Get all bookmarks."""
    return await store.list_bookmarks()


async def update_bookmark(
    store: BookmarkStore,
    bookmark: Bookmark,
    payload: dict[str, Any],
    settings: Settings,
) -> Bookmark:
    """
    Apply a patch to an existing bookmark.

    `bookmark` is the record already resolved by the lookup gate, so the patch is
    validated before anything is written.
    """
    changes = validate_patch(payload, settings)
    merged = merge_patch(bookmark, changes)
    updated = await store.update(bookmark.id, merged)
    if updated is None:
        # Removed between the lookup and the write
        raise BookmarkNotFoundError(bookmark.id)
    logger.info("Updated bookmark %s fields=%s", bookmark.id, sorted(changes))
    return updated


async def delete_bookmark(store: BookmarkStore, bookmark: Bookmark) -> None:
    """Delete a bookmark already resolved by the lookup gate."""
    await store.delete(bookmark.id)
    logger.info("Deleted bookmark %s", bookmark.id)

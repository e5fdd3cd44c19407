"""
Tests for Bookmark model.

Covers the column checks that run on assignment, so neither backend can hold a
record the response schema can't serialize.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from services.exceptions import BookmarkStoreError


VALID_FIELDS = {
    "title": "Example",
    "url": "https://example.com",
    "description": "desc",
    "rating": 3,
}


# =============================================================================
# Rating
# =============================================================================


@pytest.mark.parametrize("rating", ["abc", None, 2.5, True, [3]])
def test__bookmark_model__rejects_non_integer_rating(rating: object) -> None:
    """Test that a rating that isn't a whole number is refused on construction."""
    with pytest.raises(BookmarkStoreError) as exc_info:
        Bookmark(**{**VALID_FIELDS, "rating": rating})
    assert exc_info.value.field == "rating"
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "server error"


@pytest.mark.parametrize(("rating", "expected"), [("4", 4), (5.0, 5), (42, 42)])
def test__bookmark_model__stores_rating_as_int(rating: object, expected: int) -> None:
    """Test that whole-number ratings are stored as ints; the range is not checked here."""
    assert Bookmark(**{**VALID_FIELDS, "rating": rating}).rating == expected


def test__bookmark_model__rejected_assignment_keeps_old_value() -> None:
    """Test that a refused assignment leaves the attribute unchanged."""
    bookmark = Bookmark(**VALID_FIELDS)
    with pytest.raises(BookmarkStoreError):
        bookmark.rating = "abc"
    assert bookmark.rating == 3


# =============================================================================
# Text columns
# =============================================================================


@pytest.mark.parametrize("field", ["title", "url"])
@pytest.mark.parametrize("value", [None, 5, {"a": 1}])
def test__bookmark_model__required_text_must_be_string(field: str, value: object) -> None:
    """Test that title and url only accept strings."""
    with pytest.raises(BookmarkStoreError) as exc_info:
        Bookmark(**{**VALID_FIELDS, field: value})
    assert exc_info.value.field == field


def test__bookmark_model__empty_strings_allowed() -> None:
    """Test that empty strings are stored as they are."""
    bookmark = Bookmark(**{**VALID_FIELDS, "title": "", "description": ""})
    assert bookmark.title == ""
    assert bookmark.description == ""


def test__bookmark_model__description_nullable() -> None:
    """Test that description accepts None but not other non-strings."""
    assert Bookmark(**{**VALID_FIELDS, "description": None}).description is None
    with pytest.raises(BookmarkStoreError):
        Bookmark(**{**VALID_FIELDS, "description": 7})


async def test__bookmark_model__persists_coerced_rating(db_session: AsyncSession) -> None:
    """Test that a coerced rating round-trips through the database as an int."""
    bookmark = Bookmark(**{**VALID_FIELDS, "rating": "2"})
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    assert bookmark.rating == 2
    assert isinstance(bookmark.rating, int)

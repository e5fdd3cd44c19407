"""Exceptions raised by the bookmark service layer."""
from collections.abc import Iterable


class BookmarkError(Exception):
    """
    Base exception for bookmark operations that map to a client-facing error.

    Carries the HTTP status code and the exact message returned to the client
    in the `{"error": {"message": ...}}` body.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkValidationError(BookmarkError):
    """Raised when a create or patch payload is rejected."""

    status_code = 400


class MissingFieldError(BookmarkValidationError):
    """Raised when a required field is missing or empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing '{field}' in request body")


class InvalidRatingError(BookmarkValidationError):
    """Raised when the rating is not an integer within the allowed range."""

    def __init__(self, min_rating: int, max_rating: int) -> None:
        self.min_rating = min_rating
        self.max_rating = max_rating
        super().__init__(
            f"Rating must be an integer between {min_rating} and {max_rating}",
        )


class InvalidUrlError(BookmarkValidationError):
    """Raised when the url is not an absolute http(s) URL."""

    def __init__(self) -> None:
        super().__init__("The url must be a valid url")


class EmptyPatchError(BookmarkValidationError):
    """Raised when a patch contains none of the mutable fields."""

    def __init__(self, fields: Iterable[str]) -> None:
        quoted = [f"'{field}'" for field in fields]
        super().__init__(
            f"Request body must contain either {', '.join(quoted[:-1])} or {quoted[-1]}",
        )


class BookmarkNotFoundError(BookmarkError):
    """Raised when a bookmark id does not resolve to a stored record."""

    status_code = 404

    def __init__(self, bookmark_id: int | str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark doesn't exist")


class BookmarkStoreError(BookmarkError):
    """
    Raised when a value that doesn't fit its column reaches the store.

    Patches are not re-validated by default, so this is where a text rating or
    a null title ends up. Reported like any other store failure.
    """

    status_code = 500

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__("server error")

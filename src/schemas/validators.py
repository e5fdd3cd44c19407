"""
Shared validation and sanitization functions for bookmark payloads.

The service layer uses these to check create/patch payloads, and the response
schema uses `sanitize_html` on title and description and `escape_markup` on url
for every record leaving the API.
"""
import re
from typing import Any

import bleach
from bleach.sanitizer import ALLOWED_ATTRIBUTES, ALLOWED_PROTOCOLS, ALLOWED_TAGS
from pydantic import HttpUrl, TypeAdapter, ValidationError

# Inert formatting markup is kept; anything else (script, iframe, style, ...) is
# entity-escaped. Event handler attributes are never on the allow-list.
SAFE_TAGS = ALLOWED_TAGS | {
    "br",
    "del",
    "div",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "img",
    "p",
    "pre",
    "span",
    "sub",
    "sup",
    "u",
}
SAFE_ATTRIBUTES = {
    **ALLOWED_ATTRIBUTES,
    "img": ["src", "alt", "title", "width", "height"],
}

_http_url_adapter = TypeAdapter(HttpUrl)

# Absolute http(s) URI made of RFC 3986 characters only: a dot-separated host of
# letter/digit/hyphen labels (or a bracketed IPv6 literal), optional port, then
# path, query and fragment. HttpUrl alone repairs input like "http:example.com".
_URI_CHARS = r"A-Za-z0-9\-._~!$&'()*+,;=:@%"
_HOST_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
WEB_URI_PATTERN = re.compile(
    rf"https?://"
    rf"(?:[{_URI_CHARS}]*@)?"
    rf"(?:\[[0-9A-Fa-f:.]+\]|{_HOST_LABEL}(?:\.{_HOST_LABEL})*)"
    rf"(?::[0-9]*)?"
    rf"(?:/[{_URI_CHARS}/]*)?"
    rf"(?:\?[{_URI_CHARS}/?]*)?"
    rf"(?:#[{_URI_CHARS}/?]*)?",
    re.IGNORECASE,
)
BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def sanitize_html(value: str | None) -> str | None:
    """
    Neutralize active markup in a free-text value.

    Disallowed tags are escaped (`<script>` becomes `&lt;script&gt;`), disallowed
    attributes such as `onerror` are dropped, and existing entities are left
    alone so running this twice gives the same result as running it once.
    """
    if value is None:
        return None
    return bleach.clean(
        value,
        tags=SAFE_TAGS,
        attributes=SAFE_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,
        strip_comments=True,
    )


def escape_markup(value: str | None) -> str | None:
    """
    Escape angle brackets only.

    Used for urls, where `sanitize_html` would turn every `&` in a query string
    into `&amp;`. Ampersands are left alone, so this is idempotent too.
    """
    if value is None:
        return None
    return value.replace("<", "&lt;").replace(">", "&gt;")


def coerce_rating(value: Any) -> int | None:
    """
    Convert a submitted rating to an int.

    Accepts ints, integral floats and numeric strings. Returns None for anything
    that is not a whole number (booleans included).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def is_web_url(value: Any) -> bool:
    """
    Check that a value is an absolute http/https URL with a host.

    The string must be a well-formed RFC 3986 URI as submitted (no surrounding
    whitespace, no backslashes, valid percent escapes); pydantic then checks the
    host and port. Syntax only - no request is made.
    """
    if not isinstance(value, str):
        return False
    if not WEB_URI_PATTERN.fullmatch(value) or BAD_PERCENT_ESCAPE.search(value):
        return False
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True

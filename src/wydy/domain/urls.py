"""URL-likeness predicate used by the web resolver."""

from __future__ import annotations

import re

_SCHEME_RE = re.compile(r"^(?:https?|ftp)://[^\s/?#]+(?:[/?#]\S*)?$", re.IGNORECASE)
_BARE_RE = re.compile(
    r"^(?:www\.)?(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}(?::\d+)?(?:[/?#]\S*)?$",
    re.IGNORECASE,
)


def is_url(text: str) -> bool:
    """Whether *text* looks like something a browser can open directly.

    Accepts explicit ``http``/``https``/``ftp`` URLs and bare ``host.tld/path``
    forms. Text containing whitespace never qualifies.

    Examples:
        >>> is_url("example.com")
        True
        >>> is_url("https://duckduckgo.com/?q=a%20b")
        True
        >>> is_url("rust%20book")
        False
    """
    if not text or any(ch.isspace() for ch in text):
        return False
    return bool(_SCHEME_RE.match(text) or _BARE_RE.match(text))

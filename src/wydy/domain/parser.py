"""Tokenizer: split raw text into a leading keyword and the remainder."""

from __future__ import annotations

from typing import NamedTuple

from wydy.domain.types import Keyword

# Spoken-style synonyms accepted for each keyword.
_KEYWORDS: dict[str, Keyword] = {
    "search": Keyword.SEARCH,
    "open": Keyword.OPEN,
    "add": Keyword.ADD,
    "edit": Keyword.EDIT,
    "delete": Keyword.DELETE,
    "remove": Keyword.DELETE,
    "run": Keyword.RUN,
}


class ParseResult(NamedTuple):
    """A ``(keyword, remainder)`` pair."""

    keyword: Keyword
    remainder: str


def parse_command(text: str) -> ParseResult:
    """Split *text* into its leading keyword and the rest.

    Examples:
        >>> parse_command("search rust book")
        ParseResult(keyword=<Keyword.SEARCH: 'search'>, remainder='rust book')
        >>> parse_command("htop")
        ParseResult(keyword=<Keyword.NONE: 'none'>, remainder='htop')
    """
    stripped = text.strip()
    if not stripped:
        return ParseResult(Keyword.NONE, "")

    head, *rest = stripped.split(maxsplit=1)
    keyword = _KEYWORDS.get(head.lower())
    if keyword is None:
        return ParseResult(Keyword.NONE, stripped)
    return ParseResult(keyword, rest[0] if rest else "")

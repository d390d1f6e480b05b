"""Tests for the URL-likeness predicate."""

import pytest

from wydy.domain.urls import is_url


@pytest.mark.parametrize(
    "text",
    [
        "example.com",
        "www.example.com",
        "docs.python.org/3/library",
        "https://duckduckgo.com/?q=rust%20book",
        "http://localhost:8000/",
        "ftp://mirror.example.org/pub",
        "example.com:8080/path",
    ],
)
def test_urls(text: str) -> None:
    assert is_url(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "rust%20book",
        "rust book",
        "htop",
        "example",
        "example.c0m",
        "https://",
    ],
)
def test_not_urls(text: str) -> None:
    assert not is_url(text)

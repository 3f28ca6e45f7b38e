"""Url: parsed URL context for matching, and the inputs that read it.

Glob patterns are matched against the full URL text. Query parameters are
parsed once, in order, with percent-decoding of names and values. ``+`` is
left alone (it is not form encoding), so base64 payloads survive intact.
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass

import re2

from debouncer._types import MatchingData

# RFC 3986 characters, with "%" only as part of a valid escape.
_URL_TEXT = re2.compile(r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+")

type QueryItem = tuple[str, str | None]


@dataclass(frozen=True, slots=True)
class Url:
    """A parsed URL.

    Build instances with :func:`parse_url`, which validates the text and
    fills in ``query_items``.
    """

    raw: str
    query_items: tuple[QueryItem, ...] = ()

    def query_param(self, name: str) -> str | None:
        """Value of the first query item named exactly ``name``.

        Returns None if there is no such item, or if it has no ``=``.
        """
        for item_name, item_value in self.query_items:
            if item_name == name:
                return item_value
        return None

    def __str__(self) -> str:
        return self.raw


def parse_url(text: str) -> Url | None:
    """Parse ``text`` into a Url, or return None if it is not a valid URL.

    Rejects empty text, characters outside RFC 3986 (spaces, quotes,
    angle brackets, non-ASCII and so on), broken percent escapes, malformed
    IPv6 hosts and non-numeric ports. Relative references are accepted.
    """
    if not isinstance(text, str) or _URL_TEXT.fullmatch(text) is None:
        return None
    try:
        parts = urllib.parse.urlsplit(text)
        parts.port  # noqa: B018 - raises ValueError for a non-numeric port
    except ValueError:
        return None
    return Url(raw=text, query_items=_parse_query(parts.query))


def _parse_query(query: str) -> tuple[QueryItem, ...]:
    items: list[QueryItem] = []
    for part in query.split("&"):
        if not part:
            continue
        if "=" in part:
            name, value = part.split("=", 1)
            items.append((urllib.parse.unquote(name), urllib.parse.unquote(value)))
        else:
            items.append((urllib.parse.unquote(part), None))
    return tuple(items)


@dataclass(frozen=True, slots=True)
class UrlInput:
    """Extracts the full URL text."""

    def get(self, ctx: Url, /) -> MatchingData:
        return ctx.raw


@dataclass(frozen=True, slots=True)
class QueryParamInput:
    """Extracts a query parameter value by name (first occurrence)."""

    name: str

    def get(self, ctx: Url, /) -> MatchingData:
        return ctx.query_param(self.name)

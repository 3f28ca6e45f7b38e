"""Glob matching with ``*`` and ``?`` wildcards.

The dialect is the one used by the published debounce lists:

    "*://*.foo.com/redirect.php?url=*"
    "*foo*"
    "https://???.foo.com/*"

- ``?`` matches exactly one character.
- ``*`` matches a run of characters, but every ``*`` accumulated since the
  last literal run must be paid for with at least one character. ``**``
  therefore needs two or more characters, and ``*foo`` does not match
  ``"foo"``.
- The literal run following a ``*`` is located with a leftmost search and
  compared verbatim, so a ``?`` inside that run is a literal ``?``.

Matching is a single forward scan with no backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from debouncer._types import MatchingData

WILDCARD = "*"
SINGLE = "?"


def matches(pattern: str, value: str) -> bool:
    """Check whether ``value`` matches the glob ``pattern``.

    Total and side-effect free: every string is a valid pattern.

    >>> matches("*://*.leechall.com/redirect.php?url=*",
    ...         "https://test.leechall.com/redirect.php?url=blah")
    True
    >>> matches("*foo", "foo")
    False
    """
    pattern_len = len(pattern)
    value_len = len(value)
    p = 0
    v = 0
    wildcards = 0

    while p < pattern_len and v < value_len:
        char = pattern[p]

        if char == SINGLE:
            p += 1
            v += 1
        elif char == WILDCARD:
            wildcards += 1

            if p + 1 == pattern_len:
                # Trailing wildcard swallows the rest, if there is enough of it.
                return value_len - v >= wildcards

            end = pattern.find(WILDCARD, p + 1)
            if end == -1:
                end = pattern_len
            literal = pattern[p + 1 : end]

            if not literal:
                # Adjacent "*": keep accumulating.
                p += 1
                continue

            found = value.find(literal, v)
            if found == -1 or found - v < wildcards:
                return False

            v = found + len(literal)
            wildcards = 0
            p = end
        elif char == value[v]:
            p += 1
            v += 1
        else:
            return False

    return p == pattern_len and v == value_len


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """Glob pattern match (see :func:`matches`).

    Returns False for non-string or None input values.
    """

    pattern: str

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str):
            return False
        return matches(self.pattern, value)

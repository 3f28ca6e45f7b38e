"""Core protocols and type aliases for debouncer.

- MatchingData is the value handed from an input to a matcher
- DataInput extracts that value from a context (a parsed URL)
- InputMatcher decides whether the value matches
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

# None means "data not available" and makes the predicate evaluate to False.
MatchingData = str | None

Ctx = TypeVar("Ctx", contravariant=True)


@runtime_checkable
class DataInput(Protocol[Ctx]):
    """Extract a value from a context.

    Returning None signals "data not available" and causes the predicate
    to evaluate to False.
    """

    def get(self, ctx: Ctx, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against an extracted value."""

    def matches(self, value: MatchingData, /) -> bool: ...

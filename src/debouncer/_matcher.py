"""Matcher — ordered field matchers with first-match-wins semantics.

- Field matchers are evaluated in order
- The first field matcher whose predicate holds decides the result
- Later field matchers are never consulted once one has matched
- on_no_match is the fallback when nothing matches
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from debouncer._predicate import Predicate


class MatcherError(Exception):
    """Base class for errors raised while building matchers and rule sets."""


@dataclass(frozen=True, slots=True)
class FieldMatcher[Ctx, A]:
    """Pairs a predicate with the action returned when it holds."""

    predicate: Predicate[Ctx]
    action: A


@dataclass(frozen=True, slots=True)
class Matcher[Ctx, A]:
    """Top-level matcher with first-match-wins semantics.

    Evaluates field matchers in order and returns the action of the first
    one whose predicate holds. If none holds, returns on_no_match.
    """

    matcher_list: tuple[FieldMatcher[Ctx, A], ...]
    on_no_match: A | None = None

    def evaluate(self, ctx: Any) -> A | None:
        """Evaluate this matcher against a context."""
        for fm in self.matcher_list:
            if fm.predicate.evaluate(ctx):
                return fm.action
        return self.on_no_match

    def __len__(self) -> int:
        return len(self.matcher_list)

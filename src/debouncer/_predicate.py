"""Predicate composition over URL inputs.

SinglePredicate pairs a DataInput (what to look at) with an InputMatcher
(how to compare it). And, Or and Not compose predicates with short-circuit
evaluation, which is what gives a rule its "no exclude matches, some
include matches" shape.

The Predicate union type is pattern-matchable via match/case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from debouncer._glob import GlobMatcher

if TYPE_CHECKING:
    from collections.abc import Iterable

    from debouncer._types import DataInput, InputMatcher


@dataclass(frozen=True, slots=True)
class SinglePredicate[Ctx]:
    """Extract a value from the context, then match it.

    A None value evaluates to False without consulting the matcher.
    """

    input: DataInput[Ctx]
    matcher: InputMatcher

    def evaluate(self, ctx: Any) -> bool:
        value = self.input.get(ctx)
        if value is None:
            return False
        return self.matcher.matches(value)


@dataclass(frozen=True, slots=True)
class And[Ctx]:
    """All predicates must hold. Stops at the first False; empty is True."""

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Any) -> bool:
        return all(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or[Ctx]:
    """Any predicate must hold. Stops at the first True; empty is False."""

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Any) -> bool:
        return any(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Not[Ctx]:
    predicate: Predicate[Ctx]

    def evaluate(self, ctx: Any) -> bool:
        return not self.predicate.evaluate(ctx)


type Predicate[Ctx] = SinglePredicate[Ctx] | And[Ctx] | Or[Ctx] | Not[Ctx]


def any_glob[Ctx](data_input: DataInput[Ctx], patterns: Iterable[str]) -> Or[Ctx]:
    """Build an Or with one glob predicate per pattern, in the given order.

    No patterns gives an empty Or, which never holds.
    """
    return Or(tuple(SinglePredicate(data_input, GlobMatcher(p)) for p in patterns))

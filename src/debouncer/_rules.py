"""Debounce rules and redirect resolution.

A rule says which URLs are tracking redirects (``include``/``exclude``
globs) and how to pull the real destination out of them (``action`` and
``param``). Resolution is:

1. pick the first rule whose excludes all miss and some include hits;
2. give up unless that rule's actions contain ``redirect``;
3. read the ``param`` query parameter;
4. base64-decode it when the actions contain ``base64``;
5. return it if it parses as a URL.

Every failure along the way means "no redirect". Nothing here raises for
bad input data: a broken rule must never break navigation.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from debouncer._matcher import FieldMatcher, Matcher
from debouncer._predicate import And, Not, Predicate, any_glob
from debouncer._url import QueryParamInput, Url, UrlInput, parse_url

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

ACTION_SEPARATOR = ","


class DebounceAction(StrEnum):
    """Recognised action tokens (case-sensitive)."""

    REDIRECT = "redirect"
    BASE64 = "base64"


def parse_actions(spec: str) -> tuple[DebounceAction, ...]:
    """Split a comma-separated action spec into recognised actions.

    Unknown and empty tokens are dropped. Order of first occurrence is
    kept and duplicates are removed.

    >>> parse_actions("redirect,base64,unknown")
    (<DebounceAction.REDIRECT: 'redirect'>, <DebounceAction.BASE64: 'base64'>)
    """
    actions: list[DebounceAction] = []
    for token in spec.split(ACTION_SEPARATOR):
        try:
            action = DebounceAction(token)
        except ValueError:
            continue
        if action not in actions:
            actions.append(action)
    return tuple(actions)


@dataclass(frozen=True, slots=True)
class DebounceRule:
    """One entry of a debounce list.

    ``actions`` and the compiled predicate are derived once, at
    construction, from the other fields.
    """

    include: tuple[str, ...]
    exclude: tuple[str, ...] = ()
    action: str = ""
    param: str = ""

    actions: tuple[DebounceAction, ...] = field(init=False, compare=False)
    _predicate: Predicate[Url] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", tuple(self.include))
        object.__setattr__(self, "exclude", tuple(self.exclude))
        object.__setattr__(self, "actions", parse_actions(self.action))

        url_input = UrlInput()
        # Excludes first: lists are short and And stops at the first miss.
        predicate = And(
            (
                Not(any_glob(url_input, self.exclude)),
                any_glob(url_input, self.include),
            )
        )
        object.__setattr__(self, "_predicate", predicate)

    def to_dict(self) -> dict[str, Any]:
        """Wire form of this rule, as found in the published list."""
        return {
            "include": list(self.include),
            "exclude": list(self.exclude),
            "action": self.action,
            "param": self.param,
        }

    @property
    def predicate(self) -> Predicate[Url]:
        return self._predicate

    def applies_to(self, url: Url) -> bool:
        """True if no exclude pattern and at least one include pattern matches."""
        return self._predicate.evaluate(url)

    def extract_redirect(self, url: Url) -> str | None:
        """Run this rule's action pipeline against ``url``."""
        if DebounceAction.REDIRECT not in self.actions:
            logger.debug(f"Rule for param {self.param!r} has no redirect action")
            return None

        value = QueryParamInput(self.param).get(url)
        if value is None:
            logger.debug(f"Query parameter {self.param!r} missing from {url.raw}")
            return None

        if DebounceAction.BASE64 in self.actions:
            try:
                value = base64.b64decode(value, validate=True).decode("utf-8")
            except (binascii.Error, ValueError) as e:
                logger.debug(f"Could not decode {self.param!r} payload: {e}")
                return None

        target = parse_url(value)
        if target is None:
            logger.debug(f"Payload of {self.param!r} is not a valid URL")
            return None
        return target.raw


@dataclass(frozen=True, slots=True)
class RuleSet:
    """An immutable, ordered collection of debounce rules.

    Rules are compiled into a first-match-wins Matcher at construction.
    """

    rules: tuple[DebounceRule, ...] = ()
    _matcher: Matcher[Url, DebounceRule] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        matcher = Matcher(
            matcher_list=tuple(FieldMatcher(rule.predicate, rule) for rule in self.rules)
        )
        object.__setattr__(self, "_matcher", matcher)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[DebounceRule]:
        return iter(self.rules)

    def select(self, url: Url) -> DebounceRule | None:
        """Return the first rule that applies to ``url``, if any."""
        return self._matcher.evaluate(url)

    def redirect_url(self, url: str | Url) -> str | None:
        """Resolve the redirect target for ``url`` (see :func:`resolve_redirect`)."""
        if isinstance(url, Url):
            candidate = url
        else:
            candidate = parse_url(url)
            if candidate is None:
                logger.debug(f"Candidate is not a valid URL: {url!r}")
                return None

        rule = self.select(candidate)
        if rule is None:
            return None
        # The first applicable rule decides, even when it yields nothing.
        return rule.extract_redirect(candidate)


def resolve_redirect(
    candidate: str | Url, rules: RuleSet | Iterable[DebounceRule]
) -> str | None:
    """Return the URL that ``candidate`` redirects to, or None.

    ``rules`` is normally a published RuleSet; any iterable of rules is
    compiled on the fly.
    """
    rule_set = rules if isinstance(rules, RuleSet) else RuleSet(tuple(rules))
    return rule_set.redirect_url(candidate)

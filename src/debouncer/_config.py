"""Decoding of published debounce lists.

The list is a JSON array of rule objects:

    [
      {
        "include": ["*://*.example.com/out?url=*"],
        "exclude": ["*://*.example.com/out?url=*example.com*"],
        "action": "redirect,base64",
        "param": "url"
      }
    ]

Decoding path:
  JSON text → loads_rules() → parse_rules() → parse_rule() → RuleSet

Unknown keys in a rule object are ignored. Unknown action tokens are not
an error either; they are dropped when the rule derives its actions.
"""

from __future__ import annotations

import json
from typing import Any

from debouncer._matcher import MatcherError
from debouncer._rules import DebounceRule, RuleSet

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_RULES = 4096
MAX_PATTERN_LENGTH = 8192

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigParseError(MatcherError):
    """Error decoding a debounce list into rules."""


class TooManyRulesError(MatcherError):
    """Debounce list has more rules than MAX_RULES."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many rules: {count} exceeds maximum {max_}")


class PatternTooLongError(MatcherError):
    """A glob pattern exceeds MAX_PATTERN_LENGTH."""

    def __init__(self, index: int, length: int, max_: int) -> None:
        self.index = index
        self.length = length
        self.max = max_
        super().__init__(
            f"rule {index}: pattern length {length} exceeds maximum {max_}"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Decoding
# ═══════════════════════════════════════════════════════════════════════════════


def loads_rules(text: str | bytes) -> RuleSet:
    """Decode a JSON debounce list into a RuleSet.

    Raises:
        ConfigParseError: invalid JSON or malformed rules
        TooManyRulesError: more than MAX_RULES rules
        PatternTooLongError: a pattern longer than MAX_PATTERN_LENGTH
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"invalid JSON: {e}"
        raise ConfigParseError(msg) from e
    return parse_rules(data)


def parse_rules(data: list[Any]) -> RuleSet:
    """Parse a decoded debounce list (a list of dicts) into a RuleSet."""
    if not isinstance(data, list):
        msg = f"expected list of rules, got {type(data).__name__}"
        raise ConfigParseError(msg)
    if len(data) > MAX_RULES:
        raise TooManyRulesError(len(data), MAX_RULES)

    return RuleSet(tuple(parse_rule(item, index) for index, item in enumerate(data)))


def parse_rule(data: dict[str, Any], index: int = 0) -> DebounceRule:
    """Parse one rule object.

    ``include``, ``action`` and ``param`` are required; ``exclude`` defaults
    to an empty list. ``index`` is only used in error messages.
    """
    if not isinstance(data, dict):
        msg = f"rule {index}: expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    include = _parse_patterns(data, "include", index, required=True)
    exclude = _parse_patterns(data, "exclude", index, required=False)
    action = _parse_string(data, "action", index)
    param = _parse_string(data, "param", index)

    return DebounceRule(include=include, exclude=exclude, action=action, param=param)


def _parse_patterns(
    data: dict[str, Any], key: str, index: int, *, required: bool
) -> tuple[str, ...]:
    if key not in data:
        if required:
            msg = f"rule {index}: missing required field {key!r}"
            raise ConfigParseError(msg)
        return ()

    raw = data[key]
    if not isinstance(raw, list):
        msg = f"rule {index}: {key!r} must be a list, got {type(raw).__name__}"
        raise ConfigParseError(msg)

    for pattern in raw:
        if not isinstance(pattern, str):
            msg = (
                f"rule {index}: {key!r} patterns must be strings, "
                f"got {type(pattern).__name__}"
            )
            raise ConfigParseError(msg)
        if len(pattern) > MAX_PATTERN_LENGTH:
            raise PatternTooLongError(index, len(pattern), MAX_PATTERN_LENGTH)

    return tuple(raw)


def _parse_string(data: dict[str, Any], key: str, index: int) -> str:
    if key not in data:
        msg = f"rule {index}: missing required field {key!r}"
        raise ConfigParseError(msg)

    value = data[key]
    if not isinstance(value, str):
        msg = f"rule {index}: {key!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value

"""debouncer — Skip tracking redirects using published debounce lists.

All public types are exported from this module for flat imports:

    from debouncer import loads_rules, matches, resolve_redirect
"""

__version__ = "0.1.0"

# Decoding, see debouncer._config for details
from debouncer._config import (
    MAX_PATTERN_LENGTH,
    MAX_RULES,
    ConfigParseError,
    PatternTooLongError,
    TooManyRulesError,
    loads_rules,
    parse_rule,
    parse_rules,
)

# Glob matching
from debouncer._glob import GlobMatcher, matches

# Matcher
from debouncer._matcher import FieldMatcher, Matcher, MatcherError

# Predicates
from debouncer._predicate import And, Not, Or, Predicate, SinglePredicate, any_glob

# Rules
from debouncer._rules import (
    DebounceAction,
    DebounceRule,
    RuleSet,
    parse_actions,
    resolve_redirect,
)
from debouncer._store import RuleStore
from debouncer._types import DataInput, InputMatcher, MatchingData

# URL context
from debouncer._url import QueryParamInput, Url, UrlInput, parse_url

__all__ = [
    # Protocols
    "DataInput",
    "InputMatcher",
    "MatchingData",
    # Glob matching
    "matches",
    "GlobMatcher",
    # Predicates
    "SinglePredicate",
    "And",
    "Or",
    "Not",
    "Predicate",
    "any_glob",
    # Matcher
    "FieldMatcher",
    "Matcher",
    "MatcherError",
    # URL context
    "Url",
    "UrlInput",
    "QueryParamInput",
    "parse_url",
    # Rules
    "DebounceAction",
    "DebounceRule",
    "RuleSet",
    "parse_actions",
    "resolve_redirect",
    "RuleStore",
    # Decoding
    "loads_rules",
    "parse_rules",
    "parse_rule",
    "ConfigParseError",
    "TooManyRulesError",
    "PatternTooLongError",
    "MAX_RULES",
    "MAX_PATTERN_LENGTH",
]

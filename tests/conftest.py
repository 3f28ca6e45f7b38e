"""Conformance fixture loader for debouncer.

Loads YAML fixtures from tests/fixtures/ and converts them to debouncer
types for parametrized testing:

- glob.yaml: pattern/value/expect vectors for ``matches``
- debounce.yaml: rule lists with the URLs resolved against them
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from debouncer import DebounceRule, RuleSet, parse_rules

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class GlobCase:
    """A single pattern/value vector."""

    fixture_name: str
    pattern: str
    value: str
    expect: bool

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.pattern!r}~{self.value!r}"


@dataclass
class RedirectCase:
    """A single URL resolved against a fixture's rule list."""

    fixture_name: str
    case_name: str
    rules: RuleSet
    url: str
    expect: str | None

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── Fixture loading ────────────────────────────────────────────────────────


def _load_documents(name: str) -> list[dict[str, Any]]:
    docs: list[dict[str, Any]] = []
    with (FIXTURE_DIR / name).open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            docs.append(doc)
    return docs


def load_glob_fixtures() -> list[GlobCase]:
    """Load all glob vectors.

    A document-level ``value`` applies to every case that has none.
    """
    cases: list[GlobCase] = []
    for doc in _load_documents("glob.yaml"):
        default_value = doc.get("value")
        for case in doc["cases"]:
            cases.append(
                GlobCase(
                    fixture_name=doc["name"],
                    pattern=str(case["pattern"]),
                    value=str(case.get("value", default_value)),
                    expect=bool(case["expect"]),
                )
            )
    return cases


def load_redirect_fixtures() -> list[RedirectCase]:
    """Load all redirect resolution vectors."""
    cases: list[RedirectCase] = []
    for doc in _load_documents("debounce.yaml"):
        rules = parse_rules(doc["rules"])
        for case in doc["cases"]:
            cases.append(
                RedirectCase(
                    fixture_name=doc["name"],
                    case_name=case["name"],
                    rules=rules,
                    url=case["url"],
                    expect=case["expect"],
                )
            )
    return cases


# ─── Shared rules ───────────────────────────────────────────────────────────


@pytest.fixture
def redirect_rule() -> DebounceRule:
    return DebounceRule(
        include=("*://tracker.example/go?*",),
        exclude=(),
        action="redirect",
        param="url",
    )


@pytest.fixture
def base64_rule() -> DebounceRule:
    return DebounceRule(
        include=("*://tracker.example/b64?*",),
        exclude=(),
        action="redirect,base64",
        param="url",
    )

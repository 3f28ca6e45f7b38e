"""RuleStore: the active debounce list of a process.

Fetching, caching and refresh scheduling live elsewhere; they hand decoded
lists (or raw JSON) to a RuleStore. Readers always see one complete
RuleSet: publishing swaps a single reference, and readers never lock.
"""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from debouncer._config import loads_rules
from debouncer._matcher import MatcherError
from debouncer._rules import RuleSet, resolve_redirect

if TYPE_CHECKING:
    from debouncer._url import Url

logger = logging.getLogger(__name__)


class RuleStore:
    """Holds the current RuleSet snapshot."""

    def __init__(self, rule_set: RuleSet | None = None) -> None:
        self._lock = threading.Lock()
        self._current = rule_set if rule_set is not None else RuleSet()
        self._published_at: datetime | None = None

    @property
    def current(self) -> RuleSet:
        return self._current

    @property
    def published_at(self) -> datetime | None:
        """UTC time of the last successful publish, or None."""
        return self._published_at

    def publish(self, rule_set: RuleSet) -> None:
        """Replace the active snapshot."""
        with self._lock:
            self._current = rule_set
            self._published_at = datetime.now(UTC)
        logger.info(f"Published debounce list with {len(rule_set)} rules")

    def load(self, text: str | bytes) -> RuleSet:
        """Decode a JSON debounce list and publish it.

        On failure the previous snapshot stays active and the error is
        re-raised.
        """
        try:
            rule_set = loads_rules(text)
        except MatcherError as e:
            logger.error(f"Rejected debounce list, keeping {len(self._current)} rules: {e}")
            raise
        self.publish(rule_set)
        return rule_set

    def redirect_url(self, url: str | Url) -> str | None:
        return resolve_redirect(url, self._current)

"""Visit filter for HistoryBlock.

Decides whether a visited address must be purged from history, given one
snapshot of the blacklist state. Patterns are regular expressions matched
with search semantics (anywhere in the address). A pattern that does not
compile never matches; the remaining patterns are still evaluated.
"""

from __future__ import annotations

import logging
import re
import threading

from historyblock.models.blacklist import BlacklistState, ListMode, VisitDecision

logger = logging.getLogger(__name__)

# Marker stored in the cache for patterns that failed to compile
_INVALID = object()


class VisitFilter:
    """Stateless purge decision over a BlacklistState snapshot.

    Compiled patterns are cached by pattern text when cache_patterns is
    True. The cache never changes a decision; invalidate() empties it.
    """

    def __init__(self, cache_patterns: bool = True) -> None:
        self._cache_patterns = cache_patterns
        self._cache: dict[str, object] = {}
        self._cache_lock = threading.Lock()
        self._reported_invalid: set[str] = set()

    @property
    def cache_patterns(self) -> bool:
        return self._cache_patterns

    def decide(self, address: str, state: BlacklistState) -> VisitDecision:
        """Decide whether the address must be purged.

        Args:
            address: Visited URL
            state: Snapshot of patterns and list mode

        Returns:
            VisitDecision with purge flag and the first matching pattern
        """
        matched = self.first_match(address, state.patterns)
        found = matched is not None

        if state.mode is ListMode.BLACKLIST:
            purge = found
        else:
            purge = not found

        return VisitDecision(
            address=address,
            purge=purge,
            mode=state.mode,
            matched_pattern=matched,
        )

    def first_match(self, address: str, patterns) -> str | None:
        """Return the first pattern that matches the address, in order."""
        for pattern in patterns:
            compiled = self._compile(pattern)
            if compiled is None:
                continue
            if compiled.search(address):
                return pattern
        return None

    def is_valid_pattern(self, pattern: str) -> bool:
        return self._compile(pattern) is not None

    def invalidate(self, _action: str | None = None) -> None:
        """Empty the compiled pattern cache.

        Invalid patterns are warned about again after an invalidation.
        Accepts the notification name so it can subscribe to the notifier.
        """
        with self._cache_lock:
            self._cache.clear()
            self._reported_invalid.clear()
        logger.debug("Pattern cache invalidated")

    def cache_size(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    def _compile(self, pattern: str) -> re.Pattern | None:
        if self._cache_patterns:
            with self._cache_lock:
                cached = self._cache.get(pattern)
            if cached is not None:
                return None if cached is _INVALID else cached

        try:
            compiled = re.compile(pattern)
        except (re.error, TypeError) as exc:
            self._report_invalid(pattern, exc)
            compiled = None

        if self._cache_patterns:
            with self._cache_lock:
                self._cache[pattern] = _INVALID if compiled is None else compiled
        return compiled

    def _report_invalid(self, pattern: str, exc: Exception) -> None:
        with self._cache_lock:
            if pattern in self._reported_invalid:
                return
            self._reported_invalid.add(pattern)
        logger.warning(f"Invalid pattern never matches (pattern={pattern!r}, error={exc})")

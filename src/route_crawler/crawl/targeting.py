from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

# A "-" inside a keyword also matches "_", whitespace, "%20" or nothing.
DEFAULT_AUTH_KEYWORDS = frozenset({"log-in", "sign-in", "sign-up", "register"})

_KEYWORD_SEPARATOR = r"(?:[-_\s]|%20)?"


@lru_cache(maxsize=32)
def _keyword_pattern(keywords: frozenset[str]) -> Optional[Pattern[str]]:
    """Whole-word alternation, so "/blog-insights" never matches "log-in"."""

    if not keywords:
        return None
    alternatives = []
    for keyword in sorted(keywords):
        words = [re.escape(word) for word in re.split(r"[-_\s]+", keyword.lower()) if word]
        if words:
            alternatives.append(_KEYWORD_SEPARATOR.join(words))
    if not alternatives:
        return None
    return re.compile(
        r"(?<![a-z0-9])(?:" + "|".join(alternatives) + r")(?![a-z0-9])",
        re.IGNORECASE,
    )


@dataclass(slots=True)
class RouteFilter:
    """Decides which discovered routes are expanded into visits.

    Denied routes still live in the frontier; they are only never visited.
    """

    excluded_keywords: frozenset[str] = field(
        default_factory=lambda: DEFAULT_AUTH_KEYWORDS
    )
    extra_predicates: Tuple[Callable[[str], bool], ...] = ()

    @classmethod
    def allow_all(cls) -> "RouteFilter":
        return cls(excluded_keywords=frozenset())

    def is_allowed(self, route: Optional[str]) -> bool:
        if not route:
            return False
        if self.contains_excluded_keyword(route):
            return False
        return not any(predicate(route) for predicate in self.extra_predicates)

    def contains_excluded_keyword(self, value: str) -> bool:
        if not value or not self.excluded_keywords:
            return False
        pattern = _keyword_pattern(frozenset(self.excluded_keywords))
        return pattern is not None and pattern.search(value) is not None

    def partition(self, routes: Iterable[str]) -> tuple[List[str], List[str]]:
        """Splits ``routes`` into ``(allowed, denied)`` keeping their order."""

        allowed: List[str] = []
        denied: List[str] = []
        for route in routes:
            (allowed if self.is_allowed(route) else denied).append(route)
        return allowed, denied

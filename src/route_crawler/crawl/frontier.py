"""Bookkeeping of discovered and visited routes for one crawl session."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.errors import InvalidSeedError
from .routes import ROOT_PATH, domain_of, normalize_route, qualify, validate_seed


class Frontier:
    """Discovered routes (insertion ordered) plus the set of visited ones.

    Routes are stored as discovered: the seed is absolute, links found on
    pages usually stay root-relative. Every membership test is made on the
    qualified ``domain + route`` form so both spellings of a page are the
    same route.
    """

    def __init__(self) -> None:
        self.domain: str = ""
        self._routes: List[str] = []
        self._index: dict[str, int] = {}
        self._visited: set[str] = set()
        self._skipped: set[str] = set()

    # ------------------------------------------------------------------
    # Seeding and discovery
    # ------------------------------------------------------------------
    def seed(self, route: Optional[str]) -> str:
        normalized = validate_seed(route)
        if self._routes:
            raise InvalidSeedError(route)

        self.domain = domain_of(normalized)
        self._routes.append(normalized)
        self._index[normalized] = 0
        return normalized

    def discover(self, candidates: Iterable[Optional[str]]) -> List[str]:
        """Appends unseen candidates and returns the newly-added ones."""

        added: List[str] = []
        for candidate in candidates:
            route = normalize_route(candidate)
            if route is None or route == ROOT_PATH:
                continue

            key = self.qualify(route)
            if key in self._index:
                continue

            self._index[key] = len(self._routes)
            self._routes.append(route)
            added.append(route)
        return added

    # ------------------------------------------------------------------
    # Visitation
    # ------------------------------------------------------------------
    def mark_visited(self, route: str) -> None:
        key = self.qualify(route)
        if key not in self._index:
            raise KeyError(f"Route was never discovered: {route}")
        self._visited.add(key)

    def mark_skipped(self, route: str) -> None:
        """Records a discovered route that will deliberately never be visited."""

        key = self.qualify(route)
        if key not in self._index:
            raise KeyError(f"Route was never discovered: {route}")
        self._skipped.add(key)

    def is_visited(self, route: str) -> bool:
        return self.qualify(route) in self._visited

    def is_complete(self) -> bool:
        """True once every route, the seed included, is visited or skipped."""

        if not self._routes:
            return False
        settled = self._visited | self._skipped
        return all(self.qualify(route) in settled for route in self._routes)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def qualify(self, route: str) -> str:
        normalized = normalize_route(route) or route
        if not self.domain:
            return normalized
        return qualify(self.domain, normalized)

    def position(self, route: str) -> int:
        """Zero-based discovery position of ``route``."""

        return self._index[self.qualify(route)]

    @property
    def seed_route(self) -> Optional[str]:
        return self._routes[0] if self._routes else None

    @property
    def routes(self) -> List[str]:
        return list(self._routes)

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self._visited)

    @property
    def skipped(self) -> frozenset[str]:
        return frozenset(self._skipped)

    def __contains__(self, route: object) -> bool:
        return isinstance(route, str) and self.qualify(route) in self._index

    def __len__(self) -> int:
        return len(self._routes)

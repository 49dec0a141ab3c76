"""Per-route diagnostics emitted while crawling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

logger = logging.getLogger("route_crawler")


@dataclass(slots=True)
class CrawlDiagnostics:
    """Thin wrapper over a logger so callers can swap the output channel."""

    log: logging.Logger = field(default=logger)

    def session(self, message: str) -> None:
        self.log.info(message)

    def visiting(self, position: str, route: str) -> None:
        self.log.info("%s - VISITING - %s", position, route)

    def captured(self, position: str, route: str, key_path: str) -> None:
        self.log.info("%s - CAPTURED - %s -> %s", position, route, key_path)

    def found(self, position: str, route: str, links: Sequence[str]) -> None:
        if not links:
            return
        listing = "\n".join(f"\t- {link}" for link in links)
        self.log.info("%s - FOUND - %s\n%s", position, route, listing)

    def skipped(self, route: str, reason: str) -> None:
        self.log.debug("SKIPPED - %s (%s)", route, reason)

    def failed(self, route: str, error: BaseException) -> None:
        self.log.warning("ERROR - %s: %s", route, error)

"""Exception hierarchy shared by the crawler components."""

from __future__ import annotations

from typing import Optional


class CrawlerError(RuntimeError):
    """Base class for every error raised by the crawler."""


class InvalidSeedError(CrawlerError, ValueError):
    """Raised when the seed URL does not look like an absolute http(s) URL."""

    def __init__(self, seed: Optional[str]) -> None:
        super().__init__(f"Invalid seed URL: {seed!r}")
        self.seed = seed


class RenderError(CrawlerError):
    """Raised when a single route cannot be navigated or captured."""

    def __init__(self, route: str, reason: str) -> None:
        super().__init__(f"{route}: {reason}")
        self.route = route
        self.reason = reason


class SinkError(CrawlerError):
    """Raised when capture artifacts cannot be persisted."""

    def __init__(self, key_path: str, reason: str) -> None:
        super().__init__(f"{key_path}: {reason}")
        self.key_path = key_path
        self.reason = reason


class SessionError(CrawlerError):
    """Raised when the rendering session cannot be started at all."""

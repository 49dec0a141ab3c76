"""Capabilities the crawl core consumes without knowing their implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.artifacts import CaptureBundle, RenderedPage


@runtime_checkable
class Renderer(Protocol):
    """A single browsing context driven by one caller at a time."""

    def start(self) -> None:
        """Acquire the browsing context. Failures here end the session."""

    def load(self, route: str) -> RenderedPage:
        """Navigate to ``route`` and capture it; raises ``RenderError``."""

    def close(self) -> None:
        """Release the browsing context."""


@runtime_checkable
class ArtifactSink(Protocol):
    """Persists capture bundles under keys derived from routes."""

    def ensure_path(self, key_path: str) -> None:
        """Idempotently prepare the location for ``key_path``; raises ``SinkError``."""

    def store(self, key_path: str, bundle: CaptureBundle) -> str:
        """Persist ``bundle`` and return where it went; raises ``SinkError``."""

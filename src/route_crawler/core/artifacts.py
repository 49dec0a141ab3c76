"""Shared artifact data structures passed between crawler stages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CaptureBundle:
    """Opaque capture output produced from one rendered page."""

    screenshot: Optional[bytes] = None
    html: Optional[str] = None
    media_urls: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.screenshot is None and self.html is None and not self.media_urls


@dataclass(frozen=True)
class RenderedPage:
    """Result of loading a single route in the browsing context."""

    url: str
    link_candidates: Tuple[Optional[str], ...] = ()
    capture: CaptureBundle = field(default_factory=CaptureBundle)

    @classmethod
    def from_iterables(
        cls,
        url: str,
        links: Optional[List[Optional[str]]] = None,
        *,
        screenshot: Optional[bytes] = None,
        html: Optional[str] = None,
        media_urls: Optional[List[str]] = None,
    ) -> "RenderedPage":
        return cls(
            url=url,
            link_candidates=tuple(links or ()),
            capture=CaptureBundle(
                screenshot=screenshot,
                html=html,
                media_urls=tuple(media_urls or ()),
            ),
        )


@dataclass(frozen=True)
class RouteFailure:
    """A contained per-route error."""

    route: str
    stage: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"route": self.route, "stage": self.stage, "message": self.message}


@dataclass
class CrawlReport:
    """Structured summary of one crawl session."""

    seed_url: str = ""
    state: str = "idle"
    discovered_routes: List[str] = field(default_factory=list)
    visited_routes: List[str] = field(default_factory=list)
    skipped_routes: List[str] = field(default_factory=list)
    stored_keys: List[str] = field(default_factory=list)
    failures: List[RouteFailure] = field(default_factory=list)
    truncated: bool = False

    @property
    def failed_routes(self) -> Tuple[str, ...]:
        return tuple(failure.route for failure in self.failures)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "state": self.state,
            "discovered_routes": list(self.discovered_routes),
            "visited_routes": list(self.visited_routes),
            "skipped_routes": list(self.skipped_routes),
            "stored_keys": list(self.stored_keys),
            "failures": [failure.to_dict() for failure in self.failures],
            "truncated": self.truncated,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "CrawlReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            seed_url=raw.get("seed_url", ""),
            state=raw.get("state", "idle"),
            discovered_routes=list(raw.get("discovered_routes", [])),
            visited_routes=list(raw.get("visited_routes", [])),
            skipped_routes=list(raw.get("skipped_routes", [])),
            stored_keys=list(raw.get("stored_keys", [])),
            failures=[RouteFailure(**entry) for entry in raw.get("failures", [])],
            truncated=bool(raw.get("truncated", False)),
        )


@dataclass
class FixedListReport:
    """Summary of a bounded fan-out run (profile search or feed extraction)."""

    label: str
    visited_urls: List[str] = field(default_factory=list)
    stored_keys: List[str] = field(default_factory=list)
    media_urls: Dict[str, List[str]] = field(default_factory=dict)
    failures: List[RouteFailure] = field(default_factory=list)
    cancelled: bool = False

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def to_json(self) -> str:
        data = {
            "label": self.label,
            "visited_urls": self.visited_urls,
            "stored_keys": self.stored_keys,
            "media_urls": self.media_urls,
            "failures": [failure.to_dict() for failure in self.failures],
            "cancelled": self.cancelled,
        }
        return json.dumps(data, indent=4)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

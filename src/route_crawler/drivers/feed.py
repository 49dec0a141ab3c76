"""Harvest media references from aggregator (feed) pages."""

from __future__ import annotations

from typing import Iterable, List

from ..crawl.routes import route_key, validate_seed
from .base import FixedListDriver, FixedTarget

FEED_NAMESPACE = "feeds"


class FeedDriver(FixedListDriver):
    """Visits each feed page once and records the media it references.

    The renderer must be created with ``collect_media=True`` for the
    bundles to carry media URLs.
    """

    label = FEED_NAMESPACE

    def __init__(self, feed_urls: Iterable[str], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        urls: List[str] = []
        for url in feed_urls:
            normalized = validate_seed(url)
            if normalized not in urls:
                urls.append(normalized)
        self.feed_urls = urls

    def namespace(self) -> str:
        return FEED_NAMESPACE

    def targets(self) -> List[FixedTarget]:
        return [
            FixedTarget(name=route_key(url), url=url, key_path=f"{FEED_NAMESPACE}/{route_key(url)}")
            for url in self.feed_urls
        ]

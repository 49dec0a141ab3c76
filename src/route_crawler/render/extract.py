"""HTML extraction of same-origin links and media references."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

MEDIA_SELECTOR = "img, video, audio, source"
MEDIA_ATTRIBUTES = ("src", "data-src", "poster", "srcset")


def is_same_origin_href(href: Optional[str]) -> bool:
    """Root-relative hrefs only; protocol-relative ``//host`` links are foreign."""

    return bool(href) and href.startswith("/") and not href.startswith("//")


def extract_link_candidates(html: str) -> List[Optional[str]]:
    """Collects ``a[href^='/']`` targets in document order."""

    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    candidates: List[Optional[str]] = []
    for anchor in soup.select("a[href^='/']"):
        href = anchor.get("href")
        if is_same_origin_href(href):
            candidates.append(href)
    return candidates


def _split_srcset(value: str) -> List[str]:
    urls: List[str] = []
    for entry in value.split(","):
        url = entry.strip().split(" ")[0]
        if url:
            urls.append(url)
    return urls


def extract_media_urls(
    html: str,
    base_url: Optional[str] = None,
    selector: str = MEDIA_SELECTOR,
) -> List[str]:
    """Collects media source attributes, deduplicated in document order.

    Relative references are resolved against ``base_url`` when given.
    """

    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    media: List[str] = []
    for element in soup.select(selector):
        for attribute in MEDIA_ATTRIBUTES:
            value = element.get(attribute)
            if not value:
                continue
            values = _split_srcset(value) if attribute == "srcset" else [value.strip()]
            for url in values:
                if not url or url.startswith("data:"):
                    continue
                if base_url:
                    url = urljoin(base_url, url)
                if url not in seen:
                    seen.add(url)
                    media.append(url)
    return media

"""Route normalization and naming helpers."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from ..core.errors import InvalidSeedError

SEED_PATTERN = re.compile(
    r"https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})
ROOT_PATH = "/"

_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)
_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def is_absolute(route: str) -> bool:
    parts = urlsplit(route)
    return bool(parts.scheme and parts.netloc)


def validate_seed(seed: Optional[str]) -> str:
    """Returns the normalized seed or raises :class:`InvalidSeedError`."""

    if not seed or not isinstance(seed, str):
        raise InvalidSeedError(seed)

    candidate = seed.strip()
    parts = urlsplit(candidate)
    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        raise InvalidSeedError(seed)

    if not SEED_PATTERN.match(candidate) and (parts.hostname or "") not in LOCAL_HOSTS:
        raise InvalidSeedError(seed)

    normalized = normalize_route(candidate)
    if normalized is None:
        raise InvalidSeedError(seed)
    return normalized


def normalize_route(route: Optional[str]) -> Optional[str]:
    """Canonical form used for route equality within a session.

    - Drops the fragment
    - Lower-cases scheme and host of absolute URLs
    - Uses ``/`` for an empty absolute path
    - Strips a trailing slash from every non-root path
    - Keeps the query string

    Returns ``None`` for values that are not routes (empty strings,
    protocol-relative or non-http URLs).
    """

    if not route:
        return None

    parts = urlsplit(route.strip())
    path = parts.path

    if parts.scheme or parts.netloc:
        if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
            return None
        path = _trim_path(path or ROOT_PATH)
        return urlunsplit(
            (parts.scheme.lower(), parts.netloc.lower(), path, parts.query, "")
        )

    if not path.startswith("/"):
        return None
    return urlunsplit(("", "", _trim_path(path), parts.query, ""))


def _trim_path(path: str) -> str:
    if path != ROOT_PATH and path.endswith("/"):
        trimmed = path.rstrip("/")
        return trimmed or ROOT_PATH
    return path


def domain_of(url: str) -> str:
    """Returns ``scheme://host[:port]`` for an absolute URL."""

    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def qualify(domain: str, route: str) -> str:
    """Turns a root-relative route into an absolute one under ``domain``."""

    if is_absolute(route):
        return route
    if not route.startswith("/"):
        route = "/" + route
    return domain.rstrip("/") + route


def route_key(url: str) -> str:
    """Filesystem-safe file stem for a route."""

    stem = _SCHEME_PREFIX.sub("", url).replace("/", "-")
    stem = _UNSAFE_KEY_CHARS.sub("_", stem).strip("-")
    return stem or "index"


def domain_namespace(url: str) -> str:
    """Directory name grouping every artifact of one crawled domain."""

    hostname = (urlsplit(url).hostname or "").lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return _UNSAFE_KEY_CHARS.sub("_", hostname) or "site"

"""Capture a username's public profile on a fixed set of platforms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from ..core.artifacts import RenderedPage
from ..crawl.routes import route_key
from .base import FixedListDriver, FixedTarget

ProfileHref = Union[str, Callable[[str], str]]


@dataclass(frozen=True)
class SocialPlatform:
    key: str
    href: ProfileHref

    def profile_url(self, username: str) -> str:
        if callable(self.href):
            return self.href(username)
        return self.href + username


DEFAULT_PLATFORMS: tuple[SocialPlatform, ...] = (
    SocialPlatform("twitter", "https://twitter.com/"),
    SocialPlatform("instagram", "https://instagram.com/"),
    SocialPlatform("facebook", "https://facebook.com/"),
    SocialPlatform("linkedin", "https://linkedin.com/in/"),
)


def clean_username(username: Optional[str]) -> str:
    value = (username or "").strip().lstrip("@")
    if not value or "/" in value:
        raise ValueError(f"Username is invalid: {username!r}")
    return value


class ProfileSearchDriver(FixedListDriver):
    """Screenshots ``username``'s profile page on every platform in order."""

    def __init__(
        self,
        username: str,
        *args,
        platforms: Sequence[SocialPlatform] = DEFAULT_PLATFORMS,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.username = clean_username(username)
        self.platforms = tuple(platforms)
        self.label = self.username

    def namespace(self) -> str:
        return route_key(self.username)

    def targets(self) -> List[FixedTarget]:
        folder = self.namespace()
        return [
            FixedTarget(
                name=platform.key,
                url=platform.profile_url(self.username),
                key_path=f"{folder}/{platform.key}",
            )
            for platform in self.platforms
        ]

    def on_captured(self, target: FixedTarget, page: RenderedPage) -> None:
        self.diagnostics.session(f"{target.name.capitalize()} captured")

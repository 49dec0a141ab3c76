"""Fixed-list entry points: profile search and feed extraction."""

from .base import FixedListDriver, FixedTarget
from .feed import FeedDriver
from .search import DEFAULT_PLATFORMS, ProfileSearchDriver, SocialPlatform

__all__ = [
    "DEFAULT_PLATFORMS",
    "FeedDriver",
    "FixedListDriver",
    "FixedTarget",
    "ProfileSearchDriver",
    "SocialPlatform",
]

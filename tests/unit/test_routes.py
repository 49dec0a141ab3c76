import pytest

from route_crawler.core.errors import InvalidSeedError  # type: ignore[import]
from route_crawler.crawl.routes import (  # type: ignore[import]
    domain_namespace,
    normalize_route,
    qualify,
    route_key,
    validate_seed,
)


@pytest.mark.parametrize(
    "route, expected",
    [
        ("/about/", "/about"),
        ("/about#team", "/about"),
        ("/search?q=1", "/search?q=1"),
        ("/", "/"),
        ("HTTPS://Example.COM", "https://example.com/"),
        ("https://example.com/a/", "https://example.com/a"),
        ("//cdn.example.com/lib.js", None),
        ("mailto:someone@example.com", None),
        ("relative/path", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_route(route, expected):
    assert normalize_route(route) == expected


def test_validate_seed_accepts_localhost():
    assert validate_seed("http://localhost:8000") == "http://localhost:8000/"


def test_validate_seed_rejects_hostless_url():
    with pytest.raises(InvalidSeedError):
        validate_seed("https://intranet")


def test_qualify_prefixes_domain_for_relative_routes():
    assert qualify("https://x.test", "/pricing") == "https://x.test/pricing"
    assert qualify("https://x.test/", "/pricing") == "https://x.test/pricing"
    assert qualify("https://x.test", "https://other.test/a") == "https://other.test/a"


def test_route_key_is_filesystem_safe():
    assert route_key("https://x.test/") == "x.test"
    assert route_key("https://x.test/blog/post-1") == "x.test-blog-post-1"
    assert route_key("http://x.test/search?q=a b") == "x.test-search_q_a_b"


def test_domain_namespace_drops_www():
    assert domain_namespace("https://www.Example.com/path") == "example.com"

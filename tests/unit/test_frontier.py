import pytest

from tests.helpers.crawler_imports import Frontier, InvalidSeedError


def _seeded(seed: str = "https://x.test/") -> Frontier:
    frontier = Frontier()
    frontier.seed(seed)
    return frontier


def test_seed_initializes_frontier_with_seed_only():
    frontier = _seeded()

    assert frontier.routes == ["https://x.test/"]
    assert frontier.domain == "https://x.test"
    assert frontier.visited == frozenset()


@pytest.mark.parametrize("seed", [None, "", "x.test", "ftp://x.test/", "/relative", "https://"])
def test_seed_rejects_malformed_urls(seed):
    with pytest.raises(InvalidSeedError):
        Frontier().seed(seed)


def test_seed_cannot_be_called_twice():
    frontier = _seeded()

    with pytest.raises(InvalidSeedError):
        frontier.seed("https://x.test/other")


def test_discover_deduplicates_across_calls():
    frontier = _seeded()

    first = frontier.discover(["/a", "/a", "/b"])
    second = frontier.discover(["/a", "/a", "/b"])

    assert first == ["/a", "/b"]
    assert second == []
    assert frontier.routes == ["https://x.test/", "/a", "/b"]


def test_discover_drops_root_and_null_candidates():
    frontier = _seeded()

    added = frontier.discover(["/", None, "", "/#top", "/c"])

    assert added == ["/c"]
    assert "/" not in frontier.routes


def test_discover_treats_absolute_and_relative_spellings_as_one_route():
    frontier = _seeded()

    frontier.discover(["/pricing"])
    added = frontier.discover(["https://X.test/pricing/", "/pricing#plans"])

    assert added == []
    assert len(frontier) == 2


def test_mark_visited_is_idempotent():
    frontier = _seeded()
    frontier.discover(["/a"])

    frontier.mark_visited("/a")
    frontier.mark_visited("https://x.test/a")

    assert frontier.visited == frozenset({"https://x.test/a"})
    assert frontier.is_visited("/a")
    assert frontier.is_visited("https://x.test/a")


def test_mark_visited_rejects_undiscovered_routes():
    frontier = _seeded()

    with pytest.raises(KeyError):
        frontier.mark_visited("/never-seen")


def test_is_complete_requires_seed_and_all_discovered_routes():
    frontier = _seeded()
    frontier.discover(["/a", "/login"])

    assert frontier.is_complete() is False

    frontier.mark_visited("https://x.test/")
    frontier.mark_visited("/a")
    assert frontier.is_complete() is False

    frontier.mark_skipped("/login")
    assert frontier.is_complete() is True
    assert frontier.is_visited("/login") is False


def test_is_complete_false_before_seeding():
    assert Frontier().is_complete() is False


def test_position_follows_discovery_order():
    frontier = _seeded()
    frontier.discover(["/a", "/b"])

    assert frontier.position("https://x.test/") == 0
    assert frontier.position("https://x.test/b") == 2

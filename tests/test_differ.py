"""Tests for snapshot diffing."""

import pytest

from link_hub.core import Category, ChangelogEntry, ChangeType, Link, compare_links


def category(category_id: str, *links: tuple[str, str]) -> Category:
    return Category(
        id=category_id,
        title=category_id.title(),
        links=tuple(Link(name=name, url=url) for name, url in links),
    )


@pytest.fixture
def previous() -> list[Category]:
    return [
        category("trade", ("Trade Site", "https://trade.example.com"), ("poe.ninja", "https://poe.ninja")),
        category("builds", ("Path of Building", "https://pob.example.com")),
    ]


@pytest.fixture
def current() -> list[Category]:
    return [
        category("trade", ("poe.ninja", "https://poe.ninja"), ("Exchange", "https://exchange.example.com")),
        category("builds", ("Path of Building", "https://pob.example.com")),
        category("maps", ("Atlas Planner", "https://atlas.example.com")),
    ]


def as_set(entries: list[ChangelogEntry]) -> set[tuple[str, str, str]]:
    return {(e.type.value, e.category_id, e.link_url) for e in entries}


def test_identical_snapshots_have_no_changes(current: list[Category]) -> None:
    """Test diffing a snapshot against itself."""
    assert compare_links(current, current) == []
    assert compare_links(list(current), [c for c in current]) == []


def test_added_and_removed(current: list[Category], previous: list[Category]) -> None:
    """Test added entries come first, then removed."""
    changes = compare_links(current, previous)

    assert changes == [
        ChangelogEntry(ChangeType.ADDED, "trade", "Exchange", "https://exchange.example.com"),
        ChangelogEntry(ChangeType.ADDED, "maps", "Atlas Planner", "https://atlas.example.com"),
        ChangelogEntry(ChangeType.REMOVED, "trade", "Trade Site", "https://trade.example.com"),
    ]


def test_reverse_diff_is_mirror(current: list[Category], previous: list[Category]) -> None:
    """Test swapping arguments swaps added and removed."""
    forward = as_set(compare_links(current, previous))
    backward = as_set(compare_links(previous, current))

    flipped = {("removed" if t == "added" else "added", cat, url) for t, cat, url in backward}
    assert forward == flipped


def test_moved_link_is_removed_and_added() -> None:
    """Test a link moved between categories shows up twice."""
    previous = [{"id": "trade", "links": [{"name": "Tool", "url": "https://x.com"}]}]
    current = [{"id": "builds", "links": [{"name": "Tool", "url": "https://x.com"}]}]

    changes = compare_links(current, previous)

    assert len(changes) == 2
    assert ChangelogEntry(ChangeType.REMOVED, "trade", "Tool", "https://x.com") in changes
    assert ChangelogEntry(ChangeType.ADDED, "builds", "Tool", "https://x.com") in changes


def test_rename_without_url_change_is_ignored() -> None:
    """Test URL is the identity of a link."""
    previous = [category("trade", ("Old Name", "https://x.com"))]
    current = [category("trade", ("New Name", "https://x.com"))]

    assert compare_links(current, previous) == []


@pytest.mark.parametrize("bad", [None, "snapshot", 42, {"id": "trade"}])
def test_invalid_snapshots_return_empty(bad, current: list[Category]) -> None:
    """Test invalid input never raises."""
    assert compare_links(bad, current) == []
    assert compare_links(current, bad) == []
    assert compare_links(bad, bad) == []


def test_malformed_categories_and_links_are_skipped() -> None:
    """Test broken items inside a snapshot are ignored."""
    current = [
        None,
        {"id": "", "links": [{"name": "A", "url": "https://a.com"}]},
        {"id": "trade", "links": "nope"},
        {"id": "builds", "links": [None, {"name": "NoUrl"}, {"name": "B", "url": "https://b.com"}]},
    ]

    assert compare_links(current, []) == [
        ChangelogEntry(ChangeType.ADDED, "builds", "B", "https://b.com"),
    ]


def test_entries_without_name_are_dropped() -> None:
    """Test produced entries must themselves be valid."""
    current = [{"id": "trade", "links": [{"url": "https://nameless.com"}]}]
    assert compare_links(current, []) == []


def test_diff_is_deterministic(current: list[Category], previous: list[Category]) -> None:
    """Test repeated runs give the same entries in the same order."""
    first = compare_links(current, previous)
    for _ in range(5):
        assert compare_links(current, previous) == first


def test_empty_previous_reports_everything_added(current: list[Category]) -> None:
    """Test a first snapshot reports all links."""
    changes = compare_links(current, [])
    assert len(changes) == 4
    assert all(entry.type is ChangeType.ADDED for entry in changes)

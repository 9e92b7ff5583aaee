"""Diffing of two link snapshots into changelog entries."""

from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from link_hub.core.entities import Category, ChangelogEntry, ChangeType, Link
from link_hub.core.validators import validate_changelog_entry

CategoryLike = Union[Category, Mapping[str, Any]]


def _iter_links(category: Any) -> Iterator[tuple[str, str, str]]:
    """Yield (category_id, link_name, link_url) for every usable link."""
    if isinstance(category, Category):
        category_id, links = category.id, category.links
    elif isinstance(category, Mapping):
        category_id, links = category.get("id"), category.get("links")
    else:
        return

    if not category_id or not isinstance(category_id, str):
        return
    if not isinstance(links, (list, tuple)):
        return

    for link in links:
        if isinstance(link, Link):
            name, url = link.name, link.url
        elif isinstance(link, Mapping):
            name, url = link.get("name"), link.get("url")
        else:
            continue

        if not url or not isinstance(url, str):
            continue
        yield category_id, name if isinstance(name, str) else "", url


def _index_snapshot(snapshot: Sequence[CategoryLike]) -> dict[tuple[str, str], str]:
    """Map (category_id, url) to link name, keeping first-seen order."""
    index: dict[tuple[str, str], str] = {}
    for category in snapshot:
        for category_id, name, url in _iter_links(category):
            index[(category_id, url)] = name
    return index


def compare_links(
    current: Optional[Sequence[CategoryLike]],
    previous: Optional[Sequence[CategoryLike]],
) -> list[ChangelogEntry]:
    """Compare two snapshots and list added and removed links.

    Links are identified per category by URL, so a link moved between
    categories shows up as removed from one and added to the other.
    Renames without a URL change are not reported. Added entries come first
    in current order, then removed entries in previous order.
    """
    if not isinstance(current, (list, tuple)) or not isinstance(previous, (list, tuple)):
        return []

    current_index = _index_snapshot(current)
    previous_index = _index_snapshot(previous)

    changes: list[ChangelogEntry] = []

    for (category_id, url), name in current_index.items():
        if (category_id, url) not in previous_index:
            changes.append(ChangelogEntry(ChangeType.ADDED, category_id, name, url))

    for (category_id, url), name in previous_index.items():
        if (category_id, url) not in current_index:
            changes.append(ChangelogEntry(ChangeType.REMOVED, category_id, name, url))

    return [entry for entry in changes if validate_changelog_entry(entry.to_dict())]

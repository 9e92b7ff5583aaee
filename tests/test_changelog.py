"""Tests for changelog grouping."""

from link_hub.core import (
    NO_CHANGES_MESSAGE,
    ChangelogEntry,
    ChangelogGroup,
    ChangelogNote,
    ChangeType,
    build_changelog_view,
    format_update_date,
)
from link_hub.core.validators import validate_update_record


def entry(kind: str, name: str, category_id: str = "trade", url: str = "https://example.com") -> dict:
    return {"type": kind, "categoryId": category_id, "linkName": name, "linkUrl": url}


def test_format_update_date() -> None:
    """Test human-readable dates."""
    assert format_update_date("2025-01-27T10:00:00Z") == "January 27, 2025"
    assert format_update_date("2025-01-27T23:30:00-05:00") == "January 28, 2025"
    assert format_update_date("invalid") == "Date unavailable"
    assert format_update_date(None) == "Date unavailable"


def test_groups_sorted_newest_first() -> None:
    """Test groups are ordered by date descending."""
    changelog = [
        {"date": "2025-01-10T10:00:00Z", "entries": [entry("added", "Old")]},
        {"date": "2025-02-01T10:00:00Z", "entries": [entry("added", "Newest")]},
        {"date": "2025-01-20T10:00:00Z", "entries": [entry("added", "Middle")]},
    ]

    view = build_changelog_view(changelog)

    assert [g.added[0].link_name for g in view.groups] == ["Newest", "Middle", "Old"]
    assert view.groups[0].label == "February 1, 2025"


def test_entries_partitioned_by_kind() -> None:
    """Test notes, added and removed land in separate buckets."""
    changelog = [
        {
            "date": "2025-01-27T10:00:00Z",
            "entries": [
                {"type": "note", "message": "Welcome to the new layout"},
                entry("added", "New Tool"),
                entry("removed", "Old Tool", "builds", "https://old.example.com"),
                entry("added", "Another Tool", "maps", "https://another.example.com"),
            ],
        }
    ]

    group = build_changelog_view(changelog).groups[0]

    assert group.notes == ["Welcome to the new layout"]
    assert [e.link_name for e in group.added] == ["New Tool", "Another Tool"]
    assert group.removed == [
        ChangelogEntry(ChangeType.REMOVED, "builds", "Old Tool", "https://old.example.com"),
    ]


def test_presenter_skips_invalid_entries_while_loader_rejects_record() -> None:
    """Test the lenient presenter and the strict record validator disagree on purpose."""
    changelog = [
        {
            "date": "2025-01-27T10:00:00Z",
            "entries": [
                entry("added", "Valid Tool"),
                entry("invalid", "Broken Tool"),
            ],
        }
    ]

    assert not validate_update_record({"lastUpdated": "2025-01-27T10:00:00Z", "changelog": changelog})

    view = build_changelog_view(changelog)
    assert not view.is_empty
    assert [e.link_name for e in view.groups[0].added] == ["Valid Tool"]
    assert view.groups[0].removed == []


def test_empty_changelog_has_no_changes_marker() -> None:
    """Test empty input gives the distinct empty state."""
    view = build_changelog_view([])
    assert view.is_empty
    assert view.empty_message == NO_CHANGES_MESSAGE == "No changes in this update."


def test_all_invalid_changelog_is_empty() -> None:
    """Test groups with nothing valid are dropped."""
    changelog = [
        {"date": "2025-01-27T10:00:00Z", "entries": [entry("modified", "X"), {"type": "note", "message": "  "}]},
        {"date": "2025-01-20T10:00:00Z", "entries": "not-a-list"},
        "not-a-group",
        None,
    ]
    assert build_changelog_view(changelog).is_empty
    assert build_changelog_view(None).is_empty


def test_missing_dates_sort_last() -> None:
    """Test undated groups go to the end with an unavailable label."""
    changelog = [
        {"entries": [entry("added", "Undated")]},
        {"date": "2025-01-27T10:00:00Z", "entries": [entry("added", "Dated")]},
    ]

    view = build_changelog_view(changelog)

    assert [g.added[0].link_name for g in view.groups] == ["Dated", "Undated"]
    assert view.groups[1].label == "Date unavailable"


def test_accepts_changelog_group_objects() -> None:
    """Test typed groups render the same as raw ones."""
    group = ChangelogGroup(
        date="2025-01-27T10:00:00Z",
        entries=(
            ChangelogNote("Maintenance"),
            ChangelogEntry(ChangeType.ADDED, "trade", "New Tool", "https://example.com"),
        ),
    )

    view = build_changelog_view([group])

    assert view.groups[0].notes == ["Maintenance"]
    assert view.groups[0].added[0].link_name == "New Tool"

"""Grouping and sorting of changelog history for display."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from link_hub.core.entities import ChangelogEntry, ChangelogGroup, ChangelogNote, ChangeType
from link_hub.core.validators import is_note_entry, parse_instant, validate_changelog_entry

NO_CHANGES_MESSAGE = "No changes in this update."
DATE_UNAVAILABLE = "Date unavailable"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_update_date(value: Any) -> str:
    """Format a timestamp as "January 27, 2025" (UTC)."""
    parsed = parse_instant(value)
    if parsed is None:
        return DATE_UNAVAILABLE
    parsed = parsed.astimezone(timezone.utc)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


@dataclass
class ChangelogGroupView:
    """One update, with its entries split by kind."""

    date: Optional[str]
    label: str
    notes: list[str] = field(default_factory=list)
    added: list[ChangelogEntry] = field(default_factory=list)
    removed: list[ChangelogEntry] = field(default_factory=list)


@dataclass
class ChangelogView:
    """Changelog ready for rendering, newest update first."""

    groups: list[ChangelogGroupView] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def empty_message(self) -> str:
        return NO_CHANGES_MESSAGE


def _raw_group(group: Any) -> Optional[dict[str, Any]]:
    if isinstance(group, ChangelogGroup):
        return group.to_dict()
    if isinstance(group, dict):
        return group
    return None


def _group_sort_key(group: dict[str, Any]) -> datetime:
    return parse_instant(group.get("date")) or _EPOCH


def _build_group(group: dict[str, Any]) -> Optional[ChangelogGroupView]:
    view = ChangelogGroupView(date=group.get("date"), label=format_update_date(group.get("date")))

    for entry in group["entries"]:
        if is_note_entry(entry):
            message = entry.get("message")
            if isinstance(message, str) and message.strip():
                view.notes.append(message)
            continue

        # Skip invalid entries one by one, the rest of the group still renders
        if not validate_changelog_entry(entry):
            continue

        parsed = ChangelogEntry.from_dict(entry)
        if parsed.type is ChangeType.ADDED:
            view.added.append(parsed)
        else:
            view.removed.append(parsed)

    if not (view.notes or view.added or view.removed):
        return None
    return view


def build_changelog_view(changelog: Optional[Sequence[Any]]) -> ChangelogView:
    """Build the display model for a changelog history.

    Accepts raw group dicts or ChangelogGroup objects. Groups are sorted
    newest first; groups without any valid entry are left out.
    """
    if not isinstance(changelog, (list, tuple)):
        return ChangelogView()

    groups = []
    for group in changelog:
        raw = _raw_group(group)
        if raw is None or not isinstance(raw.get("entries"), list):
            continue
        groups.append(raw)

    # sorted() is stable, so groups with equal dates keep document order
    groups = sorted(groups, key=_group_sort_key, reverse=True)

    view = ChangelogView()
    for group in groups:
        group_view = _build_group(group)
        if group_view is not None:
            view.groups.append(group_view)
    return view


def note_entries(messages: Sequence[str]) -> tuple[ChangelogNote, ...]:
    """Wrap non-blank messages as changelog notes."""
    return tuple(ChangelogNote(message=m.strip()) for m in messages if m and m.strip())

"""Core domain layer."""

from link_hub.core.changelog import (
    NO_CHANGES_MESSAGE,
    ChangelogGroupView,
    ChangelogView,
    build_changelog_view,
    format_update_date,
)
from link_hub.core.differ import compare_links
from link_hub.core.durations import calculate_event_durations, event_status, format_duration
from link_hub.core.entities import (
    Category,
    ChangelogEntry,
    ChangelogGroup,
    ChangelogNote,
    ChangeType,
    Event,
    EventDurations,
    EventType,
    Link,
    SendResult,
    UpdateRecord,
)
from link_hub.core.errors import DocumentFormatError, DocumentLoadError, DocumentUnavailableError
from link_hub.core.interfaces import DocumentSource, HubRenderer, SuggestionSender

__all__ = [
    "Link",
    "Category",
    "Event",
    "EventType",
    "EventDurations",
    "ChangeType",
    "ChangelogEntry",
    "ChangelogNote",
    "ChangelogGroup",
    "UpdateRecord",
    "SendResult",
    "ChangelogView",
    "ChangelogGroupView",
    "NO_CHANGES_MESSAGE",
    "build_changelog_view",
    "format_update_date",
    "compare_links",
    "calculate_event_durations",
    "event_status",
    "format_duration",
    "DocumentLoadError",
    "DocumentUnavailableError",
    "DocumentFormatError",
    "DocumentSource",
    "HubRenderer",
    "SuggestionSender",
]

"""Validators for raw records loaded from JSON documents.

Every validator is a total predicate: it never raises and returns False for
anything that is not a well-formed record, including None and non-dicts.
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

MAX_LINK_NAME_LENGTH = 100
MAX_CATEGORY_TITLE_LENGTH = 50
MAX_EVENT_NAME_LENGTH = 100

EVENT_TYPES = ("league", "race", "event", "other")
CHANGE_TYPES = ("added", "removed")
NOTE_TYPE = "note"
DEFAULT_VARIANTS = ("poe1", "poe2")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware datetime.

    Naive values are read as UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_valid_url(value: Any, schemes: Optional[Iterable[str]] = None) -> bool:
    """Check that value parses as an absolute URL, optionally limited to schemes."""
    if not isinstance(value, str) or not value or value != value.strip():
        return False

    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False

    scheme = parts.scheme.lower()
    if schemes is not None and scheme not in schemes:
        return False

    if scheme in ("http", "https", "ftp", "ws", "wss"):
        return bool(parts.hostname) and " " not in parts.netloc

    # Opaque URLs such as mailto: need something after the colon
    return bool(value[len(parts.scheme) + 1:])


def _is_non_blank(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_bounded_text(value: Any, max_length: int) -> bool:
    return _is_non_blank(value) and len(value) <= max_length


def validate_link(link: Any) -> bool:
    """Validate a raw link record."""
    if not isinstance(link, dict):
        return False

    if not _is_bounded_text(link.get("name"), MAX_LINK_NAME_LENGTH):
        return False

    if not is_valid_url(link.get("url"), schemes=("http", "https")):
        return False

    # Icon may be an absolute URL, a relative path or a data URI
    if "icon" in link and not _is_non_blank(link["icon"]):
        return False

    if "description" in link and not isinstance(link["description"], str):
        return False

    return True


def validate_category(category: Any) -> bool:
    """Validate a category with resolved links."""
    if not isinstance(category, dict):
        return False

    if not _is_non_blank(category.get("id")):
        return False

    if not _is_bounded_text(category.get("title"), MAX_CATEGORY_TITLE_LENGTH):
        return False

    links = category.get("links")
    if not isinstance(links, list) or not links:
        return False

    return all(validate_link(link) for link in links)


def validate_category_structure(
    category: Any, variants: Iterable[str] = DEFAULT_VARIANTS
) -> bool:
    """Validate a category index entry holding link keys per variant.

    Variant lists may be empty but must be lists of string keys.
    """
    if not isinstance(category, dict):
        return False

    if not _is_non_blank(category.get("id")):
        return False

    if not _is_bounded_text(category.get("title"), MAX_CATEGORY_TITLE_LENGTH):
        return False

    for variant in variants:
        keys = category.get(variant)
        if not isinstance(keys, list):
            return False
        if not all(isinstance(key, str) for key in keys):
            return False

    return True


def validate_event(event: Any) -> bool:
    """Validate a raw event record."""
    if not isinstance(event, dict):
        return False

    if not _is_non_blank(event.get("id")):
        return False

    if not _is_bounded_text(event.get("name"), MAX_EVENT_NAME_LENGTH):
        return False

    start = parse_instant(event.get("startDate"))
    end = parse_instant(event.get("endDate"))
    if start is None or end is None:
        return False

    if end <= start:
        return False

    if "type" in event and event["type"] not in EVENT_TYPES:
        return False

    return True


def validate_changelog_entry(entry: Any) -> bool:
    """Validate an added/removed changelog entry."""
    if not isinstance(entry, dict):
        return False

    if entry.get("type") not in CHANGE_TYPES:
        return False

    if not _is_non_blank(entry.get("categoryId")):
        return False

    if not _is_bounded_text(entry.get("linkName"), MAX_LINK_NAME_LENGTH):
        return False

    return is_valid_url(entry.get("linkUrl"))


def is_note_entry(entry: Any) -> bool:
    """Check for a free-text note entry."""
    return isinstance(entry, dict) and entry.get("type") == NOTE_TYPE


def validate_update_record(record: Any) -> bool:
    """Validate an update-history record.

    A single invalid changelog entry anywhere rejects the whole record.
    Notes are exempt from entry validation and group dates are not checked.
    """
    if not isinstance(record, dict):
        return False

    if parse_instant(record.get("lastUpdated")) is None:
        return False

    changelog = record.get("changelog")
    if not isinstance(changelog, list):
        return False

    for group in changelog:
        if not isinstance(group, dict):
            return False

        entries = group.get("entries", [])
        if not isinstance(entries, list):
            return False

        for entry in entries:
            if is_note_entry(entry):
                continue
            if not validate_changelog_entry(entry):
                return False

    return True

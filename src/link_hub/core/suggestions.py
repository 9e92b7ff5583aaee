"""Validation and normalization of user-submitted event suggestions."""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional

from link_hub.core.validators import DEFAULT_VARIANTS, is_valid_url

MAX_NAME_LENGTH = 200
MAX_URL_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 2000
MAX_ID_LENGTH = 100

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class FieldError:
    """Validation error for a single form field."""

    field: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of validating a suggestion."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field=field_name, message=message))


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def combine_date_time(date_value: Any, time_value: Any) -> str:
    """Join separate date and time inputs unless the date already has a time."""
    date_str = _text(date_value)
    time_str = _text(time_value)
    if "T" in date_str:
        return date_str
    if date_str and time_str:
        return f"{date_str}T{time_str}"
    return date_str


def _parse_local(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _comparable(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _check_optional_url(result: ValidationResult, field_name: str, value: Any, label: str) -> None:
    text = _text(value)
    if not text.strip():
        return
    if len(text) > MAX_URL_LENGTH:
        result.add(field_name, f"{label} URL must be {MAX_URL_LENGTH} characters or less")
    elif not is_valid_url(text.strip()):
        result.add(field_name, f"Please enter a valid URL for the {label.lower()}")


def validate_event_suggestion(data: dict[str, Any]) -> ValidationResult:
    """Validate suggestion form input, collecting one error per failing field."""
    result = ValidationResult()

    name = data.get("name")
    if not isinstance(name, str):
        result.add("name", "Event name is required")
    elif not name.strip():
        result.add("name", "Event name cannot be empty")
    elif len(name.strip()) > MAX_NAME_LENGTH:
        result.add("name", f"Event name must be {MAX_NAME_LENGTH} characters or less")

    game = _text(data.get("game")).strip()
    if not game:
        result.add("game", "Game selection is required")
    elif game not in DEFAULT_VARIANTS:
        result.add("game", "Please select a valid game")

    start_raw = combine_date_time(data.get("startDate"), data.get("startTime"))
    end_raw = combine_date_time(data.get("endDate"), data.get("endTime"))

    start = None
    if not start_raw.strip():
        result.add("startDate", "Start date and time are required")
    else:
        start = _parse_local(start_raw)
        if start is None:
            result.add("startDate", "Please enter a valid date and time")

    if not end_raw.strip():
        result.add("endDate", "End date and time are required")
    else:
        end = _parse_local(end_raw)
        if end is None:
            result.add("endDate", "Please enter a valid date and time")
        elif start is not None and _comparable(end) <= _comparable(start):
            result.add("endDate", "End date must be after start date")

    _check_optional_url(result, "bannerImageUrl", data.get("bannerImageUrl"), "Banner image")

    description = data.get("description")
    if isinstance(description, str) and len(description) > MAX_DESCRIPTION_LENGTH:
        result.add("description", f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less")

    _check_optional_url(result, "detailsLink", data.get("detailsLink"), "Details link")

    email = _text(data.get("email")).strip()
    if email and not _EMAIL_RE.match(email):
        result.add("email", "Please enter a valid email address")

    return result


def sanitize_event_content(content: Any) -> str:
    """Escape HTML special characters."""
    if not content or not isinstance(content, str):
        return ""
    return (
        content.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def generate_event_id(name: Any) -> str:
    """Build a kebab-case id from an event name."""
    if not name or not isinstance(name, str):
        return "event"

    event_id = name.lower().strip()
    event_id = re.sub(r"[^a-z0-9\s-]", "", event_id)
    event_id = re.sub(r"\s+", "-", event_id)
    event_id = re.sub(r"-+", "-", event_id)
    event_id = event_id.strip("-")

    if not event_id:
        return "event"

    if len(event_id) > MAX_ID_LENGTH:
        event_id = event_id[:MAX_ID_LENGTH].rstrip("-")

    return event_id


def convert_to_utc(value: Any, local_tz: Optional[tzinfo] = None) -> str:
    """Convert a local datetime string to an ISO 8601 UTC timestamp.

    Naive input is interpreted in `local_tz`, or the machine's local zone.
    Returns an empty string when the input cannot be parsed.
    """
    if not value or not isinstance(value, str):
        return ""

    parsed = _parse_local(value)
    if parsed is None:
        return ""

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=local_tz) if local_tz else parsed.astimezone()

    utc = parsed.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_event_json(suggestion: dict[str, Any]) -> str:
    """Format a suggestion in the shape of an events document entry."""
    event: dict[str, Any] = {
        "id": suggestion.get("id"),
        "name": suggestion.get("name"),
        "startDate": suggestion.get("startDate"),
        "endDate": suggestion.get("endDate"),
    }

    if suggestion.get("game"):
        event["game"] = suggestion["game"]

    event["type"] = suggestion.get("type") or "event"

    for key in ("bannerImageUrl", "description", "detailsLink"):
        value = _text(suggestion.get(key)).strip()
        if value:
            event[key] = value

    return json.dumps(event, indent=2, ensure_ascii=False)

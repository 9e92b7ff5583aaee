"""Event duration calculations."""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Union

from link_hub.core.entities import Event, EventDurations
from link_hub.core.validators import parse_instant

ZERO = timedelta(0)


def format_duration(delta: timedelta) -> str:
    """Format a duration as "{days}d {hours}h {minutes}m".

    Seconds are floored away and negative durations render as zero.
    """
    total_minutes = max(int(delta.total_seconds() // 60), 0)
    days, rest = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rest, 60)
    return f"{days}d {hours}h {minutes}m"


def _event_bounds(
    event: Union[Event, Mapping[str, Any]],
) -> tuple[Optional[datetime], Optional[datetime]]:
    if isinstance(event, Event):
        return event.start_date, event.end_date
    if isinstance(event, Mapping):
        return parse_instant(event.get("startDate")), parse_instant(event.get("endDate"))
    return None, None


def calculate_event_durations(
    event: Union[Event, Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> Optional[EventDurations]:
    """Compute activity state and durations of an event at `now`.

    Both bounds count as active. Returns None when the dates are unparseable
    or the range is empty or inverted.
    """
    start, end = _event_bounds(event)
    if start is None or end is None or end <= start:
        return None

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = max(min(now, end) - start, ZERO)
    remaining = max(end - max(now, start), ZERO)

    return EventDurations(
        is_active=start <= now <= end,
        elapsed_duration=format_duration(elapsed),
        remaining_duration=format_duration(remaining),
        total_duration=format_duration(end - start),
    )


def event_status(
    event: Union[Event, Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> Optional[str]:
    """Classify an event as "active", "upcoming" or "ended"."""
    start, end = _event_bounds(event)
    if start is None or end is None or end <= start:
        return None

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if now < start:
        return "upcoming"
    if now > end:
        return "ended"
    return "active"

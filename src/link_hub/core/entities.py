"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional, Union

from link_hub.core.validators import NOTE_TYPE, parse_instant

NEW_LINK_DAYS = 14


@dataclass(frozen=True)
class Link:
    """Single link inside a category."""

    name: str
    url: str
    icon: Optional[str] = None
    description: Optional[str] = None
    added: Optional[str] = None
    last_checked: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Link":
        return cls(
            name=data["name"],
            url=data["url"],
            icon=data.get("icon"),
            description=data.get("description"),
            added=data.get("added"),
            last_checked=data.get("lastChecked"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "url": self.url}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.description is not None:
            data["description"] = self.description
        if self.added is not None:
            data["added"] = self.added
        if self.last_checked is not None:
            data["lastChecked"] = self.last_checked
        return data

    def is_new(self, now: datetime) -> bool:
        """Check if the link was added within the last NEW_LINK_DAYS days."""
        added_at = parse_instant(self.added)
        if added_at is None:
            return False
        age = now - added_at
        return timedelta(0) <= age <= timedelta(days=NEW_LINK_DAYS)


@dataclass(frozen=True)
class Category:
    """Category with its resolved links."""

    id: str
    title: str
    links: tuple[Link, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=data["id"],
            title=data["title"],
            links=tuple(Link.from_dict(link) for link in data["links"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "links": [link.to_dict() for link in self.links],
        }


class EventType(str, Enum):
    """Kind of scheduled event."""

    LEAGUE = "league"
    RACE = "race"
    EVENT = "event"
    OTHER = "other"


@dataclass(frozen=True)
class Event:
    """Time-bounded league or event."""

    id: str
    name: str
    start_date: datetime
    end_date: datetime
    type: Optional[EventType] = None
    game: Optional[str] = None
    description: Optional[str] = None
    banner_image_url: Optional[str] = None
    details_link: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        start_date = parse_instant(data.get("startDate"))
        end_date = parse_instant(data.get("endDate"))
        if start_date is None or end_date is None:
            raise ValueError(f"Event {data.get('id')!r} has invalid dates")

        event_type = data.get("type")
        return cls(
            id=data["id"],
            name=data["name"],
            start_date=start_date,
            end_date=end_date,
            type=EventType(event_type) if event_type is not None else None,
            game=data.get("game"),
            description=data.get("description"),
            banner_image_url=data.get("bannerImageUrl"),
            details_link=data.get("detailsLink"),
        )


class ChangeType(str, Enum):
    """Direction of a link change."""

    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class ChangelogEntry:
    """Link added to or removed from a category."""

    type: ChangeType
    category_id: str
    link_name: str
    link_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangelogEntry":
        return cls(
            type=ChangeType(data["type"]),
            category_id=data["categoryId"],
            link_name=data["linkName"],
            link_url=data["linkUrl"],
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "categoryId": self.category_id,
            "linkName": self.link_name,
            "linkUrl": self.link_url,
        }


@dataclass(frozen=True)
class ChangelogNote:
    """Free-text message attached to an update."""

    message: str

    def to_dict(self) -> dict[str, str]:
        return {"type": NOTE_TYPE, "message": self.message}


ChangelogItem = Union[ChangelogEntry, ChangelogNote]


@dataclass(frozen=True)
class ChangelogGroup:
    """All changes published by one update."""

    date: Optional[str]
    entries: tuple[ChangelogItem, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangelogGroup":
        entries: list[ChangelogItem] = []
        for entry in data.get("entries", []):
            if entry.get("type") == NOTE_TYPE:
                entries.append(ChangelogNote(message=entry.get("message", "")))
            else:
                entries.append(ChangelogEntry.from_dict(entry))
        return cls(date=data.get("date"), entries=tuple(entries))

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class UpdateRecord:
    """Persisted update history."""

    last_updated: datetime
    changelog: tuple[ChangelogGroup, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpdateRecord":
        last_updated = parse_instant(data.get("lastUpdated"))
        if last_updated is None:
            raise ValueError("Update record has invalid lastUpdated")
        return cls(
            last_updated=last_updated,
            changelog=tuple(ChangelogGroup.from_dict(group) for group in data["changelog"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lastUpdated": self.last_updated.isoformat().replace("+00:00", "Z"),
            "changelog": [group.to_dict() for group in self.changelog],
        }


@dataclass(frozen=True)
class EventDurations:
    """Durations of an event evaluated at one instant."""

    is_active: bool
    elapsed_duration: str
    remaining_duration: str
    total_duration: str


@dataclass(frozen=True)
class SendResult:
    """Outcome of submitting an event suggestion."""

    success: bool
    error: Optional[str] = None
    type: Optional[str] = None
    message_id: Optional[str] = None

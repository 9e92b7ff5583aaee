"""Business logic use cases."""

import asyncio
from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable, Optional, Sequence

from link_hub.config import EmailJSConfig
from link_hub.core import (
    Category,
    ChangelogEntry,
    ChangelogGroup,
    DocumentFormatError,
    DocumentSource,
    DocumentUnavailableError,
    Event,
    SendResult,
    SuggestionSender,
    UpdateRecord,
    compare_links,
)
from link_hub.core.changelog import note_entries
from link_hub.core.suggestions import (
    convert_to_utc,
    format_event_json,
    generate_event_id,
    sanitize_event_content,
    validate_event_suggestion,
)
from link_hub.core.validators import (
    DEFAULT_VARIANTS,
    validate_category,
    validate_category_structure,
    validate_event,
    validate_update_record,
)


class CollectionLoader:
    """Load hub documents and keep only the records that validate."""

    def __init__(
        self,
        source: DocumentSource,
        categories_file: str = "categories.json",
        links_file: str = "links.json",
        events_file: str = "events.json",
        updates_file: str = "updates.json",
        variants: Sequence[str] = DEFAULT_VARIANTS,
        default_variant: str = "poe1",
    ) -> None:
        self.source = source
        self.categories_file = categories_file
        self.links_file = links_file
        self.events_file = events_file
        self.updates_file = updates_file
        self.variants = tuple(variants)
        self.default_variant = default_variant

    async def load_links(self, variant: Optional[str] = None) -> list[Category]:
        """Load categories with their links resolved for one variant.

        Raises:
            DocumentLoadError: if either document is missing or malformed
        """
        selected = variant or self.default_variant
        if selected not in self.variants:
            raise ValueError(f"Unknown variant: {selected}")

        index, link_items = await asyncio.gather(
            self.source.fetch_json(self.categories_file),
            self.source.fetch_json(self.links_file),
        )

        if not isinstance(index, dict):
            raise DocumentFormatError(self.categories_file, "expected an object of categories")
        if not isinstance(link_items, dict):
            raise DocumentFormatError(self.links_file, "expected an object of links")

        categories: list[Category] = []
        for key, entry in index.items():
            if not validate_category_structure(entry, self.variants):
                print(f"  └─ ⚠️  Invalid category structure skipped: {key}")
                continue

            link_keys = entry[selected]
            if not link_keys:
                continue

            # Unknown keys resolve to None so the category fails validation
            resolved = {
                "id": entry["id"],
                "title": entry["title"],
                "links": [link_items.get(link_key) for link_key in link_keys],
            }
            if not validate_category(resolved):
                print(f"  └─ ⚠️  Invalid category skipped: {key}")
                continue

            categories.append(Category.from_dict(resolved))

        if not categories:
            print(f"  └─ ⚠️  No valid categories found for {selected}")

        return categories

    async def load_events(self) -> list[Event]:
        """Load events, dropping invalid records and keeping document order.

        Raises:
            DocumentLoadError: if the document is missing or not an array
        """
        data = await self.source.fetch_json(self.events_file)
        if not isinstance(data, list):
            raise DocumentFormatError(self.events_file, "expected an array of events")

        events: list[Event] = []
        for record in data:
            if validate_event(record):
                events.append(Event.from_dict(record))
            else:
                record_id = record.get("id", "?") if isinstance(record, dict) else "?"
                print(f"  └─ ⚠️  Invalid event skipped: {record_id}")

        if not events:
            print("  └─ ⚠️  No valid events found")

        return events

    async def load_updates(self) -> Optional[UpdateRecord]:
        """Load the update history.

        Returns None when the document is missing or any entry in it is
        invalid. Network and JSON errors propagate.
        """
        try:
            data = await self.source.fetch_json(self.updates_file)
        except DocumentUnavailableError as e:
            print(f"  └─ ⚠️  Updates unavailable: {e.reason}")
            return None

        if not validate_update_record(data):
            print("  └─ ⚠️  Invalid update record rejected")
            return None

        return UpdateRecord.from_dict(data)

    async def load_history(self) -> Optional[UpdateRecord]:
        """Load the update history before prepending to it.

        Returns None only when the document does not exist yet.

        Raises:
            DocumentFormatError: if the document exists but is not a valid record
        """
        try:
            data = await self.source.fetch_json(self.updates_file)
        except DocumentUnavailableError:
            return None

        if not validate_update_record(data):
            raise DocumentFormatError(self.updates_file, "existing update history is invalid")

        return UpdateRecord.from_dict(data)


class ChangelogService:
    """Turn snapshot differences into update history."""

    async def diff_snapshots(
        self,
        current: CollectionLoader,
        previous: CollectionLoader,
        variants: Optional[Iterable[str]] = None,
    ) -> list[ChangelogEntry]:
        """Diff two data sets across variants.

        An entry reported for several variants is listed once.
        """
        entries: list[ChangelogEntry] = []
        seen: set[ChangelogEntry] = set()

        for variant in variants or current.variants:
            current_links, previous_links = await asyncio.gather(
                current.load_links(variant),
                previous.load_links(variant),
            )
            for entry in compare_links(current_links, previous_links):
                if entry not in seen:
                    seen.add(entry)
                    entries.append(entry)

        return entries

    def build_group(
        self,
        entries: Sequence[ChangelogEntry],
        date: datetime,
        notes: Sequence[str] = (),
    ) -> ChangelogGroup:
        """Wrap entries and notes into one dated group."""
        return ChangelogGroup(
            date=_isoformat(date),
            entries=note_entries(notes) + tuple(entries),
        )

    def record_update(
        self,
        record: Optional[UpdateRecord],
        group: ChangelogGroup,
        now: Optional[datetime] = None,
    ) -> UpdateRecord:
        """Return a new record with the group prepended and lastUpdated bumped."""
        now = now or datetime.now(timezone.utc)
        history = record.changelog if record is not None else ()
        return UpdateRecord(last_updated=now, changelog=(group,) + history)


def _isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class SuggestionService:
    """Validate event suggestions and send them to the maintainer."""

    def __init__(self, sender: Optional[SuggestionSender], config: EmailJSConfig) -> None:
        self.sender = sender
        self.config = config

    def build_event(self, data: dict[str, Any], local_tz: Optional[tzinfo] = None) -> Optional[dict[str, Any]]:
        """Sanitize and normalize a validated suggestion into an event record."""
        name = sanitize_event_content(data["name"].strip())
        description = data.get("description")
        description = sanitize_event_content(description.strip()) if isinstance(description, str) else ""

        start = convert_to_utc(data.get("startDate"), local_tz)
        end = convert_to_utc(data.get("endDate"), local_tz)
        if not start or not end:
            return None

        event: dict[str, Any] = {
            "id": generate_event_id(name),
            "name": name,
            "startDate": start,
            "endDate": end,
            "game": data.get("game"),
            "type": data.get("type") or "event",
        }
        if description:
            event["description"] = description
        for key in ("bannerImageUrl", "detailsLink"):
            if isinstance(data.get(key), str):
                event[key] = data[key].strip()
        return event

    def build_template_params(
        self,
        event_json: str,
        email: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> dict[str, str]:
        """Build EmailJS template variables for a suggestion."""
        sender_email = email.strip() if email and email.strip() else ""
        params = {
            "from_name": sender_email.split("@")[0] if sender_email else "Event Suggestion User",
            "from_email": sender_email or "Not provided",
            "subject": self.config.subject_prefix,
            "service_page": self.config.service_page,
            "timestamp": _isoformat(now or datetime.now(timezone.utc)),
        }

        if self.config.uses_contact_template:
            params["message"] = f"Event Suggestion:\n\n{event_json}"
        else:
            params["event_json"] = event_json
        return params

    async def submit(
        self,
        data: dict[str, Any],
        email: Optional[str] = None,
        local_tz: Optional[tzinfo] = None,
    ) -> SendResult:
        """Validate, normalize and send a suggestion."""
        validation = validate_event_suggestion(data)
        if not validation.valid:
            return SendResult(success=False, error=validation.errors[0].message, type="validation")

        # Send the combined date/time the form validated
        normalized = dict(data)
        for prefix in ("start", "end"):
            date_value = data.get(f"{prefix}Date", "")
            time_value = data.get(f"{prefix}Time")
            if "T" not in date_value and time_value:
                normalized[f"{prefix}Date"] = f"{date_value}T{time_value}"

        event = self.build_event(normalized, local_tz)
        if event is None:
            return SendResult(success=False, error="Invalid date format", type="validation")

        missing = self.config.missing_keys()
        if missing or self.sender is None:
            print(f"⚠️  EmailJS configuration missing: {', '.join(missing) or 'sender'}")
            return SendResult(
                success=False,
                error="Email service is not configured. Please contact the administrator.",
                type="configuration",
            )

        params = self.build_template_params(format_event_json(event), email)
        return await self.sender.send(self.config.effective_template_id, params)

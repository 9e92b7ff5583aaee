"""Markdown renderer for categories, events and the changelog."""

from datetime import datetime, timezone
from typing import Optional

from link_hub.core import (
    Category,
    ChangelogEntry,
    ChangelogView,
    Event,
    HubRenderer,
    Link,
    calculate_event_durations,
    format_update_date,
)

DISCLAIMER_CATEGORIES = ("browser-extensions", "game-overlay")


def requires_disclaimer(category_id: str) -> bool:
    """Categories linking to third-party software get a warning."""
    return category_id in DISCLAIMER_CATEGORIES


def _format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%b %d, %Y %H:%M UTC")


class MarkdownRenderer(HubRenderer):
    """Render hub data as Markdown."""

    def render_categories(self, categories: list[Category], now: datetime) -> str:
        if not categories:
            return "No categories available."

        lines: list[str] = []
        for category in categories:
            lines.extend([f"## {category.title}", ""])
            if requires_disclaimer(category.id):
                lines.extend(["> ⚠️ Third-party software. Use at your own risk.", ""])
            for link in category.links:
                lines.append(self._format_link(link, now))
            lines.append("")

        return "\n".join(lines).rstrip() + "\n"

    def _format_link(self, link: Link, now: datetime) -> str:
        line = f"- [{link.name}]({link.url})"
        if link.is_new(now):
            line += " 🆕"
        if link.description:
            line += f" - {link.description}"
        return line

    def render_events(self, events: list[Event], now: datetime) -> str:
        if not events:
            return "No events available."

        lines = ["## EVENTS", ""]
        for event in events:
            lines.extend([f"### {event.name}", ""])
            lines.append(f"- Start: {_format_instant(event.start_date)}")
            lines.append(f"- End: {_format_instant(event.end_date)}")

            durations = calculate_event_durations(event, now)
            if durations is not None:
                if durations.is_active:
                    lines.append(f"- Running for: {durations.elapsed_duration}")
                    lines.append(f"- End expected in: {durations.remaining_duration}")
                else:
                    lines.append(f"- Duration: {durations.total_duration}")

            if event.details_link:
                lines.append(f"- Details: {event.details_link}")
            lines.append("")

        return "\n".join(lines).rstrip() + "\n"

    def render_changelog(self, view: ChangelogView, last_updated: Optional[datetime] = None) -> str:
        lines = ["## Updates", ""]
        if last_updated is not None:
            lines.extend([f"Last updated: {format_update_date(last_updated)}", ""])

        if view.is_empty:
            lines.append(view.empty_message)
            return "\n".join(lines) + "\n"

        for group in view.groups:
            lines.extend([f"### {group.label}", ""])

            for note in group.notes:
                lines.append(f"> {note}")
            if group.notes:
                lines.append("")

            lines.extend(self._format_section("Added", group.added))
            lines.extend(self._format_section("Removed", group.removed))

        return "\n".join(lines).rstrip() + "\n"

    def _format_section(self, title: str, entries: list[ChangelogEntry]) -> list[str]:
        if not entries:
            return []
        lines = [f"**{title}**", ""]
        for entry in entries:
            lines.append(f"- {entry.link_name} ({entry.category_id})")
        lines.append("")
        return lines

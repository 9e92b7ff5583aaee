"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from link_hub.core.changelog import ChangelogView
from link_hub.core.entities import Category, Event, SendResult


class DocumentSource(ABC):
    """Interface for fetching JSON documents."""

    @abstractmethod
    async def fetch_json(self, name: str) -> Any:
        """Fetch and decode the named document."""
        pass


class HubRenderer(ABC):
    """Interface for rendering loaded data."""

    @abstractmethod
    def render_categories(self, categories: list[Category], now: datetime) -> str:
        """Render categories with their links."""
        pass

    @abstractmethod
    def render_events(self, events: list[Event], now: datetime) -> str:
        """Render events with durations evaluated at `now`."""
        pass

    @abstractmethod
    def render_changelog(self, view: ChangelogView, last_updated: datetime | None = None) -> str:
        """Render a changelog view."""
        pass


class SuggestionSender(ABC):
    """Interface for delivering event suggestions to the maintainer."""

    @abstractmethod
    async def send(self, template_id: str, params: dict[str, str]) -> SendResult:
        """Send template parameters using the given template."""
        pass

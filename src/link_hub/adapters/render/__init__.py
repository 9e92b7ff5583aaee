"""Renderers for loaded hub data."""

from link_hub.adapters.render.markdown_renderer import MarkdownRenderer, requires_disclaimer

__all__ = ["MarkdownRenderer", "requires_disclaimer"]

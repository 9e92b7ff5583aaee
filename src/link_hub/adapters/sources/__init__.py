"""Source adapters for fetching documents."""

from link_hub.adapters.sources.file_source import FileDocumentSource
from link_hub.adapters.sources.http_source import HttpDocumentSource

__all__ = ["FileDocumentSource", "HttpDocumentSource"]

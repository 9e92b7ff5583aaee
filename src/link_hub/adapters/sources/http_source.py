"""HTTP source for JSON documents published with the site."""

import json
from typing import Any

import httpx

from link_hub.core import DocumentFormatError, DocumentSource, DocumentUnavailableError


class HttpDocumentSource(DocumentSource):
    """Fetch JSON documents relative to a base URL."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url_for(self, name: str) -> str:
        return f"{self.base_url}/{name.lstrip('/')}"

    async def fetch_json(self, name: str) -> Any:
        """Fetch a document; a non-2xx status counts as a missing document."""
        url = self._url_for(name)

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(url)

        if not response.is_success:
            raise DocumentUnavailableError(
                name,
                f"HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise DocumentFormatError(name, f"invalid JSON: {e}") from e

"""Local directory source for JSON documents."""

import json
from pathlib import Path
from typing import Any

from link_hub.core import DocumentFormatError, DocumentSource, DocumentUnavailableError


class FileDocumentSource(DocumentSource):
    """Read JSON documents from a data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir

    async def fetch_json(self, name: str) -> Any:
        path = self.data_dir / name
        if not path.is_file():
            raise DocumentUnavailableError(name, f"{path} not found")

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise DocumentFormatError(name, f"invalid JSON: {e}") from e

    def write_json(self, name: str, data: Any) -> Path:
        """Write a document back to the data directory."""
        path = self.data_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return path

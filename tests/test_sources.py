"""Tests for document sources."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from link_hub.adapters.sources import FileDocumentSource, HttpDocumentSource
from link_hub.core import DocumentFormatError, DocumentUnavailableError


def mock_response(status_code: int = 200, payload=None, error: Exception | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    if error is not None:
        response.json = Mock(side_effect=error)
    else:
        response.json = Mock(return_value=payload)
    return response


@pytest.mark.asyncio
async def test_http_fetch_json_success() -> None:
    """Test fetching a document relative to the base URL."""
    source = HttpDocumentSource("https://hub.example.com/data/")

    with patch("httpx.AsyncClient") as mock_client:
        mock_get = AsyncMock(return_value=mock_response(payload=[{"id": "a"}]))
        mock_client.return_value.__aenter__.return_value.get = mock_get

        data = await source.fetch_json("events.json")

        assert data == [{"id": "a"}]
        assert mock_get.call_args.args[0] == "https://hub.example.com/data/events.json"


@pytest.mark.asyncio
async def test_http_non_ok_status_is_unavailable() -> None:
    """Test a 404 surfaces as a missing document."""
    source = HttpDocumentSource("https://hub.example.com/data")

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=mock_response(status_code=404)
        )

        with pytest.raises(DocumentUnavailableError) as exc_info:
            await source.fetch_json("updates.json")

        assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_http_other_success_status() -> None:
    """Test any 2xx response is read as a document."""
    source = HttpDocumentSource("https://hub.example.com/data")

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=mock_response(status_code=203, payload={"changelog": []})
        )

        data = await source.fetch_json("updates.json")

        assert data == {"changelog": []}


@pytest.mark.asyncio
async def test_http_invalid_json() -> None:
    """Test a body that is not JSON."""
    source = HttpDocumentSource("https://hub.example.com/data")

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            return_value=mock_response(error=json.JSONDecodeError("Expecting value", "<html>", 0))
        )

        with pytest.raises(DocumentFormatError):
            await source.fetch_json("events.json")


@pytest.mark.asyncio
async def test_http_network_error_propagates() -> None:
    """Test transport errors are not swallowed."""
    source = HttpDocumentSource("https://hub.example.com/data")

    with patch("httpx.AsyncClient") as mock_client:
        mock_client.return_value.__aenter__.return_value.get = AsyncMock(
            side_effect=httpx.ConnectError("Network error")
        )

        with pytest.raises(httpx.HTTPError):
            await source.fetch_json("events.json")


@pytest.mark.asyncio
async def test_file_source_reads_and_writes() -> None:
    """Test local documents."""
    with TemporaryDirectory() as tmpdir:
        source = FileDocumentSource(Path(tmpdir))

        path = source.write_json("updates.json", {"lastUpdated": "2025-01-27T10:00:00Z", "changelog": []})
        assert path.exists()

        data = await source.fetch_json("updates.json")
        assert data["changelog"] == []


@pytest.mark.asyncio
async def test_file_source_missing_and_malformed() -> None:
    """Test missing files and broken JSON."""
    with TemporaryDirectory() as tmpdir:
        source = FileDocumentSource(Path(tmpdir))

        with pytest.raises(DocumentUnavailableError):
            await source.fetch_json("events.json")

        (Path(tmpdir) / "events.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentFormatError):
            await source.fetch_json("events.json")

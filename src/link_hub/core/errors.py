"""Errors raised while loading documents."""


class DocumentLoadError(Exception):
    """Base error for documents that could not be loaded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Failed to load {name}: {reason}")
        self.name = name
        self.reason = reason


class DocumentUnavailableError(DocumentLoadError):
    """Document is missing or the endpoint answered with a non-OK status."""

    def __init__(self, name: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(name, reason)
        self.status_code = status_code


class DocumentFormatError(DocumentLoadError):
    """Document body is not valid JSON or has the wrong top-level shape."""

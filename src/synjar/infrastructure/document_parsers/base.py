"""Base protocol for format-specific parsers."""

from typing import Protocol

from synjar.application.ports.file_parser import ParseResult


class FormatParser(Protocol):
    """Callable that extracts text and metadata from file bytes of one format."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Raises ValueError on a corrupted file."""
        ...

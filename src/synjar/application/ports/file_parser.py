"""File parser port - text extraction from uploaded files."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class ParseResult:
    """Extracted text plus whatever metadata the format carries (title, author...)."""

    text: str
    metadata: dict[str, str] = field(default_factory=dict)


class FileParser(Protocol):
    """Port for validating an upload and extracting its text.

    Raises ValueError when the file type is not allowed or the file is corrupted.
    """

    def parse(self, data: bytes, filename: str, mime_type: str | None = None) -> ParseResult: ...

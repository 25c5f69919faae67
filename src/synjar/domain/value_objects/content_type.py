"""Document content type."""

from enum import StrEnum


class ContentType(StrEnum):
    """How the document content was supplied."""

    TEXT = "TEXT"
    FILE = "FILE"

"""Document processing status."""

from enum import StrEnum


class ProcessingStatus(StrEnum):
    """Ingestion lifecycle: chunking and embedding."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

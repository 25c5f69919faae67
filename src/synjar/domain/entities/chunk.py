"""Chunk entity - text segment with embedding."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Chunk:
    """Chunk - slice of document content with its vector embedding."""

    id: UUID
    document_id: UUID
    content: str
    embedding: list[float]
    chunk_index: int
    token_count: int = 0

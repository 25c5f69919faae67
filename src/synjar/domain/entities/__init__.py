"""Domain entities."""

from synjar.domain.entities.chunk import Chunk
from synjar.domain.entities.document import Document, DocumentProps

__all__ = [
    "Chunk",
    "Document",
    "DocumentProps",
]

"""Repository ports."""

from synjar.application.ports.repositories.chunk_repository import ChunkRepository
from synjar.application.ports.repositories.document_repository import (
    DocumentRepository,
)

__all__ = [
    "ChunkRepository",
    "DocumentRepository",
]

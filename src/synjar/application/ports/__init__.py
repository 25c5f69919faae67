"""Application ports - interfaces for external adapters."""

from synjar.application.ports.chunker import Chunker
from synjar.application.ports.embeddings_provider import EmbeddingResult, EmbeddingsProvider
from synjar.application.ports.event_publisher import EventPublisher
from synjar.application.ports.file_parser import FileParser, ParseResult
from synjar.application.ports.storage_provider import StorageProvider, UploadResult
from synjar.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Chunker",
    "EmbeddingResult",
    "EmbeddingsProvider",
    "EventPublisher",
    "FileParser",
    "ParseResult",
    "StorageProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UploadResult",
]

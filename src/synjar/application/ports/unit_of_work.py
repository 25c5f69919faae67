"""Unit of Work port."""

from collections.abc import AsyncIterator
from typing import Protocol

from synjar.application.ports.repositories.chunk_repository import ChunkRepository
from synjar.application.ports.repositories.document_repository import DocumentRepository


class UnitOfWork(Protocol):
    """Documents and their chunks, changed in one transaction."""

    documents: DocumentRepository
    chunks: ChunkRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Async context manager factory; commits on clean exit, rolls back on error."""

    def __call__(self) -> AsyncIterator[UnitOfWork]: ...

"""Chunk repository port."""

from typing import Protocol
from uuid import UUID

from synjar.domain.entities import Chunk


class ChunkRepository(Protocol):
    """Port for chunk persistence."""

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]: ...

    async def delete_by_document_id(self, document_id: UUID) -> None: ...

    async def count_by_document_id(self, document_id: UUID) -> int: ...

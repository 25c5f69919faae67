"""PostgreSQL chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from synjar.domain.entities import Chunk


def _vector_literal(embedding: list[float]) -> str:
    """pgvector text input format: [1.0,2.0,3.0]."""
    return "[" + ",".join(repr(float(x)) for x in embedding) + "]"


class PostgresChunkRepository:
    """Chunk repository implementation (pgvector embeddings)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Create chunks in batch."""
        if not chunks:
            return chunks
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO chunk (id, document_id, content, embedding, chunk_index, token_count) "
                "VALUES (%s, %s, %s, %s::vector, %s, %s)",
                [
                    (
                        c.id,
                        c.document_id,
                        c.content,
                        _vector_literal(c.embedding),
                        c.chunk_index,
                        c.token_count,
                    )
                    for c in chunks
                ],
            )
        return chunks

    async def delete_by_document_id(self, document_id: UUID) -> None:
        """Delete all chunks of a document."""
        await self._conn.execute("DELETE FROM chunk WHERE document_id = %s", (document_id,))

    async def count_by_document_id(self, document_id: UUID) -> int:
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM chunk WHERE document_id = %s", (document_id,)
        )
        return (await cur.fetchone())[0]

"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from synjar.infrastructure.persistence.postgres.chunk_repository import PostgresChunkRepository
from synjar.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)


class PostgresUnitOfWork:
    """Repositories sharing one pooled connection, hence one transaction."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self.documents = PostgresDocumentRepository(conn)
        self.chunks = PostgresChunkRepository(conn)

    async def commit(self) -> None:
        await self._conn.commit()

    async def rollback(self) -> None:
        await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """UnitOfWork factory: commits on clean exit, rolls back and re-raises otherwise."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with pool.connection() as conn:
            uow = PostgresUnitOfWork(conn)
            try:
                yield uow
            except BaseException:
                await uow.rollback()
                raise
            await uow.commit()

    return factory

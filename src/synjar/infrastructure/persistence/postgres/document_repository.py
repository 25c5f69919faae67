"""PostgreSQL document repository implementation."""

from uuid import UUID, uuid4

from psycopg import AsyncConnection

from synjar.application.dto.document_dto import DocumentFilters
from synjar.domain.entities import Document, DocumentProps
from synjar.domain.value_objects import ContentType, ProcessingStatus, VerificationStatus

_COLUMNS = (
    "id, workspace_id, title, content, content_type, original_filename, file_url, "
    "mime_type, file_size, source_description, verification_status, processing_status, "
    "processing_error, tags, created_at, updated_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document.reconstitute(
        DocumentProps(
            id=r[0],
            workspace_id=r[1],
            title=r[2],
            content=r[3],
            content_type=ContentType(r[4]),
            original_filename=r[5],
            file_url=r[6],
            mime_type=r[7],
            file_size=r[8],
            source_description=r[9],
            verification_status=VerificationStatus(r[10]),
            processing_status=ProcessingStatus(r[11]),
            processing_error=r[12],
            tags=list(r[13] or []),
            created_at=r[14],
            updated_at=r[15],
        )
    )


def _build_filter_conditions(
    workspace_id: UUID, filters: DocumentFilters
) -> tuple[list[str], list[object]]:
    """Build SQL AND conditions and params for list filters. Returns (conditions, params)."""
    conditions = ["workspace_id = %s"]
    params: list[object] = [workspace_id]
    if filters.verification_status:
        conditions.append("verification_status = %s")
        params.append(filters.verification_status.value)
    if filters.processing_status:
        conditions.append("processing_status = %s")
        params.append(filters.processing_status.value)
    if filters.tags:
        conditions.append("tags && %s::text[]")
        params.append(list(filters.tags))
    return conditions, params


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list_by_workspace(
        self, workspace_id: UUID, filters: DocumentFilters
    ) -> tuple[list[Document], int]:
        """List one page of workspace documents, newest first, plus the total count."""
        conditions, params = _build_filter_conditions(workspace_id, filters)
        where = " WHERE " + " AND ".join(conditions)
        cur = await self._conn.execute(f"SELECT COUNT(*) FROM document{where}", tuple(params))
        total = (await cur.fetchone())[0]
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document{where} "
            "ORDER BY created_at DESC, id LIMIT %s OFFSET %s",
            tuple(params) + (filters.limit, filters.offset),
        )
        rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows], total

    async def create(self, document: Document) -> Document:
        """Insert document and assign its id."""
        props = document.to_props()
        props.id = uuid4()
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                props.id,
                props.workspace_id,
                props.title,
                props.content,
                props.content_type.value,
                props.original_filename,
                props.file_url,
                props.mime_type,
                props.file_size,
                props.source_description,
                props.verification_status.value,
                props.processing_status.value,
                props.processing_error,
                props.tags,
                props.created_at,
                props.updated_at,
            ),
        )
        return Document.reconstitute(props)

    async def update(self, document: Document) -> Document:
        """Update mutable document fields."""
        props = document.to_props()
        await self._conn.execute(
            "UPDATE document SET title=%s, content=%s, source_description=%s, "
            "verification_status=%s, processing_status=%s, processing_error=%s, "
            "tags=%s, updated_at=%s WHERE id=%s",
            (
                props.title,
                props.content,
                props.source_description,
                props.verification_status.value,
                props.processing_status.value,
                props.processing_error,
                props.tags,
                props.updated_at,
                props.id,
            ),
        )
        return document

    async def delete(self, document_id: UUID) -> None:
        """Delete document (chunks cascade)."""
        await self._conn.execute("DELETE FROM document WHERE id = %s", (document_id,))

"""Get document use case."""

from uuid import UUID

from synjar.application.dto.document_dto import DocumentOutput
from synjar.domain.entities import Document
from synjar.domain.exceptions import NotFoundError


async def load_workspace_document(uow: object, workspace_id: UUID, document_id: UUID) -> Document:
    """Fetch a document that belongs to the workspace or raise NotFoundError."""
    document = await uow.documents.get_by_id(document_id)
    if document is None or document.workspace_id != workspace_id:
        raise NotFoundError("Document", str(document_id))
    return document


class GetDocumentUseCase:
    """Get document by id within workspace context."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, workspace_id: UUID, document_id: UUID) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
        return DocumentOutput.from_entity(document)

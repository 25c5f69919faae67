"""Verify / unverify document use case."""

from uuid import UUID

from synjar.application.dto.document_dto import DocumentOutput
from synjar.application.use_cases.document.get_document import load_workspace_document


class ChangeVerificationUseCase:
    """Mark a document as verified or unverified by a reviewer."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def verify(self, workspace_id: UUID, document_id: UUID) -> DocumentOutput:
        """Raises InvalidStateError if already verified."""
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
            document.verify()
            await uow.documents.update(document)
        return DocumentOutput.from_entity(document)

    async def unverify(self, workspace_id: UUID, document_id: UUID) -> DocumentOutput:
        """Raises InvalidStateError if already unverified."""
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
            document.unverify()
            await uow.documents.update(document)
        return DocumentOutput.from_entity(document)

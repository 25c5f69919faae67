"""Add / remove document tag use case."""

from uuid import UUID

from synjar.application.dto.document_dto import DocumentOutput
from synjar.application.use_cases.document.get_document import load_workspace_document
from synjar.domain.value_objects import Tag


class TagDocumentUseCase:
    """Add or remove a single tag."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def add_tag(self, workspace_id: UUID, document_id: UUID, tag: str) -> DocumentOutput:
        """Adding a tag that is already present is a no-op."""
        value = Tag.create(tag).value
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
            document.add_tag(value)
            await uow.documents.update(document)
        return DocumentOutput.from_entity(document)

    async def remove_tag(self, workspace_id: UUID, document_id: UUID, tag: str) -> DocumentOutput:
        """Raises NotFoundError if the document does not carry the tag."""
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
            document.remove_tag(tag)
            await uow.documents.update(document)
        return DocumentOutput.from_entity(document)

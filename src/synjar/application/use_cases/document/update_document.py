"""Update document use case."""

from uuid import UUID

from synjar.application.dto.document_dto import (
    DocumentOutput,
    DocumentUpdateInput,
    DocumentUpdateOutput,
)
from synjar.application.use_cases.document.get_document import load_workspace_document
from synjar.domain.value_objects import ProcessingStatus, Tag


class UpdateDocumentUseCase:
    """Apply a partial update: title, content, source description, tags."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, workspace_id: UUID, document_id: UUID, input_data: DocumentUpdateInput
    ) -> DocumentUpdateOutput:
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)

            content_changed = False
            if input_data.title is not None:
                document.update_title(input_data.title)
            if input_data.content is not None and input_data.content != document.content:
                document.update_content(input_data.content)
                content_changed = True
            if input_data.source_description is not None:
                document.update_source_description(input_data.source_description or None)
            if input_data.tags is not None:
                document.set_tags([Tag.create(t).value for t in input_data.tags])

            await uow.documents.update(document)

        # COMPLETED is terminal and PROCESSING is already running.
        needs_reprocessing = content_changed and document.processing_status in (
            ProcessingStatus.PENDING,
            ProcessingStatus.FAILED,
        )
        return DocumentUpdateOutput(
            document=DocumentOutput.from_entity(document),
            needs_reprocessing=needs_reprocessing,
        )

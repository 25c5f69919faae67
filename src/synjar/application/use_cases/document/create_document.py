"""Create document use case."""

import logging
from pathlib import Path

from synjar.application.dto.document_dto import DocumentCreateInput, DocumentOutput
from synjar.application.ports import EventPublisher, FileParser, StorageProvider
from synjar.domain.entities import Document
from synjar.domain.events import DocumentCreatedEvent
from synjar.domain.exceptions import ValidationError
from synjar.domain.value_objects import ContentType, Tag

logger = logging.getLogger(__name__)


class CreateDocumentUseCase:
    """Create a text or file document in a workspace.

    Files are validated and parsed first, then uploaded; the extracted text
    becomes the document content. Ingestion is started separately by
    ``ProcessDocumentUseCase``.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        storage: StorageProvider,
        file_parser: FileParser,
        event_publisher: EventPublisher,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._storage = storage
        self._file_parser = file_parser
        self._event_publisher = event_publisher

    async def execute(self, input_data: DocumentCreateInput) -> DocumentOutput:
        """Create document and publish ``document.created``."""
        tags = [Tag.create(t).value for t in input_data.tags]
        title = input_data.title
        content = input_data.content
        content_type = ContentType.TEXT
        file_fields: dict[str, object] = {}

        upload = input_data.file
        if upload is not None:
            try:
                parsed = self._file_parser.parse(upload.data, upload.filename, upload.mime_type)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            if not title.strip():
                title = parsed.metadata.get("title") or Path(upload.filename).stem or upload.filename
            content = parsed.text
            content_type = ContentType.FILE
            result = await self._storage.upload(upload.data, upload.filename, upload.mime_type)
            file_fields = {
                "original_filename": upload.filename,
                "file_url": result.url,
                "mime_type": upload.mime_type,
                "file_size": result.size,
            }

        document = Document.create(
            workspace_id=input_data.workspace_id,
            title=title,
            content=content,
            content_type=content_type,
            verification_status=input_data.verification_status,
            tags=tags,
            source_description=input_data.source_description,
            **file_fields,
        )

        async with self._uow_factory() as uow:
            document = await uow.documents.create(document)

        logger.info(
            "Created %s document %s in workspace %s",
            document.content_type.value,
            document.id,
            document.workspace_id,
        )
        await self._event_publisher.publish(
            DocumentCreatedEvent(
                document_id=document.id,
                workspace_id=document.workspace_id,
                title=document.title,
                content_type=document.content_type.value,
            )
        )
        return DocumentOutput.from_entity(document)

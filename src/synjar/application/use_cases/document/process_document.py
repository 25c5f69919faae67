"""Process document use case: chunk, embed, store."""

import logging
from uuid import UUID, uuid4

from synjar.application.dto.chunking_config import ChunkingConfig
from synjar.application.dto.document_dto import DocumentOutput
from synjar.application.ports import Chunker, EmbeddingsProvider, EventPublisher
from synjar.domain.entities import Chunk, Document
from synjar.domain.events import DocumentProcessedEvent
from synjar.domain.value_objects import ProcessingStatus

logger = logging.getLogger(__name__)


class ProcessDocumentUseCase:
    """Run ingestion for one document.

    PENDING/FAILED -> PROCESSING -> COMPLETED, or FAILED with the error
    message when chunking, embedding or storing chunks fails. Existing chunks
    are replaced.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        chunker: Chunker,
        embeddings_provider: EmbeddingsProvider,
        event_publisher: EventPublisher,
        chunking_config: ChunkingConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._embeddings_provider = embeddings_provider
        self._event_publisher = event_publisher
        self._chunking_config = chunking_config

    async def execute(self, document_id: UUID) -> DocumentOutput | None:
        """Process document. Returns None if it no longer exists."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if document is None:
                logger.warning("Document %s not found, skipping processing", document_id)
                return None
            document.start_processing()
            await uow.documents.update(document)
            await uow.chunks.delete_by_document_id(document_id)

        try:
            chunks = await self._build_chunks(document)
            # Adopted only after the commit, so a failed commit leaves the stored
            # row PROCESSING and _mark_failed can still move it to FAILED.
            completed = Document.reconstitute(document.to_props())
            completed.complete_processing()
            async with self._uow_factory() as uow:
                await uow.chunks.create_batch(chunks)
                await uow.documents.update(completed)
            document = completed
        except Exception as e:
            logger.exception("Failed to process document %s", document_id)
            await self._mark_failed(document_id, e)
            raise

        logger.info("Processed document %s into %d chunks", document_id, len(chunks))
        await self._event_publisher.publish(
            DocumentProcessedEvent(
                document_id=document_id,
                workspace_id=document.workspace_id,
                chunks_count=len(chunks),
            )
        )
        return DocumentOutput.from_entity(document)

    async def _build_chunks(self, document: Document) -> list[Chunk]:
        texts = self._chunker.chunk(document.content, self._chunking_config)
        if not texts:
            return []
        embeddings = await self._embeddings_provider.generate_embeddings(texts)
        return [
            Chunk(
                id=uuid4(),
                document_id=document.id,
                content=text,
                embedding=result.embedding,
                chunk_index=i,
                token_count=result.token_count,
            )
            for i, (text, result) in enumerate(zip(texts, embeddings, strict=True))
        ]

    async def _mark_failed(self, document_id: UUID, error: Exception) -> None:
        """Record the failure on the stored row, if it is still PROCESSING."""
        try:
            async with self._uow_factory() as uow:
                stored = await uow.documents.get_by_id(document_id)
                if stored is None or stored.processing_status != ProcessingStatus.PROCESSING:
                    return
                stored.fail_processing(str(error) or type(error).__name__)
                await uow.documents.update(stored)
        except Exception:
            logger.exception("Could not mark document %s as failed", document_id)

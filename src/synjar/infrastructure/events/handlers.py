"""Default domain event handlers wired by the composition root."""

import logging

from synjar.domain.events import DocumentCreatedEvent, DocumentProcessedEvent
from synjar.infrastructure.events.in_process_publisher import InProcessEventPublisher

logger = logging.getLogger(__name__)


async def log_document_created(event: DocumentCreatedEvent) -> None:
    logger.info(
        "Document %s created in workspace %s (%s)",
        event.document_id,
        event.workspace_id,
        event.content_type,
    )


async def log_document_processed(event: DocumentProcessedEvent) -> None:
    logger.info(
        "Document %s processed into %d chunks",
        event.document_id,
        event.chunks_count,
    )


def subscribe_default_handlers(publisher: InProcessEventPublisher) -> InProcessEventPublisher:
    """Attach the audit-log handlers. Returns the publisher for chaining."""
    publisher.subscribe(DocumentCreatedEvent.event_name, log_document_created)
    publisher.subscribe(DocumentProcessedEvent.event_name, log_document_processed)
    return publisher

"""Domain events."""

from synjar.domain.events.document_created import DocumentCreatedEvent
from synjar.domain.events.document_processed import DocumentProcessedEvent
from synjar.domain.events.domain_event import DomainEvent

__all__ = [
    "DocumentCreatedEvent",
    "DocumentProcessedEvent",
    "DomainEvent",
]

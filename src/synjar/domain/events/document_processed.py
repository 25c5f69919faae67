"""Document processed event."""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from synjar.domain.events.domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class DocumentProcessedEvent(DomainEvent):
    event_name: ClassVar[str] = "document.processed"

    document_id: UUID
    workspace_id: UUID
    chunks_count: int

"""Document created event."""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from synjar.domain.events.domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class DocumentCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "document.created"

    document_id: UUID
    workspace_id: UUID
    title: str
    content_type: str

"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from synjar.domain.entities import Document
from synjar.domain.value_objects import (
    ContentType,
    ProcessingStatus,
    VerificationStatus,
)


@dataclass
class UploadedFile:
    """Raw file received from the client."""

    data: bytes
    filename: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class DocumentCreateInput:
    """Input for creating a document."""

    workspace_id: UUID
    title: str = ""
    content: str = ""
    source_description: str | None = None
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    tags: list[str] = field(default_factory=list)
    file: UploadedFile | None = None


@dataclass
class DocumentUpdateInput:
    """Partial update; None means unchanged."""

    title: str | None = None
    content: str | None = None
    source_description: str | None = None
    tags: list[str] | None = None


@dataclass
class DocumentFilters:
    """List filters and pagination."""

    tags: list[str] = field(default_factory=list)
    verification_status: VerificationStatus | None = None
    processing_status: ProcessingStatus | None = None
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    workspace_id: UUID
    title: str
    content: str
    content_type: ContentType
    verification_status: VerificationStatus
    processing_status: ProcessingStatus
    processing_error: str | None
    tags: list[str]
    original_filename: str | None
    file_url: str | None
    mime_type: str | None
    file_size: int | None
    source_description: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentOutput":
        if document.id is None:
            raise ValueError("Document has not been persisted")
        return cls(
            id=document.id,
            workspace_id=document.workspace_id,
            title=document.title,
            content=document.content,
            content_type=document.content_type,
            verification_status=document.verification_status,
            processing_status=document.processing_status,
            processing_error=document.processing_error,
            tags=document.tags,
            original_filename=document.original_filename,
            file_url=document.file_url,
            mime_type=document.mime_type,
            file_size=document.file_size,
            source_description=document.source_description,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


@dataclass
class DocumentPage:
    """One page of documents."""

    items: list[DocumentOutput]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


@dataclass
class DocumentUpdateOutput:
    """Updated document and whether its content needs a new ingestion run."""

    document: DocumentOutput
    needs_reprocessing: bool

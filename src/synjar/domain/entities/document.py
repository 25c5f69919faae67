"""Document entity - tenant content with verification and processing lifecycle."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID

from synjar.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from synjar.domain.value_objects import (
    ContentType,
    ProcessingStatus,
    VerificationStatus,
    normalize_tag,
)


@dataclass
class DocumentProps:
    """Full attribute set of a document, as persisted."""

    id: UUID | None
    workspace_id: UUID
    title: str
    content: str
    content_type: ContentType
    verification_status: VerificationStatus
    processing_status: ProcessingStatus
    created_at: datetime
    updated_at: datetime
    tags: list[str] = field(default_factory=list)
    original_filename: str | None = None
    file_url: str | None = None
    mime_type: str | None = None
    file_size: int | None = None
    source_description: str | None = None
    processing_error: str | None = None


def _now() -> datetime:
    return datetime.now(UTC)


class Document:
    """Document aggregate.

    Build new documents with ``Document.create`` (defaults + validation) and
    load stored ones with ``Document.reconstitute`` (taken verbatim). The
    instance is not thread-safe; callers serialize mutation.
    """

    def __init__(self, props: DocumentProps) -> None:
        self._props = props

    @classmethod
    def create(
        cls,
        *,
        workspace_id: UUID,
        title: str,
        content: str,
        content_type: ContentType,
        verification_status: VerificationStatus,
        tags: list[str] | None = None,
        original_filename: str | None = None,
        file_url: str | None = None,
        mime_type: str | None = None,
        file_size: int | None = None,
        source_description: str | None = None,
    ) -> "Document":
        """New document in PENDING state; id is assigned by the repository."""
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty")
        now = _now()
        return cls(
            DocumentProps(
                id=None,
                workspace_id=workspace_id,
                title=title.strip(),
                content=content,
                content_type=content_type,
                verification_status=verification_status,
                processing_status=ProcessingStatus.PENDING,
                processing_error=None,
                tags=[normalize_tag(t) for t in tags or []],
                original_filename=original_filename,
                file_url=file_url,
                mime_type=mime_type,
                file_size=file_size,
                source_description=source_description,
                created_at=now,
                updated_at=now,
            )
        )

    @classmethod
    def reconstitute(cls, props: DocumentProps) -> "Document":
        """Rebuild a stored document. No defaults, no validation."""
        return cls(props)

    # --- read access ---

    @property
    def id(self) -> UUID | None:
        return self._props.id

    @property
    def workspace_id(self) -> UUID:
        return self._props.workspace_id

    @property
    def title(self) -> str:
        return self._props.title

    @property
    def content(self) -> str:
        return self._props.content

    @property
    def content_type(self) -> ContentType:
        return self._props.content_type

    @property
    def original_filename(self) -> str | None:
        return self._props.original_filename

    @property
    def file_url(self) -> str | None:
        return self._props.file_url

    @property
    def mime_type(self) -> str | None:
        return self._props.mime_type

    @property
    def file_size(self) -> int | None:
        return self._props.file_size

    @property
    def source_description(self) -> str | None:
        return self._props.source_description

    @property
    def verification_status(self) -> VerificationStatus:
        return self._props.verification_status

    @property
    def processing_status(self) -> ProcessingStatus:
        return self._props.processing_status

    @property
    def processing_error(self) -> str | None:
        return self._props.processing_error

    @property
    def tags(self) -> list[str]:
        return list(self._props.tags)

    @property
    def created_at(self) -> datetime:
        return self._props.created_at

    @property
    def updated_at(self) -> datetime:
        return self._props.updated_at

    @property
    def is_file(self) -> bool:
        return self._props.content_type == ContentType.FILE

    @property
    def is_verified(self) -> bool:
        return self._props.verification_status == VerificationStatus.VERIFIED

    @property
    def is_processed(self) -> bool:
        return self._props.processing_status == ProcessingStatus.COMPLETED

    @property
    def has_failed(self) -> bool:
        return self._props.processing_status == ProcessingStatus.FAILED

    # --- verification ---

    def verify(self) -> None:
        if self._props.verification_status == VerificationStatus.VERIFIED:
            raise InvalidStateError("Document is already verified")
        self._props.verification_status = VerificationStatus.VERIFIED
        self._touch()

    def unverify(self) -> None:
        if self._props.verification_status == VerificationStatus.UNVERIFIED:
            raise InvalidStateError("Document is already unverified")
        self._props.verification_status = VerificationStatus.UNVERIFIED
        self._touch()

    # --- processing ---

    def start_processing(self) -> None:
        """PENDING or FAILED -> PROCESSING. Clears the previous error."""
        if self._props.processing_status == ProcessingStatus.PROCESSING:
            raise InvalidStateError("Document is already being processed")
        if self._props.processing_status == ProcessingStatus.COMPLETED:
            raise InvalidStateError("Document has already been processed")
        self._props.processing_status = ProcessingStatus.PROCESSING
        self._props.processing_error = None
        self._touch()

    def complete_processing(self) -> None:
        if self._props.processing_status != ProcessingStatus.PROCESSING:
            raise InvalidStateError("Document is not being processed")
        self._props.processing_status = ProcessingStatus.COMPLETED
        self._touch()

    def fail_processing(self, error: str) -> None:
        if self._props.processing_status != ProcessingStatus.PROCESSING:
            raise InvalidStateError("Document is not being processed")
        self._props.processing_status = ProcessingStatus.FAILED
        self._props.processing_error = error
        self._touch()

    # --- fields ---

    def update_title(self, title: str) -> None:
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty")
        self._props.title = title.strip()
        self._touch()

    def update_content(self, content: str) -> None:
        self._props.content = content
        self._touch()

    def update_source_description(self, source_description: str | None) -> None:
        self._props.source_description = source_description
        self._touch()

    # --- tags ---

    def add_tag(self, tag: str) -> None:
        """Add a tag. A tag already present is ignored and updated_at is kept."""
        normalized = normalize_tag(tag)
        if normalized in self._props.tags:
            return
        self._props.tags.append(normalized)
        self._touch()

    def remove_tag(self, tag: str) -> None:
        normalized = normalize_tag(tag)
        if normalized not in self._props.tags:
            raise NotFoundError("Tag", tag)
        self._props.tags.remove(normalized)
        self._touch()

    def set_tags(self, tags: list[str]) -> None:
        """Replace all tags. Order is kept and duplicates are not collapsed."""
        self._props.tags = [normalize_tag(t) for t in tags]
        self._touch()

    # --- queries ---

    def can_be_deleted(self) -> bool:
        return self._props.processing_status != ProcessingStatus.PROCESSING

    def to_props(self) -> DocumentProps:
        """Detached snapshot for persistence."""
        return replace(self._props, tags=list(self._props.tags))

    def _touch(self) -> None:
        self._props.updated_at = _now()

    def __repr__(self) -> str:
        return (
            f"Document(id={self.id!s}, title={self.title!r}, "
            f"processing_status={self.processing_status.value})"
        )

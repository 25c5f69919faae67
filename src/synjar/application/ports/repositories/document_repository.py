"""Document repository port."""

from typing import Protocol
from uuid import UUID

from synjar.application.dto.document_dto import DocumentFilters
from synjar.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def list_by_workspace(
        self, workspace_id: UUID, filters: DocumentFilters
    ) -> tuple[list[Document], int]: ...

    async def create(self, document: Document) -> Document:
        """Persist a new document and return it with its assigned id."""
        ...

    async def update(self, document: Document) -> Document: ...

    async def delete(self, document_id: UUID) -> None: ...

"""List documents use case."""

from uuid import UUID

from synjar.application.dto.document_dto import DocumentFilters, DocumentOutput, DocumentPage
from synjar.domain.exceptions import ValidationError
from synjar.domain.value_objects import normalize_tag

MAX_PAGE_SIZE = 100


class ListDocumentsUseCase:
    """List workspace documents, newest first, with tag and status filters."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, workspace_id: UUID, filters: DocumentFilters) -> DocumentPage:
        if filters.page < 1:
            raise ValidationError("page must be >= 1")
        if not 1 <= filters.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        filters.tags = [normalize_tag(t) for t in filters.tags]

        async with self._uow_factory() as uow:
            documents, total = await uow.documents.list_by_workspace(workspace_id, filters)

        return DocumentPage(
            items=[DocumentOutput.from_entity(d) for d in documents],
            page=filters.page,
            limit=filters.limit,
            total=total,
        )

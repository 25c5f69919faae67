"""Signed download URL use case."""

from uuid import UUID

from synjar.application.ports import StorageProvider
from synjar.application.use_cases.document.delete_document import storage_key_from_url
from synjar.application.use_cases.document.get_document import load_workspace_document
from synjar.domain.exceptions import NotFoundError

DEFAULT_EXPIRY_SECONDS = 3600


class GetDownloadUrlUseCase:
    """Time-limited URL for the original file of a FILE document."""

    def __init__(self, unit_of_work_factory: type, storage: StorageProvider) -> None:
        self._uow_factory = unit_of_work_factory
        self._storage = storage

    async def execute(
        self,
        workspace_id: UUID,
        document_id: UUID,
        expires_in_seconds: int = DEFAULT_EXPIRY_SECONDS,
    ) -> str:
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
        key = storage_key_from_url(document.file_url) if document.file_url else None
        if key is None:
            raise NotFoundError("File", str(document_id))
        return await self._storage.get_signed_url(key, expires_in_seconds)

"""Delete document use case."""

import logging
import re
from uuid import UUID

from synjar.application.ports import StorageProvider
from synjar.application.use_cases.document.get_document import load_workspace_document
from synjar.domain.exceptions import InvalidStateError

logger = logging.getLogger(__name__)

# Stored objects are named "<uuid4>-<sanitized filename>".
_STORAGE_KEY_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}-", re.IGNORECASE
)


def storage_key_from_url(file_url: str) -> str | None:
    """Last path segment of the file URL if it looks like one of our keys."""
    key = file_url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if not key or not _STORAGE_KEY_RE.match(key):
        return None
    return key


class DeleteDocumentUseCase:
    """Delete a document and its stored file."""

    def __init__(self, unit_of_work_factory: type, storage: StorageProvider) -> None:
        self._uow_factory = unit_of_work_factory
        self._storage = storage

    async def execute(self, workspace_id: UUID, document_id: UUID) -> None:
        """Raises InvalidStateError while the document is being processed."""
        async with self._uow_factory() as uow:
            document = await load_workspace_document(uow, workspace_id, document_id)
            if not document.can_be_deleted():
                raise InvalidStateError("Document is being processed and cannot be deleted")
            await uow.chunks.delete_by_document_id(document_id)
            await uow.documents.delete(document_id)

        if document.file_url:
            await self._delete_file(document.file_url)
        logger.info("Deleted document %s from workspace %s", document_id, workspace_id)

    async def _delete_file(self, file_url: str) -> None:
        key = storage_key_from_url(file_url)
        if key is None:
            logger.warning("Invalid file key format in URL: %s", file_url)
            return
        try:
            await self._storage.delete(key)
        except Exception:
            # The row is already gone; an orphaned blob is left for cleanup.
            logger.exception("Failed to delete file from storage: %s", key)

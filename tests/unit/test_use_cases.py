"""Unit tests for document use cases."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from synjar.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentFilters,
    DocumentUpdateInput,
    UploadedFile,
)
from synjar.application.use_cases.document.change_verification import ChangeVerificationUseCase
from synjar.application.use_cases.document.create_document import CreateDocumentUseCase
from synjar.application.use_cases.document.delete_document import (
    DeleteDocumentUseCase,
    storage_key_from_url,
)
from synjar.application.use_cases.document.get_document import GetDocumentUseCase
from synjar.application.use_cases.document.get_download_url import GetDownloadUrlUseCase
from synjar.application.use_cases.document.list_documents import ListDocumentsUseCase
from synjar.application.use_cases.document.process_document import ProcessDocumentUseCase
from synjar.application.use_cases.document.tag_document import TagDocumentUseCase
from synjar.application.use_cases.document.update_document import UpdateDocumentUseCase
from synjar.domain.entities import Chunk, Document
from synjar.domain.events import DocumentCreatedEvent, DocumentProcessedEvent
from synjar.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from synjar.domain.value_objects import ContentType, ProcessingStatus, VerificationStatus
from synjar.infrastructure.chunking.recursive_chunker import RecursiveChunker
from synjar.infrastructure.document_parsers import RegistryFileParser

from tests.conftest import (
    FakeDocumentRepository,
    FakeStorageProvider,
    FakeUnitOfWork,
    make_document,
)

FILE_KEY = "3f2a1c9e-8b7d-4e6f-a5b4-c3d2e1f0a9b8-policy.txt"


# --- CreateDocumentUseCase ---


def _create_use_case(uow_factory, storage, publisher) -> CreateDocumentUseCase:
    return CreateDocumentUseCase(
        unit_of_work_factory=uow_factory,
        storage=storage,
        file_parser=RegistryFileParser(),
        event_publisher=publisher,
    )


@pytest.mark.asyncio
async def test_create_text_document(
    fake_uow: FakeUnitOfWork, uow_factory, fake_storage, mock_event_publisher
) -> None:
    workspace_id = uuid4()
    use_case = _create_use_case(uow_factory, fake_storage, mock_event_publisher)

    result = await use_case.execute(
        DocumentCreateInput(
            workspace_id=workspace_id,
            title="Refunds",
            content="Refunds are issued within 14 days.",
            tags=["Billing", "FAQ"],
        )
    )

    assert result.id is not None
    assert result.content_type == ContentType.TEXT
    assert result.processing_status == ProcessingStatus.PENDING
    assert result.verification_status == VerificationStatus.UNVERIFIED
    assert result.tags == ["billing", "faq"]
    assert await fake_uow.documents.get_by_id(result.id) is not None
    assert fake_storage.objects == {}

    event = mock_event_publisher.publish.await_args.args[0]
    assert isinstance(event, DocumentCreatedEvent)
    assert event.document_id == result.id
    assert event.workspace_id == workspace_id


@pytest.mark.asyncio
async def test_create_rejects_invalid_tag(uow_factory, fake_storage, mock_event_publisher) -> None:
    use_case = _create_use_case(uow_factory, fake_storage, mock_event_publisher)
    with pytest.raises(ValidationError, match="Tag cannot be empty"):
        await use_case.execute(
            DocumentCreateInput(workspace_id=uuid4(), title="T", content="c", tags=["  "])
        )
    mock_event_publisher.publish.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_file_document_uploads_and_extracts(
    uow_factory, fake_storage, mock_event_publisher
) -> None:
    use_case = _create_use_case(uow_factory, fake_storage, mock_event_publisher)
    data = b"# Shipping Policy\nWe ship worldwide."

    result = await use_case.execute(
        DocumentCreateInput(
            workspace_id=uuid4(),
            file=UploadedFile(data=data, filename="Shipping Policy.md", mime_type="text/markdown"),
        )
    )

    assert result.content_type == ContentType.FILE
    assert result.title == "Shipping Policy"
    assert result.content == data.decode()
    assert result.original_filename == "Shipping Policy.md"
    assert result.file_size == len(data)
    assert result.mime_type == "text/markdown"
    key = storage_key_from_url(result.file_url)
    assert key is not None and key.endswith("-shipping-policy.md")
    assert fake_storage.objects[key] == data


@pytest.mark.asyncio
async def test_create_file_title_falls_back_to_filename(
    uow_factory, fake_storage, mock_event_publisher
) -> None:
    use_case = _create_use_case(uow_factory, fake_storage, mock_event_publisher)
    result = await use_case.execute(
        DocumentCreateInput(
            workspace_id=uuid4(),
            file=UploadedFile(data=b"plain notes", filename="meeting-notes.txt", mime_type=""),
        )
    )
    assert result.title == "meeting-notes"


@pytest.mark.asyncio
async def test_create_file_rejects_unsupported_type(
    uow_factory, fake_storage, mock_event_publisher
) -> None:
    use_case = _create_use_case(uow_factory, fake_storage, mock_event_publisher)
    with pytest.raises(ValidationError, match="File extension not allowed"):
        await use_case.execute(
            DocumentCreateInput(
                workspace_id=uuid4(),
                file=UploadedFile(data=b"MZ", filename="tool.exe", mime_type=""),
            )
        )
    assert fake_storage.objects == {}


# --- GetDocumentUseCase / ListDocumentsUseCase ---


@pytest.mark.asyncio
async def test_get_document_scoped_to_workspace(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    doc = fake_uow.documents.add(make_document())
    use_case = GetDocumentUseCase(unit_of_work_factory=uow_factory)

    result = await use_case.execute(doc.workspace_id, doc.id)
    assert result.id == doc.id

    with pytest.raises(NotFoundError):
        await use_case.execute(uuid4(), doc.id)
    with pytest.raises(NotFoundError):
        await use_case.execute(doc.workspace_id, uuid4())


@pytest.mark.asyncio
async def test_list_documents_filters_and_pages(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    workspace_id = uuid4()
    for i in range(3):
        fake_uow.documents.add(make_document(workspace_id=workspace_id, title=f"Doc {i}", tags=["faq"]))
    fake_uow.documents.add(make_document(workspace_id=workspace_id, tags=["billing"]))
    fake_uow.documents.add(make_document(tags=["faq"]))
    use_case = ListDocumentsUseCase(unit_of_work_factory=uow_factory)

    page = await use_case.execute(workspace_id, DocumentFilters(tags=["FAQ"], limit=2))

    assert page.total == 3
    assert page.total_pages == 2
    assert len(page.items) == 2
    assert all("faq" in d.tags for d in page.items)


@pytest.mark.asyncio
@pytest.mark.parametrize("filters", [DocumentFilters(page=0), DocumentFilters(limit=101)])
async def test_list_documents_rejects_bad_paging(uow_factory, filters: DocumentFilters) -> None:
    with pytest.raises(ValidationError):
        await ListDocumentsUseCase(unit_of_work_factory=uow_factory).execute(uuid4(), filters)


# --- UpdateDocumentUseCase ---


@pytest.mark.asyncio
async def test_update_content_of_pending_needs_reprocessing(
    fake_uow: FakeUnitOfWork, uow_factory
) -> None:
    doc = fake_uow.documents.add(make_document())
    use_case = UpdateDocumentUseCase(unit_of_work_factory=uow_factory)

    result = await use_case.execute(
        doc.workspace_id,
        doc.id,
        DocumentUpdateInput(title="New", content="New content", tags=["A", "a"]),
    )

    assert result.needs_reprocessing
    assert result.document.title == "New"
    assert result.document.tags == ["a", "a"]


@pytest.mark.asyncio
async def test_update_completed_document_does_not_reprocess(
    fake_uow: FakeUnitOfWork, uow_factory
) -> None:
    doc = fake_uow.documents.add(make_document(processing_status=ProcessingStatus.COMPLETED))
    result = await UpdateDocumentUseCase(unit_of_work_factory=uow_factory).execute(
        doc.workspace_id, doc.id, DocumentUpdateInput(content="Changed")
    )
    assert not result.needs_reprocessing
    assert result.document.content == "Changed"


@pytest.mark.asyncio
async def test_update_same_content_is_not_a_change(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    doc = fake_uow.documents.add(make_document())
    result = await UpdateDocumentUseCase(unit_of_work_factory=uow_factory).execute(
        doc.workspace_id, doc.id, DocumentUpdateInput(content=doc.content)
    )
    assert not result.needs_reprocessing


# --- ChangeVerificationUseCase / TagDocumentUseCase ---


@pytest.mark.asyncio
async def test_verify_and_unverify(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    doc = fake_uow.documents.add(make_document())
    use_case = ChangeVerificationUseCase(unit_of_work_factory=uow_factory)

    result = await use_case.verify(doc.workspace_id, doc.id)
    assert result.verification_status == VerificationStatus.VERIFIED
    with pytest.raises(InvalidStateError):
        await use_case.verify(doc.workspace_id, doc.id)

    result = await use_case.unverify(doc.workspace_id, doc.id)
    assert result.verification_status == VerificationStatus.UNVERIFIED


@pytest.mark.asyncio
async def test_add_and_remove_tag(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    doc = fake_uow.documents.add(make_document())
    use_case = TagDocumentUseCase(unit_of_work_factory=uow_factory)

    result = await use_case.add_tag(doc.workspace_id, doc.id, "Release Notes")
    assert result.tags == ["release-notes"]

    with pytest.raises(ValidationError):
        await use_case.add_tag(doc.workspace_id, doc.id, "x" * 51)

    result = await use_case.remove_tag(doc.workspace_id, doc.id, "RELEASE NOTES")
    assert result.tags == []

    with pytest.raises(NotFoundError, match="missing"):
        await use_case.remove_tag(doc.workspace_id, doc.id, "missing")


# --- DeleteDocumentUseCase ---


def test_storage_key_from_url() -> None:
    assert storage_key_from_url(f"https://files.test/bucket/{FILE_KEY}") == FILE_KEY
    assert storage_key_from_url(f"https://files.test/{FILE_KEY}?expires=1") == FILE_KEY
    assert storage_key_from_url("https://files.test/bucket/policy.txt") is None
    assert storage_key_from_url("") is None


@pytest.mark.asyncio
async def test_delete_removes_document_chunks_and_file(
    fake_uow: FakeUnitOfWork, uow_factory, fake_storage: FakeStorageProvider
) -> None:
    doc = fake_uow.documents.add(make_document(file_url=f"https://files.test/{FILE_KEY}"))
    use_case = DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)

    await use_case.execute(doc.workspace_id, doc.id)

    assert await fake_uow.documents.get_by_id(doc.id) is None
    assert fake_storage.deleted == [FILE_KEY]


@pytest.mark.asyncio
async def test_delete_while_processing_raises(fake_uow: FakeUnitOfWork, uow_factory, fake_storage) -> None:
    doc = fake_uow.documents.add(make_document(processing_status=ProcessingStatus.PROCESSING))
    use_case = DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)

    with pytest.raises(InvalidStateError, match="being processed"):
        await use_case.execute(doc.workspace_id, doc.id)
    assert await fake_uow.documents.get_by_id(doc.id) is not None


@pytest.mark.asyncio
async def test_delete_skips_file_with_bad_key(
    fake_uow: FakeUnitOfWork, uow_factory, fake_storage, caplog: pytest.LogCaptureFixture
) -> None:
    doc = fake_uow.documents.add(make_document(file_url="https://files.test/policy.txt"))
    use_case = DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)

    await use_case.execute(doc.workspace_id, doc.id)

    assert fake_storage.deleted == []
    assert "Invalid file key format" in caplog.text


@pytest.mark.asyncio
async def test_delete_survives_storage_failure(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    doc = fake_uow.documents.add(make_document(file_url=f"https://files.test/{FILE_KEY}"))
    storage = AsyncMock()
    storage.delete.side_effect = RuntimeError("bucket unavailable")
    use_case = DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=storage)

    await use_case.execute(doc.workspace_id, doc.id)

    assert await fake_uow.documents.get_by_id(doc.id) is None
    storage.delete.assert_awaited_once_with(FILE_KEY)


# --- ProcessDocumentUseCase ---


def _process_use_case(uow_factory, embeddings, publisher, chunking_config) -> ProcessDocumentUseCase:
    return ProcessDocumentUseCase(
        unit_of_work_factory=uow_factory,
        chunker=RecursiveChunker(),
        embeddings_provider=embeddings,
        event_publisher=publisher,
        chunking_config=chunking_config,
    )


@pytest.mark.asyncio
async def test_process_document_success(
    fake_uow: FakeUnitOfWork,
    uow_factory,
    mock_embeddings_provider,
    mock_event_publisher,
    chunking_config,
) -> None:
    doc = fake_uow.documents.add(make_document(content="word " * 60))
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )

    result = await use_case.execute(doc.id)

    assert result.processing_status == ProcessingStatus.COMPLETED
    chunks = fake_uow.chunks.chunks_for(doc.id)
    assert len(chunks) >= 3
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert all(c.token_count == 3 for c in chunks)
    mock_embeddings_provider.generate_embeddings.assert_awaited_once()

    event = mock_event_publisher.publish.await_args.args[0]
    assert isinstance(event, DocumentProcessedEvent)
    assert event.chunks_count == len(chunks)


@pytest.mark.asyncio
async def test_process_replaces_existing_chunks_on_retry(
    fake_uow: FakeUnitOfWork,
    uow_factory,
    mock_embeddings_provider,
    mock_event_publisher,
    chunking_config,
) -> None:
    doc = fake_uow.documents.add(make_document(processing_status=ProcessingStatus.FAILED))
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )
    await fake_uow.chunks.create_batch(
        [
            Chunk(id=uuid4(), document_id=doc.id, content="stale", embedding=[0.0], chunk_index=i)
            for i in range(2)
        ]
    )

    await use_case.execute(doc.id)

    assert await fake_uow.chunks.count_by_document_id(doc.id) == 1
    assert doc.processing_error is None


@pytest.mark.asyncio
async def test_process_empty_content_completes_without_embeddings(
    fake_uow: FakeUnitOfWork,
    uow_factory,
    mock_embeddings_provider,
    mock_event_publisher,
    chunking_config,
) -> None:
    doc = fake_uow.documents.add(make_document(content="   "))
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )

    result = await use_case.execute(doc.id)

    assert result.processing_status == ProcessingStatus.COMPLETED
    mock_embeddings_provider.generate_embeddings.assert_not_awaited()


@pytest.mark.asyncio
async def test_process_failure_marks_failed_and_reraises(
    fake_uow: FakeUnitOfWork, uow_factory, mock_event_publisher, chunking_config
) -> None:
    doc = fake_uow.documents.add(make_document())
    embeddings = AsyncMock()
    embeddings.generate_embeddings.side_effect = RuntimeError("embedding API down")
    use_case = _process_use_case(uow_factory, embeddings, mock_event_publisher, chunking_config)

    with pytest.raises(RuntimeError, match="embedding API down"):
        await use_case.execute(doc.id)

    stored = await fake_uow.documents.get_by_id(doc.id)
    assert stored.processing_status == ProcessingStatus.FAILED
    assert stored.processing_error == "embedding API down"
    mock_event_publisher.publish.assert_not_awaited()


class _SnapshotDocumentRepository(FakeDocumentRepository):
    """Stores copies, like a real database; the COMPLETED write fails."""

    async def get_by_id(self, document_id):
        stored = await super().get_by_id(document_id)
        return Document.reconstitute(stored.to_props()) if stored else None

    async def update(self, document: Document) -> Document:
        if document.processing_status == ProcessingStatus.COMPLETED:
            raise RuntimeError("connection lost during commit")
        return await super().update(Document.reconstitute(document.to_props()))


@pytest.mark.asyncio
async def test_process_failed_completion_commit_leaves_document_retryable(
    fake_uow: FakeUnitOfWork,
    uow_factory,
    mock_embeddings_provider,
    mock_event_publisher,
    chunking_config,
) -> None:
    fake_uow.documents = _SnapshotDocumentRepository()
    doc = fake_uow.documents.add(make_document())
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )

    with pytest.raises(RuntimeError, match="connection lost"):
        await use_case.execute(doc.id)

    stored = await fake_uow.documents.get_by_id(doc.id)
    assert stored.processing_status == ProcessingStatus.FAILED
    assert stored.processing_error == "connection lost during commit"
    assert stored.can_be_deleted()
    stored.start_processing()
    mock_event_publisher.publish.assert_not_awaited()


@pytest.mark.asyncio
async def test_process_completed_document_raises_invalid_state(
    fake_uow: FakeUnitOfWork,
    uow_factory,
    mock_embeddings_provider,
    mock_event_publisher,
    chunking_config,
) -> None:
    doc = fake_uow.documents.add(make_document(processing_status=ProcessingStatus.COMPLETED))
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )
    with pytest.raises(InvalidStateError, match="already been processed"):
        await use_case.execute(doc.id)
    assert doc.processing_status == ProcessingStatus.COMPLETED


@pytest.mark.asyncio
async def test_process_missing_document_returns_none(
    uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
) -> None:
    use_case = _process_use_case(
        uow_factory, mock_embeddings_provider, mock_event_publisher, chunking_config
    )
    assert await use_case.execute(uuid4()) is None


# --- GetDownloadUrlUseCase ---


@pytest.mark.asyncio
async def test_download_url_for_file_document(fake_uow: FakeUnitOfWork, uow_factory, fake_storage) -> None:
    doc = fake_uow.documents.add(make_document(file_url=f"https://files.test/{FILE_KEY}"))
    use_case = GetDownloadUrlUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)

    url = await use_case.execute(doc.workspace_id, doc.id, 600)

    assert url == f"https://files.test/{FILE_KEY}?expires_in=600"


@pytest.mark.asyncio
async def test_download_url_for_text_document_not_found(
    fake_uow: FakeUnitOfWork, uow_factory, fake_storage
) -> None:
    doc = fake_uow.documents.add(make_document())
    use_case = GetDownloadUrlUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)
    with pytest.raises(NotFoundError):
        await use_case.execute(doc.workspace_id, doc.id)

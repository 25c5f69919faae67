"""Pytest fixtures for Synjar tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from synjar.application.dto.chunking_config import ChunkingConfig
from synjar.application.dto.document_dto import DocumentFilters
from synjar.application.ports import EmbeddingResult, UploadResult
from synjar.domain.entities import Chunk, Document, DocumentProps
from synjar.domain.value_objects import (
    ChunkingStrategy,
    ContentType,
    ProcessingStatus,
    VerificationStatus,
)
from synjar.infrastructure.storage.keys import build_object_key


# --- Builders ---


def make_document(
    *,
    workspace_id: UUID | None = None,
    title: str = "Refund policy",
    content: str = "Refunds are issued within 14 days.",
    processing_status: ProcessingStatus = ProcessingStatus.PENDING,
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED,
    tags: list[str] | None = None,
    file_url: str | None = None,
    updated_at: datetime | None = None,
) -> Document:
    """Stored document with an id and a past updated_at, so mutations visibly bump it."""
    past = updated_at or datetime(2024, 1, 1, tzinfo=UTC)
    return Document.reconstitute(
        DocumentProps(
            id=uuid4(),
            workspace_id=workspace_id or uuid4(),
            title=title,
            content=content,
            content_type=ContentType.FILE if file_url else ContentType.TEXT,
            verification_status=verification_status,
            processing_status=processing_status,
            created_at=past - timedelta(days=1),
            updated_at=past,
            tags=list(tags or []),
            file_url=file_url,
            original_filename="policy.txt" if file_url else None,
            mime_type="text/plain" if file_url else None,
            file_size=42 if file_url else None,
        )
    )


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}

    def add(self, document: Document) -> Document:
        """Helper to seed a stored document."""
        self._by_id[document.id] = document
        return document

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return self._by_id.get(document_id)

    async def list_by_workspace(
        self, workspace_id: UUID, filters: DocumentFilters
    ) -> tuple[list[Document], int]:
        items = [d for d in self._by_id.values() if d.workspace_id == workspace_id]
        if filters.verification_status:
            items = [d for d in items if d.verification_status == filters.verification_status]
        if filters.processing_status:
            items = [d for d in items if d.processing_status == filters.processing_status]
        if filters.tags:
            items = [d for d in items if set(d.tags) & set(filters.tags)]
        items.sort(key=lambda d: d.created_at, reverse=True)
        return items[filters.offset : filters.offset + filters.limit], len(items)

    async def create(self, document: Document) -> Document:
        props = document.to_props()
        props.id = uuid4()
        stored = Document.reconstitute(props)
        self._by_id[stored.id] = stored
        return stored

    async def update(self, document: Document) -> Document:
        self._by_id[document.id] = document
        return document

    async def delete(self, document_id: UUID) -> None:
        self._by_id.pop(document_id, None)


class FakeChunkRepository:
    """In-memory chunk repository."""

    def __init__(self) -> None:
        self._by_document: dict[UUID, list[Chunk]] = {}

    def chunks_for(self, document_id: UUID) -> list[Chunk]:
        return sorted(self._by_document.get(document_id, []), key=lambda c: c.chunk_index)

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        for c in chunks:
            self._by_document.setdefault(c.document_id, []).append(c)
        return chunks

    async def delete_by_document_id(self, document_id: UUID) -> None:
        self._by_document.pop(document_id, None)

    async def count_by_document_id(self, document_id: UUID) -> int:
        return len(self._by_document.get(document_id, []))


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.chunks = FakeChunkRepository()
        self.committed = 0

    async def commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call, so state survives between use case steps."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fake ports ---


class FakeStorageProvider:
    """In-memory object store with predictable URLs."""

    def __init__(self, base_url: str = "https://files.test") -> None:
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    async def upload(self, data: bytes, filename: str, mime_type: str) -> UploadResult:
        key = build_object_key(filename)
        self.objects[key] = data
        return UploadResult(url=f"{self.base_url}/{key}", key=key, size=len(data))

    async def delete(self, key: str) -> None:
        self.deleted.append(key)
        self.objects.pop(key, None)

    async def get_signed_url(self, key: str, expires_in_seconds: int = 3600) -> str:
        return f"{self.base_url}/{key}?expires_in={expires_in_seconds}"


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def fake_storage() -> FakeStorageProvider:
    return FakeStorageProvider()


@pytest.fixture
def mock_embeddings_provider():
    """AsyncMock for EmbeddingsProvider - fixed vectors, 3 tokens per text."""

    async def _embed(texts: list[str]) -> list[EmbeddingResult]:
        return [EmbeddingResult(embedding=[0.1] * 1536, token_count=3) for _ in texts]

    mock = AsyncMock()
    mock.generate_embeddings = AsyncMock(side_effect=_embed)
    return mock


@pytest.fixture
def mock_event_publisher():
    """AsyncMock for EventPublisher."""
    return AsyncMock()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Small chunking config for RecursiveChunker tests."""
    return ChunkingConfig(
        chunk_size=100,
        chunk_overlap=20,
        strategy=ChunkingStrategy.RECURSIVE,
    )

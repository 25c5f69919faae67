"""Fixtures for API tests."""

from unittest.mock import AsyncMock

import pytest
from falcon.testing import TestClient

from synjar.application.use_cases.document.change_verification import ChangeVerificationUseCase
from synjar.application.use_cases.document.create_document import CreateDocumentUseCase
from synjar.application.use_cases.document.delete_document import DeleteDocumentUseCase
from synjar.application.use_cases.document.get_document import GetDocumentUseCase
from synjar.application.use_cases.document.get_download_url import GetDownloadUrlUseCase
from synjar.application.use_cases.document.list_documents import ListDocumentsUseCase
from synjar.application.use_cases.document.tag_document import TagDocumentUseCase
from synjar.application.use_cases.document.update_document import UpdateDocumentUseCase
from synjar.deployment import DeploymentConfig
from synjar.infrastructure.document_parsers import RegistryFileParser
from synjar.interfaces.api.app import Resources, create_app
from synjar.interfaces.api.middleware.cors import CORSMiddleware
from synjar.interfaces.api.resources.deployment import DeploymentResource
from synjar.interfaces.api.resources.documents import (
    DocumentDownloadResource,
    DocumentProcessResource,
    DocumentResource,
    DocumentsResource,
    DocumentTagsResource,
    DocumentVerificationResource,
)
from synjar.interfaces.api.resources.health import HealthResource


@pytest.fixture
def process_document() -> AsyncMock:
    """Stand-in for ProcessDocumentUseCase; ingestion is covered by the use case tests."""
    return AsyncMock()


@pytest.fixture
def files_resource():
    """Signed local file route; mounted only for local storage."""
    return None


@pytest.fixture
def app(uow_factory, fake_storage, mock_event_publisher, process_document, files_resource):
    """Falcon ASGI app wired to in-memory fakes."""
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    resources = Resources(
        health=HealthResource(),
        deployment=DeploymentResource(DeploymentConfig()),
        documents=DocumentsResource(
            CreateDocumentUseCase(
                unit_of_work_factory=uow_factory,
                storage=fake_storage,
                file_parser=RegistryFileParser(),
                event_publisher=mock_event_publisher,
            ),
            ListDocumentsUseCase(unit_of_work_factory=uow_factory),
            process_document,
        ),
        document=DocumentResource(
            get_document,
            UpdateDocumentUseCase(unit_of_work_factory=uow_factory),
            DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=fake_storage),
            process_document,
        ),
        verification=DocumentVerificationResource(
            ChangeVerificationUseCase(unit_of_work_factory=uow_factory)
        ),
        tags=DocumentTagsResource(TagDocumentUseCase(unit_of_work_factory=uow_factory)),
        process=DocumentProcessResource(get_document, process_document),
        download=DocumentDownloadResource(
            GetDownloadUrlUseCase(unit_of_work_factory=uow_factory, storage=fake_storage)
        ),
        files=files_resource,
    )
    return create_app(
        resources,
        middleware=[CORSMiddleware(["http://localhost:5173"])],
        max_upload_size=1024 * 1024,
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)

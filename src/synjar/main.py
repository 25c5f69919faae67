"""Application entry point and composition root."""

import logging

from falcon.asgi import App

from synjar import __version__
from synjar.application.dto.chunking_config import ChunkingConfig
from synjar.application.ports import StorageProvider
from synjar.application.use_cases.document.change_verification import ChangeVerificationUseCase
from synjar.application.use_cases.document.create_document import CreateDocumentUseCase
from synjar.application.use_cases.document.delete_document import DeleteDocumentUseCase
from synjar.application.use_cases.document.get_document import GetDocumentUseCase
from synjar.application.use_cases.document.get_download_url import GetDownloadUrlUseCase
from synjar.application.use_cases.document.list_documents import ListDocumentsUseCase
from synjar.application.use_cases.document.process_document import ProcessDocumentUseCase
from synjar.application.use_cases.document.tag_document import TagDocumentUseCase
from synjar.application.use_cases.document.update_document import UpdateDocumentUseCase
from synjar.config import Settings, get_settings
from synjar.deployment import get_deployment_config
from synjar.infrastructure.chunking.recursive_chunker import RecursiveChunker
from synjar.infrastructure.document_parsers import RegistryFileParser
from synjar.infrastructure.embedding.openai_provider import OpenAIEmbeddingsProvider
from synjar.infrastructure.events.handlers import subscribe_default_handlers
from synjar.infrastructure.events.in_process_publisher import InProcessEventPublisher
from synjar.infrastructure.persistence.postgres.connection import create_pool
from synjar.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from synjar.infrastructure.storage.local_storage import LocalStorageProvider
from synjar.infrastructure.storage.s3_storage import S3StorageProvider
from synjar.interfaces.api.app import Resources, create_app
from synjar.interfaces.api.middleware.cors import CORSMiddleware, parse_origins
from synjar.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from synjar.interfaces.api.resources.deployment import DeploymentResource
from synjar.interfaces.api.resources.documents import (
    DocumentDownloadResource,
    DocumentProcessResource,
    DocumentResource,
    DocumentsResource,
    DocumentTagsResource,
    DocumentVerificationResource,
)
from synjar.interfaces.api.resources.files import FilesResource
from synjar.interfaces.api.resources.health import HealthResource
from synjar.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _create_storage(settings: Settings) -> StorageProvider:
    if settings.storage_backend == "s3":
        return S3StorageProvider(
            bucket_name=settings.s3_bucket_name,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
        )
    return LocalStorageProvider(
        root=settings.local_storage_path,
        base_url=settings.local_storage_base_url,
        signing_secret=settings.storage_signing_secret,
    )


def create_synjar_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level)

    deployment = get_deployment_config()
    logger.info(
        "Starting Synjar v%s (%s, %s deployment, %s storage)",
        __version__,
        settings.environment,
        deployment.get_mode().value,
        settings.storage_backend,
    )

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    storage = _create_storage(settings)
    event_publisher = subscribe_default_handlers(InProcessEventPublisher())
    embeddings_provider = OpenAIEmbeddingsProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
    )
    chunking_config = ChunkingConfig(
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
    )

    create_document = CreateDocumentUseCase(
        unit_of_work_factory=uow_factory,
        storage=storage,
        file_parser=RegistryFileParser(),
        event_publisher=event_publisher,
    )
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    process_document = ProcessDocumentUseCase(
        unit_of_work_factory=uow_factory,
        chunker=RecursiveChunker(),
        embeddings_provider=embeddings_provider,
        event_publisher=event_publisher,
        chunking_config=chunking_config,
    )

    resources = Resources(
        health=HealthResource(pool),
        deployment=DeploymentResource(deployment),
        documents=DocumentsResource(
            create_document,
            ListDocumentsUseCase(unit_of_work_factory=uow_factory),
            process_document,
        ),
        document=DocumentResource(
            get_document,
            UpdateDocumentUseCase(unit_of_work_factory=uow_factory),
            DeleteDocumentUseCase(unit_of_work_factory=uow_factory, storage=storage),
            process_document,
        ),
        verification=DocumentVerificationResource(
            ChangeVerificationUseCase(unit_of_work_factory=uow_factory)
        ),
        tags=DocumentTagsResource(TagDocumentUseCase(unit_of_work_factory=uow_factory)),
        process=DocumentProcessResource(get_document, process_document),
        download=DocumentDownloadResource(
            GetDownloadUrlUseCase(unit_of_work_factory=uow_factory, storage=storage)
        ),
        files=FilesResource(storage) if isinstance(storage, LocalStorageProvider) else None,
    )

    return create_app(
        resources,
        middleware=[
            CORSMiddleware(parse_origins(settings.cors_origins)),
            PoolLifespanMiddleware(pool),
        ],
        max_upload_size=settings.max_upload_size_mb * 1024 * 1024,
    )


def run_server() -> None:
    """Run uvicorn server. Installed as the `synjar` console script."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_synjar_app(), host=settings.host, port=settings.port)

"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon
import falcon.asgi
from falcon import media
from falcon.asgi import App

from synjar.interfaces.api.errors import register_error_handlers
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

_DOCUMENTS = "/v1/workspaces/{workspace_id}/documents"
_DOCUMENT = _DOCUMENTS + "/{document_id}"


@dataclass
class Resources:
    """Everything the router needs."""

    health: HealthResource
    deployment: DeploymentResource
    documents: DocumentsResource
    document: DocumentResource
    verification: DocumentVerificationResource
    tags: DocumentTagsResource
    process: DocumentProcessResource
    download: DocumentDownloadResource
    files: FilesResource | None = None


def create_app(
    resources: Resources,
    middleware: list | None = None,
    max_upload_size: int = 50 * 1024 * 1024,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    multipart = media.MultipartFormHandler()
    multipart.parse_options.max_body_part_buffer_size = max_upload_size
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart
    register_error_handlers(app)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/deployment", resources.deployment)
    app.add_route(_DOCUMENTS, resources.documents)
    app.add_route(_DOCUMENT, resources.document)
    app.add_route(_DOCUMENT + "/verify", resources.verification, suffix="verify")
    app.add_route(_DOCUMENT + "/unverify", resources.verification, suffix="unverify")
    app.add_route(_DOCUMENT + "/tags", resources.tags)
    app.add_route(_DOCUMENT + "/tags/{tag}", resources.tags, suffix="tag")
    app.add_route(_DOCUMENT + "/process", resources.process)
    app.add_route(_DOCUMENT + "/download", resources.download)
    if resources.files is not None:
        app.add_route("/v1/files/{key}", resources.files)
    return app

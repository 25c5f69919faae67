"""Document API resources."""

import functools
import logging
from typing import Any
from uuid import UUID

import falcon
import falcon.asgi

from synjar.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentFilters,
    DocumentOutput,
    DocumentUpdateInput,
    UploadedFile,
)
from synjar.application.use_cases.document.change_verification import ChangeVerificationUseCase
from synjar.application.use_cases.document.create_document import CreateDocumentUseCase
from synjar.application.use_cases.document.delete_document import DeleteDocumentUseCase
from synjar.application.use_cases.document.get_document import GetDocumentUseCase
from synjar.application.use_cases.document.get_download_url import GetDownloadUrlUseCase
from synjar.application.use_cases.document.list_documents import ListDocumentsUseCase
from synjar.application.use_cases.document.process_document import ProcessDocumentUseCase
from synjar.application.use_cases.document.tag_document import TagDocumentUseCase
from synjar.application.use_cases.document.update_document import UpdateDocumentUseCase
from synjar.domain.exceptions import InvalidStateError, ValidationError
from synjar.domain.value_objects import ProcessingStatus, VerificationStatus

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "content", "source_description", "verification_status")


def _parse_uuid(value: str, name: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}") from None


def _parse_enum(enum_cls, value: Any, name: str):
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {name}: expected one of {allowed}") from None


def _decode_filename(raw: str | None) -> str:
    """Undo mojibake when a UTF-8 filename was read as Latin-1."""
    if not raw or not raw.strip():
        return ""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def _split_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [t for t in (part.strip() for part in value.split(",")) if t]
    if isinstance(value, list) and all(isinstance(t, str) for t in value):
        return value
    raise ValidationError("tags must be a list of strings")


def _optional_str(body: dict, name: str) -> str | None:
    value = body.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


async def _json_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media()
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "workspace_id": str(d.workspace_id),
        "title": d.title,
        "content": d.content,
        "content_type": d.content_type.value,
        "verification_status": d.verification_status.value,
        "processing_status": d.processing_status.value,
        "processing_error": d.processing_error,
        "tags": d.tags,
        "original_filename": d.original_filename,
        "file_url": d.file_url,
        "mime_type": d.mime_type,
        "file_size": d.file_size,
        "source_description": d.source_description,
        "created_at": d.created_at.isoformat(),
        "updated_at": d.updated_at.isoformat(),
    }


async def _process_in_background(process_document: ProcessDocumentUseCase, document_id: UUID) -> None:
    try:
        await process_document.execute(document_id)
    except InvalidStateError as e:
        logger.info("Skipped processing of document %s: %s", document_id, e)
    except Exception:
        # The use case has logged the traceback and marked the document FAILED.
        return


class DocumentsResource:
    """POST/GET /v1/workspaces/{workspace_id}/documents."""

    def __init__(
        self,
        create_document: CreateDocumentUseCase,
        list_documents: ListDocumentsUseCase,
        process_document: ProcessDocumentUseCase,
    ) -> None:
        self._create_document = create_document
        self._list_documents = list_documents
        self._process_document = process_document

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, workspace_id: str
    ) -> None:
        """Create a text document (JSON) or a file document (multipart, field ``file``)."""
        ws_id = _parse_uuid(workspace_id, "workspace_id")
        if "multipart/form-data" in (req.content_type or ""):
            input_data = await self._multipart_input(req, ws_id)
        else:
            input_data = self._json_input(await _json_body(req), ws_id)

        result = await self._create_document.execute(input_data)
        resp.schedule(functools.partial(_process_in_background, self._process_document, result.id))
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_201

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, workspace_id: str
    ) -> None:
        """List documents, newest first. Query: tags, verification_status, processing_status, page, limit."""
        ws_id = _parse_uuid(workspace_id, "workspace_id")
        filters = DocumentFilters(
            tags=[t for raw in req.get_param_as_list("tags") or [] for t in _split_tags(raw)],
            page=req.get_param_as_int("page", default=1),
            limit=req.get_param_as_int("limit", default=20),
        )
        verification = req.get_param("verification_status")
        if verification:
            filters.verification_status = _parse_enum(
                VerificationStatus, verification, "verification_status"
            )
        processing = req.get_param("processing_status")
        if processing:
            filters.processing_status = _parse_enum(
                ProcessingStatus, processing, "processing_status"
            )

        page = await self._list_documents.execute(ws_id, filters)
        resp.media = {
            "items": [_document_to_dict(d) for d in page.items],
            "page": page.page,
            "limit": page.limit,
            "total": page.total,
            "total_pages": page.total_pages,
        }
        resp.status = falcon.HTTP_200

    @staticmethod
    def _json_input(body: dict, workspace_id: UUID) -> DocumentCreateInput:
        content = body.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("content is required")
        title = body.get("title")
        if not isinstance(title, str):
            raise ValidationError("title is required")
        return DocumentCreateInput(
            workspace_id=workspace_id,
            title=title,
            content=content,
            source_description=_optional_str(body, "source_description"),
            verification_status=_parse_enum(
                VerificationStatus,
                body.get("verification_status", VerificationStatus.UNVERIFIED),
                "verification_status",
            ),
            tags=_split_tags(body.get("tags")),
        )

    @staticmethod
    async def _multipart_input(req: falcon.asgi.Request, workspace_id: UUID) -> DocumentCreateInput:
        form = await req.get_media()
        fields: dict[str, str] = {}
        tags: list[str] = []
        upload: UploadedFile | None = None
        async for part in form:
            name = (part.name or "").strip()
            if name == "file":
                data = await part.get_data()
                if not data:
                    continue
                upload = UploadedFile(
                    data=bytes(data),
                    filename=_decode_filename(part.filename) or "upload",
                    mime_type=part.content_type or "",
                )
            elif name in ("tags", "tags[]"):
                tags.extend(_split_tags(await part.get_text()))
            elif name in _TEXT_FIELDS:
                fields[name] = (await part.get_text() or "").strip()

        if upload is None:
            raise ValidationError("file is required")
        return DocumentCreateInput(
            workspace_id=workspace_id,
            title=fields.get("title", ""),
            source_description=fields.get("source_description") or None,
            verification_status=_parse_enum(
                VerificationStatus,
                fields.get("verification_status") or VerificationStatus.UNVERIFIED,
                "verification_status",
            ),
            tags=tags,
            file=upload,
        )


class DocumentResource:
    """GET/PATCH/DELETE /v1/workspaces/{workspace_id}/documents/{document_id}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        update_document: UpdateDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
        process_document: ProcessDocumentUseCase,
    ) -> None:
        self._get_document = get_document
        self._update_document = update_document
        self._delete_document = delete_document
        self._process_document = process_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        result = await self._get_document.execute(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
        )
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        """Partial update. Changed content of an unprocessed document is re-ingested."""
        ws_id = _parse_uuid(workspace_id, "workspace_id")
        doc_id = _parse_uuid(document_id, "document_id")
        body = await _json_body(req)
        input_data = DocumentUpdateInput(
            title=_optional_str(body, "title"),
            content=_optional_str(body, "content"),
            source_description=_optional_str(body, "source_description"),
            tags=_split_tags(body["tags"]) if "tags" in body else None,
        )

        result = await self._update_document.execute(ws_id, doc_id, input_data)
        if result.needs_reprocessing:
            resp.schedule(functools.partial(_process_in_background, self._process_document, doc_id))
        resp.media = {
            **_document_to_dict(result.document),
            "needs_reprocessing": result.needs_reprocessing,
        }
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        await self._delete_document.execute(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
        )
        resp.status = falcon.HTTP_204


class DocumentVerificationResource:
    """POST .../documents/{document_id}/verify and .../unverify."""

    def __init__(self, change_verification: ChangeVerificationUseCase) -> None:
        self._change_verification = change_verification

    async def on_post_verify(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        result = await self._change_verification.verify(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
        )
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_post_unverify(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        result = await self._change_verification.unverify(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
        )
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200


class DocumentTagsResource:
    """POST .../documents/{document_id}/tags and DELETE .../tags/{tag}."""

    def __init__(self, tag_document: TagDocumentUseCase) -> None:
        self._tag_document = tag_document

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        body = await _json_body(req)
        tag = body.get("tag")
        if not isinstance(tag, str):
            raise ValidationError("tag is required")
        result = await self._tag_document.add_tag(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
            tag,
        )
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_delete_tag(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
        tag: str,
    ) -> None:
        result = await self._tag_document.remove_tag(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
            tag,
        )
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_200


class DocumentProcessResource:
    """POST .../documents/{document_id}/process - queue (re)ingestion.

    Accepted for PENDING and FAILED documents; the work runs after the
    response is sent and its outcome is visible through processing_status.
    """

    def __init__(
        self, get_document: GetDocumentUseCase, process_document: ProcessDocumentUseCase
    ) -> None:
        self._get_document = get_document
        self._process_document = process_document

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        doc_id = _parse_uuid(document_id, "document_id")
        document = await self._get_document.execute(
            _parse_uuid(workspace_id, "workspace_id"), doc_id
        )
        if document.processing_status not in (ProcessingStatus.PENDING, ProcessingStatus.FAILED):
            raise InvalidStateError(
                f"Document cannot be processed while {document.processing_status.value}"
            )
        resp.schedule(functools.partial(_process_in_background, self._process_document, doc_id))
        resp.media = _document_to_dict(document)
        resp.status = falcon.HTTP_202


class DocumentDownloadResource:
    """GET .../documents/{document_id}/download - signed URL of the original file."""

    def __init__(self, get_download_url: GetDownloadUrlUseCase) -> None:
        self._get_download_url = get_download_url

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        workspace_id: str,
        document_id: str,
    ) -> None:
        expires_in = req.get_param_as_int(
            "expires_in", min_value=60, max_value=7 * 24 * 3600, default=3600
        )
        url = await self._get_download_url.execute(
            _parse_uuid(workspace_id, "workspace_id"),
            _parse_uuid(document_id, "document_id"),
            expires_in,
        )
        resp.media = {"url": url, "expires_in": expires_in}
        resp.status = falcon.HTTP_200

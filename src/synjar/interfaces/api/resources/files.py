"""Serves files kept by the local storage backend through signed URLs."""

import mimetypes

import falcon.asgi

from synjar.infrastructure.storage.local_storage import LocalStorageProvider


class FilesResource:
    """GET /v1/files/{key}?expires=...&signature=..."""

    def __init__(self, storage: LocalStorageProvider) -> None:
        self._storage = storage

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, key: str) -> None:
        expires = req.get_param_as_int("expires", required=True)
        signature = req.get_param("signature", required=True)
        if not self._storage.verify_signature(key, expires, signature):
            raise falcon.HTTPForbidden(description="Invalid or expired signature")
        try:
            data = await self._storage.read(key)
        except (FileNotFoundError, ValueError):
            raise falcon.HTTPNotFound()
        resp.content_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
        resp.data = data
        resp.status = falcon.HTTP_200

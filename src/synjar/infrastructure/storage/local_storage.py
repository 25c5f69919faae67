"""Local-disk storage provider for self-hosted deployments."""

import asyncio
import hashlib
import hmac
import logging
import time
from pathlib import Path
from urllib.parse import urlencode

from synjar.application.ports import UploadResult
from synjar.infrastructure.storage.keys import build_object_key

logger = logging.getLogger(__name__)


class LocalStorageProvider:
    """Keeps uploads under a root directory served at ``base_url``.

    Signed URLs carry an expiry timestamp and an HMAC-SHA256 signature of
    ``key:expires``; the file server verifies them with ``verify_signature``.
    """

    def __init__(self, root: str | Path, base_url: str, signing_secret: str) -> None:
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")
        self._secret = signing_secret.encode("utf-8")

    def _path_for(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root.resolve() not in path.parents:
            raise ValueError(f"Invalid storage key: {key}")
        return path

    async def upload(self, data: bytes, filename: str, mime_type: str) -> UploadResult:
        key = build_object_key(filename)
        destination = self._path_for(key)

        def write() -> None:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(data)

        await asyncio.to_thread(write)
        logger.debug("Stored %d bytes at %s", len(data), destination)
        return UploadResult(url=f"{self._base_url}/{key}", key=key, size=len(data))

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        await asyncio.to_thread(path.unlink, missing_ok=True)

    async def get_signed_url(self, key: str, expires_in_seconds: int = 3600) -> str:
        expires = int(time.time()) + expires_in_seconds
        query = urlencode({"expires": expires, "signature": self._sign(key, expires)})
        return f"{self._base_url}/{key}?{query}"

    async def read(self, key: str) -> bytes:
        """Raise FileNotFoundError if the object does not exist."""
        return await asyncio.to_thread(self._path_for(key).read_bytes)

    def verify_signature(self, key: str, expires: int, signature: str) -> bool:
        """True if the signature matches and has not expired."""
        if expires < time.time():
            return False
        return hmac.compare_digest(self._sign(key, expires), signature)

    def _sign(self, key: str, expires: int) -> str:
        return hmac.new(self._secret, f"{key}:{expires}".encode(), hashlib.sha256).hexdigest()

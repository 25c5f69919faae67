"""Storage provider port - binary object storage for uploaded files."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class UploadResult:
    """Where an uploaded object ended up."""

    url: str
    key: str
    size: int


class StorageProvider(Protocol):
    """Port for storing uploaded files."""

    async def upload(self, data: bytes, filename: str, mime_type: str) -> UploadResult: ...

    async def delete(self, key: str) -> None: ...

    async def get_signed_url(self, key: str, expires_in_seconds: int = 3600) -> str: ...

"""Chunker port."""

from typing import Protocol

from synjar.application.dto.chunking_config import ChunkingConfig


class Chunker(Protocol):
    """Splits document content into pieces small enough to embed.

    Returns an empty list for blank text; raises ValueError for a strategy it
    does not implement.
    """

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]: ...

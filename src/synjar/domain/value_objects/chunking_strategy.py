"""Chunking strategy."""

from enum import StrEnum


class ChunkingStrategy(StrEnum):
    """How document content is split before embedding. Only recursive windows for now."""

    RECURSIVE = "recursive"

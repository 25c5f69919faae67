"""Recursive text chunker implementation."""

from synjar.application.dto.chunking_config import ChunkingConfig
from synjar.domain.value_objects import ChunkingStrategy


class RecursiveChunker:
    """Chunker using character windows that prefer to end on whitespace."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Split text into chunks with overlap."""
        if config.strategy != ChunkingStrategy.RECURSIVE:
            raise ValueError(f"Unsupported strategy: {config.strategy}")

        text = text.strip()
        if not text:
            return []

        chunks: list[str] = []
        start = 0
        while start < len(text):
            end = min(start + config.chunk_size, len(text))
            if end < len(text):
                end = self._break_at_whitespace(text, start, end)
            chunk = text[start:end].strip()
            if chunk:
                chunks.append(chunk)
            if end >= len(text):
                break
            start = max(start + 1, end - config.chunk_overlap)
        return chunks

    @staticmethod
    def _break_at_whitespace(text: str, start: int, end: int) -> int:
        """Move end back to the last whitespace in the second half of the window."""
        window_start = start + (end - start) // 2
        cut = max(text.rfind(" ", window_start, end), text.rfind("\n", window_start, end))
        return cut if cut > start else end

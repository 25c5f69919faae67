"""Embeddings provider port - OpenAI compatible API."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class EmbeddingResult:
    """Vector for one text and the tokens it consumed."""

    embedding: list[float]
    token_count: int


class EmbeddingsProvider(Protocol):
    """Port for generating text embeddings. Retries belong to the adapter."""

    async def generate_embedding(self, text: str) -> EmbeddingResult: ...

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingResult]: ...

"""OpenAI-compatible embeddings provider."""

import math

from openai import AsyncOpenAI

from synjar.application.ports import EmbeddingResult


class OpenAIEmbeddingsProvider:
    """Embeddings provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        """Generate embedding for one text."""
        response = await self._client.embeddings.create(
            model=self._model,
            input=text,
        )
        return EmbeddingResult(
            embedding=response.data[0].embedding,
            token_count=response.usage.total_tokens,
        )

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for texts in one request.

        The API only reports total usage, so tokens are split evenly.
        """
        if not texts:
            return []
        response = await self._client.embeddings.create(
            model=self._model,
            input=texts,
        )
        tokens_per_text = math.ceil(response.usage.total_tokens / len(texts))
        data = sorted(response.data, key=lambda d: d.index)
        return [EmbeddingResult(embedding=d.embedding, token_count=tokens_per_text) for d in data]

"""
Test suite for the embedding client wrapper.

System role: Verification of embedding capability boundary
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.core.exceptions import EmbeddingError


def _client(dimension: int = 3, query=None, documents=None, error: Exception | None = None):
    embeddings = MagicMock()
    embeddings.aembed_query = AsyncMock(return_value=query, side_effect=error)
    embeddings.aembed_documents = AsyncMock(return_value=documents, side_effect=error)
    return EmbeddingClient(dimension=dimension, embeddings=embeddings), embeddings


class TestEmbed:
    @pytest.mark.asyncio
    async def test_returns_vector(self) -> None:
        client, _ = _client(query=[0.1, 0.2, 0.3])

        assert await client.embed("hello") == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_dimension_mismatch(self) -> None:
        client, _ = _client(query=[0.1, 0.2])

        with pytest.raises(EmbeddingError, match="dimension"):
            await client.embed("hello")

    @pytest.mark.asyncio
    async def test_provider_failure(self) -> None:
        client, _ = _client(error=RuntimeError("quota"))

        with pytest.raises(EmbeddingError, match="quota"):
            await client.embed("hello")


class TestEmbedMany:
    @pytest.mark.asyncio
    async def test_returns_vectors_in_order(self) -> None:
        client, embeddings = _client(documents=[[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])

        vectors = await client.embed_many(["a", "b"])

        assert vectors == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
        embeddings.aembed_documents.assert_awaited_once_with(["a", "b"])

    @pytest.mark.asyncio
    async def test_empty_input_skips_provider(self) -> None:
        client, embeddings = _client()

        assert await client.embed_many([]) == []
        embeddings.aembed_documents.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_count_mismatch(self) -> None:
        client, _ = _client(documents=[[1.0, 0.0, 0.0]])

        with pytest.raises(EmbeddingError, match="count"):
            await client.embed_many(["a", "b"])

"""
Google Generative AI embeddings wrapper with dimension checking.

Wraps GoogleGenerativeAIEmbeddings behind the two calls the application
needs (single query, bulk documents) and verifies every vector has the
dimension the index was created with.

Dependencies: langchain_google_genai
System role: Embedding capability for retrieval and ingestion
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ragchat.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Embedding capability backed by Gemini embeddings.

    text-embedding-004 produces 768-dimensional vectors, which is what the
    Pinecone index expects.
    """

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        dimension: int = 768,
        api_key: str | None = None,
        embeddings: GoogleGenerativeAIEmbeddings | None = None,
    ) -> None:
        """
        Initialize embeddings client.

        Args:
            model: Google embedding model ID
            dimension: Expected vector dimension
            api_key: Google API key (falls back to GOOGLE_API_KEY env)
            embeddings: Pre-built LangChain embeddings (tests)
        """
        self._dimension = dimension
        if embeddings is None:
            kwargs = {"model": model}
            if api_key:
                kwargs["google_api_key"] = api_key
            embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        self._embeddings = embeddings
        logger.info(f"{__name__}:__init__ - model={model}, dimension={dimension}")

    @property
    def dimension(self) -> int:
        return self._dimension

    def _check(self, vector: list[float]) -> list[float]:
        if len(vector) != self._dimension:
            raise EmbeddingError(
                f"Embedding dimension mismatch: expected {self._dimension}, got {len(vector)}"
            )
        return vector

    async def embed(self, text: str) -> list[float]:
        """
        Embed one query string.

        Raises:
            EmbeddingError: On provider failure or dimension mismatch
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise EmbeddingError(f"Embedding request failed: {e}") from e
        return self._check(list(vector))

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a batch of document chunks (ingestion only).

        Raises:
            EmbeddingError: On provider failure or dimension mismatch
        """
        if not texts:
            return []
        try:
            vectors = await self._embeddings.aembed_documents(texts)
        except Exception as e:
            raise EmbeddingError(f"Batch embedding request failed: {e}") from e
        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"Embedding count mismatch: expected {len(texts)}, got {len(vectors)}"
            )
        return [self._check(list(vector)) for vector in vectors]

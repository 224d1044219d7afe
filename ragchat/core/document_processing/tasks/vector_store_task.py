"""
Vector upload task.

Embeds chunk texts and upserts them into the vector index in fixed-size
batches, tagged with the owner and the stable document id.

Dependencies: ragchat.boundary.vdb
System role: Final stage of document ingestion
"""

import logging

from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.boundary.vdb.vector_schemas import VectorIndex, VectorMetadata, VectorRecord

logger = logging.getLogger(__name__)


def vector_id(document_id: str, index: int) -> str:
    """Deterministic vector id for chunk `index` of a document."""
    return f"{document_id}-{index}"


class VectorStoreTask:
    """Embed and upsert document chunks."""

    def __init__(
        self,
        embeddings: EmbeddingClient,
        index: VectorIndex,
        batch_size: int = 100,
    ) -> None:
        """
        Initialize vector store task.

        Args:
            embeddings: Embedding capability (bulk mode)
            index: Vector index to upsert into
            batch_size: Vectors per upsert call

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._embeddings = embeddings
        self._index = index
        self._batch_size = batch_size

    async def upload(
        self,
        chunks: list[str],
        document_id: str,
        file_name: str,
        owner_id: str,
    ) -> int:
        """
        Embed chunks and upsert them in batches.

        Args:
            chunks: Chunk texts in document order
            document_id: Stable document id (document row id)
            file_name: Original upload name, used as the passage label
            owner_id: Caller identity stored as the tenant tag

        Returns:
            int: Number of vectors upserted

        Raises:
            EmbeddingError: If embedding fails
            VectorStoreError: If an upsert batch fails
        """
        vectors = await self._embeddings.embed_many(chunks)

        records = [
            VectorRecord(
                id=vector_id(document_id, i),
                values=values,
                metadata=VectorMetadata(
                    text=text,
                    filename=file_name,
                    document_id=document_id,
                    user_id=owner_id,
                ).model_dump(),
            )
            for i, (text, values) in enumerate(zip(chunks, vectors))
        ]

        for start in range(0, len(records), self._batch_size):
            batch = records[start:start + self._batch_size]
            await self._index.upsert(batch)
            logger.info(
                f"{__name__}:upload - Upserted batch {start // self._batch_size + 1}",
                extra={"document_id": document_id, "batch_len": len(batch)},
            )

        return len(records)

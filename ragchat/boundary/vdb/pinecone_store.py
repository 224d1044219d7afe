"""
Pinecone vector index for production retrieval.

Filtered nearest-neighbour search, batched upsert and metadata-filtered
delete against a Pinecone serverless index. The Pinecone client is
synchronous, so calls run in the threadpool.

Dependencies: pinecone, tenacity, fastapi.concurrency
System role: Production vector store (Pinecone)
"""

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pinecone import Pinecone
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragchat.boundary.vdb.vector_schemas import VectorHit, VectorRecord
from ragchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


def _log_retry(retry_state) -> None:
    logger.warning(
        f"{__name__}:retry - Attempt {retry_state.attempt_number}/{MAX_ATTEMPTS} failed, retrying"
    )


_transient_retry = retry(
    retry=retry_if_exception_type(Exception),
    stop=stop_after_attempt(MAX_ATTEMPTS),
    wait=wait_exponential_jitter(initial=0.5, max=5, jitter=1),
    before_sleep=_log_retry,
    reraise=True,
)


class PineconeVectorIndex:
    """
    Pinecone-backed implementation of VectorIndex.

    Every query must carry a filter; callers build it with owner_filter().
    """

    def __init__(
        self,
        index_name: str = "chatbot-app",
        api_key: str | None = None,
        index: Any | None = None,
    ) -> None:
        """
        Initialize the Pinecone index handle.

        Args:
            index_name: Pinecone index name
            api_key: Pinecone API key (falls back to PINECONE_API_KEY env)
            index: Pre-built index handle (tests)
        """
        self._index_name = index_name
        if index is None:
            client = Pinecone(api_key=api_key) if api_key else Pinecone()
            index = client.Index(index_name)
        self._index = index
        logger.info(f"{__name__}:__init__ - Connected to index '{index_name}'")

    @_transient_retry
    def _query_sync(self, vector: list[float], top_k: int, filter: dict[str, Any]):
        return self._index.query(
            vector=vector,
            top_k=top_k,
            include_metadata=True,
            filter=filter,
        )

    @_transient_retry
    def _upsert_sync(self, vectors: list[dict[str, Any]]) -> None:
        self._index.upsert(vectors=vectors)

    @_transient_retry
    def _delete_sync(self, filter: dict[str, Any]) -> None:
        self._index.delete(filter=filter)

    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any],
    ) -> list[VectorHit]:
        """
        Nearest-neighbour search restricted by metadata filter.

        Args:
            vector: Query embedding
            top_k: Maximum number of hits
            filter: Pinecone metadata filter (required)

        Returns:
            list[VectorHit]: Hits in similarity-descending order

        Raises:
            VectorStoreError: After retries are exhausted, or if filter is empty
        """
        if not filter:
            raise VectorStoreError("Refusing unfiltered query", operation="query")

        try:
            response = await run_in_threadpool(self._query_sync, vector, top_k, filter)
        except Exception as e:
            logger.error(f"{__name__}:query - {type(e).__name__}: {e}")
            raise VectorStoreError(f"Vector query failed: {e}", operation="query") from e

        matches = getattr(response, "matches", None)
        if matches is None and isinstance(response, dict):
            matches = response.get("matches")

        hits = []
        for match in matches or []:
            if isinstance(match, dict):
                hit_id, score, metadata = match.get("id"), match.get("score"), match.get("metadata")
            else:
                hit_id, score, metadata = match.id, match.score, match.metadata
            hits.append(
                VectorHit(id=str(hit_id), score=float(score or 0.0), metadata=dict(metadata or {}))
            )

        logger.info(
            f"{__name__}:query - Found {len(hits)} hits",
            extra={"top_k": top_k},
        )
        return hits

    async def upsert(self, records: list[VectorRecord]) -> None:
        """
        Upsert one batch of vectors.

        Raises:
            VectorStoreError: After retries are exhausted
        """
        if not records:
            return
        payload = [record.model_dump() for record in records]
        try:
            await run_in_threadpool(self._upsert_sync, payload)
        except Exception as e:
            logger.error(f"{__name__}:upsert - {type(e).__name__}: {e}")
            raise VectorStoreError(f"Vector upsert failed: {e}", operation="upsert") from e

    async def delete_many(self, filter: dict[str, Any]) -> None:
        """
        Delete every vector matching the metadata filter.

        Raises:
            VectorStoreError: After retries are exhausted, or if filter is empty
        """
        if not filter:
            raise VectorStoreError("Refusing unfiltered delete", operation="delete")
        try:
            await run_in_threadpool(self._delete_sync, filter)
        except Exception as e:
            logger.error(f"{__name__}:delete_many - {type(e).__name__}: {e}")
            raise VectorStoreError(f"Vector delete failed: {e}", operation="delete") from e

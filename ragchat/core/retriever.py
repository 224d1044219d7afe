"""
Retrieval client with owner-scoped filtering.

Embeds a query, searches the vector index restricted to the caller's
vectors, and maps hits to ranked passages. Also builds the ambient
system context injected before generation.

Dependencies: ragchat.boundary.vdb, ragchat.core.exceptions
System role: RAG retrieval business logic
"""

import logging

from pydantic import BaseModel, Field

from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.boundary.vdb.vector_schemas import (
    FILENAME_KEY,
    TEXT_KEY,
    VectorHit,
    VectorIndex,
    owner_filter,
)
from ragchat.core.exceptions import RagChatError, RetrievalError

logger = logging.getLogger(__name__)

AMBIENT_TOP_K = 5
TOOL_TOP_K = 7

MISSING_TEXT = "[No text available]"
MISSING_SOURCE = "Unknown document"
CONTEXT_PREFIX = "Use this context to answer: "
PASSAGE_SEPARATOR = "\n\n"


class RetrievedPassage(BaseModel):
    """One ranked snippet of ingested document text."""

    text: str
    source_label: str
    score: float = Field(description="Similarity score, higher ranks first")


def format_passages(passages: list[RetrievedPassage]) -> str:
    """Render passages as `[Source: <label>] <text>` blocks separated by blank lines."""
    return PASSAGE_SEPARATOR.join(
        f"[Source: {passage.source_label}] {passage.text}" for passage in passages
    )


def _to_passage(hit: VectorHit) -> RetrievedPassage:
    text = hit.metadata.get(TEXT_KEY)
    label = hit.metadata.get(FILENAME_KEY)
    return RetrievedPassage(
        text=text if isinstance(text, str) and text.strip() else MISSING_TEXT,
        source_label=label if isinstance(label, str) and label.strip() else MISSING_SOURCE,
        score=hit.score,
    )


class RetrievalClient:
    """
    Query-to-passages retrieval scoped to one owner.

    Every index query carries the owner filter; there is no code path that
    searches without it.
    """

    def __init__(
        self,
        embeddings: EmbeddingClient,
        index: VectorIndex,
        context_top_k: int = AMBIENT_TOP_K,
        tool_top_k: int = TOOL_TOP_K,
        score_threshold: float | None = None,
    ) -> None:
        """
        Initialize retrieval client.

        Args:
            embeddings: Embedding capability
            index: Filtered nearest-neighbour search service
            context_top_k: Passages used for ambient context
            tool_top_k: Passages returned to the query_knowledge tool
            score_threshold: Minimum score applied in ambient mode
        """
        self._embeddings = embeddings
        self._index = index
        self.context_top_k = context_top_k
        self.tool_top_k = tool_top_k
        self._score_threshold = score_threshold

    async def retrieve(
        self,
        query: str,
        owner_id: str,
        top_k: int,
        score_filter: float | None = None,
    ) -> list[RetrievedPassage]:
        """
        Retrieve up to top_k passages owned by owner_id.

        Args:
            query: Natural-language query
            owner_id: Caller identity; only this owner's vectors are searched
            top_k: Maximum number of passages
            score_filter: Optional minimum similarity score

        Returns:
            list[RetrievedPassage]: Passages in descending score order

        Raises:
            RetrievalError: If embedding or search fails, or owner_id is empty
        """
        if not owner_id:
            raise RetrievalError("Retrieval requires an owner scope")
        if top_k <= 0:
            return []

        try:
            vector = await self._embeddings.embed(query)
            hits = await self._index.query(vector, top_k, owner_filter(owner_id))
        except RagChatError as e:
            raise RetrievalError(f"Retrieval failed: {e.message}", owner_id=owner_id) from e
        except Exception as e:
            raise RetrievalError(f"Retrieval failed: {e}", owner_id=owner_id) from e

        passages = [_to_passage(hit) for hit in hits]
        if score_filter is not None:
            passages = [p for p in passages if p.score >= score_filter]

        # sorted() is stable, so ties keep the index's order
        passages = sorted(passages, key=lambda p: p.score, reverse=True)[:top_k]

        logger.info(
            f"{__name__}:retrieve - {len(passages)} passages",
            extra={"owner_id": owner_id, "top_k": top_k},
        )
        return passages

    async def build_context(self, query: str, owner_id: str, default_context: str) -> str:
        """
        Build the ambient system context for a request.

        Never raises: a retrieval failure is logged and the default context
        is returned, as is the default when nothing matches.

        Args:
            query: Latest user query
            owner_id: Caller identity
            default_context: System text used when no passages are available

        Returns:
            str: System context for the generation engine
        """
        try:
            passages = await self.retrieve(
                query,
                owner_id,
                self.context_top_k,
                score_filter=self._score_threshold,
            )
        except RetrievalError as e:
            logger.warning(f"{__name__}:build_context - Retrieval degraded: {e}")
            return default_context

        if not passages:
            return default_context
        return CONTEXT_PREFIX + format_passages(passages)

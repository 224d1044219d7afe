"""
Vector database schemas.

Pydantic models for vector operations (records, metadata, hits) and the
interface every vector index adapter implements.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any, Protocol

from pydantic import BaseModel, Field

# Metadata keys stored on every vector
TEXT_KEY = "text"
FILENAME_KEY = "filename"
DOCUMENT_ID_KEY = "document_id"
OWNER_KEY = "user_id"


def owner_filter(owner_id: str) -> dict[str, Any]:
    """Metadata filter restricting a query to one owner's vectors."""
    return {OWNER_KEY: {"$eq": owner_id}}


def document_filter(document_id: str, owner_id: str) -> dict[str, Any]:
    """Metadata filter selecting one owned document's vectors."""
    return {
        DOCUMENT_ID_KEY: {"$eq": document_id},
        OWNER_KEY: {"$eq": owner_id},
    }


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    user_id is the tenant tag every query filters on; document_id is the
    stable key used for cleanup when a document is deleted.
    """

    text: str = Field(description="Chunk text")
    filename: str = Field(description="Originating document name")
    document_id: str = Field(description="Document row ID")
    user_id: str = Field(description="Owner identity")


class VectorRecord(BaseModel):
    """Vector to upsert."""

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorHit(BaseModel):
    """Single result from a nearest-neighbour query."""

    id: str
    score: float = Field(description="Similarity score, higher is closer")
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorIndex(Protocol):
    """Filtered nearest-neighbour search service."""

    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any],
    ) -> list[VectorHit]: ...

    async def upsert(self, records: list[VectorRecord]) -> None: ...

    async def delete_many(self, filter: dict[str, Any]) -> None: ...

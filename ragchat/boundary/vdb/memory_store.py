"""
In-process vector index for local development.

Brute-force cosine search over a dict, honouring the same `$eq` metadata
filters as Pinecone. Nothing is persisted across restarts.

Dependencies: None
System role: Development vector store (local testing only)
"""

import math
from typing import Any

from ragchat.boundary.vdb.vector_schemas import VectorHit, VectorRecord
from ragchat.core.exceptions import VectorStoreError


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


def _matches(metadata: dict[str, Any], filter: dict[str, Any]) -> bool:
    for key, condition in filter.items():
        expected = condition.get("$eq") if isinstance(condition, dict) else condition
        if metadata.get(key) != expected:
            return False
    return True


class InMemoryVectorIndex:
    """Dict-backed implementation of VectorIndex."""

    def __init__(self) -> None:
        self._records: dict[str, VectorRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any],
    ) -> list[VectorHit]:
        if not filter:
            raise VectorStoreError("Refusing unfiltered query", operation="query")
        scored = [
            VectorHit(id=record.id, score=_cosine(vector, record.values), metadata=record.metadata)
            for record in self._records.values()
            if _matches(record.metadata, filter)
        ]
        scored.sort(key=lambda hit: hit.score, reverse=True)
        return scored[:top_k]

    async def upsert(self, records: list[VectorRecord]) -> None:
        for record in records:
            self._records[record.id] = record

    async def delete_many(self, filter: dict[str, Any]) -> None:
        if not filter:
            raise VectorStoreError("Refusing unfiltered delete", operation="delete")
        doomed = [rid for rid, record in self._records.items() if _matches(record.metadata, filter)]
        for rid in doomed:
            del self._records[rid]

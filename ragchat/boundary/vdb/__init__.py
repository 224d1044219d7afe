"""
Vector database boundary layer.

Exports:
  - VectorIndex protocol and record/hit schemas
  - PineconeVectorIndex (production) and InMemoryVectorIndex (local dev)
  - EmbeddingClient (Gemini embeddings)
  - Factory functions selecting implementations from settings

Dependencies: pinecone, langchain_google_genai, tenacity
System role: Vector storage and embedding adapters
"""

from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.boundary.vdb.memory_store import InMemoryVectorIndex
from ragchat.boundary.vdb.pinecone_store import PineconeVectorIndex
from ragchat.boundary.vdb.vector_schemas import (
    VectorHit,
    VectorIndex,
    VectorMetadata,
    VectorRecord,
    document_filter,
    owner_filter,
)
from ragchat.boundary.vdb.vector_store_factory import get_embedding_client, get_vector_index

__all__ = [
    "EmbeddingClient",
    "InMemoryVectorIndex",
    "PineconeVectorIndex",
    "VectorHit",
    "VectorIndex",
    "VectorMetadata",
    "VectorRecord",
    "document_filter",
    "get_embedding_client",
    "get_vector_index",
    "owner_filter",
]

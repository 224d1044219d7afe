"""
Vector store factory for selecting between the in-process index (dev) and Pinecone (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: ragchat.boundary.vdb, ragchat.configs
System role: Vector store and embedding instantiation and selection
"""

import logging

from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.boundary.vdb.memory_store import InMemoryVectorIndex
from ragchat.boundary.vdb.pinecone_store import PineconeVectorIndex
from ragchat.boundary.vdb.vector_schemas import VectorIndex
from ragchat.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_index() -> VectorIndex:
    """
    Factory function to get vector index based on environment configuration.

    Returns:
        InMemoryVectorIndex or PineconeVectorIndex: Configured vector index

    Raises:
        ValueError: If store_type is invalid
    """
    settings = get_settings().vector_store
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory index (local dev mode)")
        return InMemoryVectorIndex()

    if store_type == "pinecone":
        logger.info(f"{__name__}:get_vector_index - Creating Pinecone index (production mode)")
        return PineconeVectorIndex(
            index_name=settings.index_name,
            api_key=settings.pinecone_api_key,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 'pinecone' (production)."
    )


def get_embedding_client() -> EmbeddingClient:
    """Build the embedding client from settings."""
    settings = get_settings()
    return EmbeddingClient(
        model=settings.vector_store.embedding_model,
        dimension=settings.vector_store.embedding_dimension,
        api_key=settings.llm.api_key,
    )

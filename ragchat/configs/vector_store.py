"""
Vector store configuration settings.

Manages Pinecone configuration for vector storage and retrieval.
Includes embedding model settings, retrieval depths and ingestion chunking.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-process index for dev, Pinecone for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pinecone",
        description="Vector store type: 'memory' for local dev, 'pinecone' for production",
    )
    pinecone_api_key: str | None = Field(default=None, description="Pinecone API key")
    index_name: str = Field(default="chatbot-app", description="Pinecone index name")

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Embedding vector dimension (must match the index)",
    )

    context_top_k: int = Field(
        default=5,
        description="Passages injected as ambient context before generation",
    )
    tool_top_k: int = Field(
        default=7,
        description="Passages returned by the query_knowledge tool",
    )
    score_threshold: float | None = Field(
        default=None,
        description="Optional minimum similarity score for ambient context",
    )

    upsert_batch_size: int = Field(default=100, description="Vectors per upsert call")
    chunk_size: int = Field(default=1000, description="Ingestion chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between ingestion chunks")

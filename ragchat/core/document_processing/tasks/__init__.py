"""Document ingestion tasks: parse, chunk, embed and upsert."""

from ragchat.core.document_processing.tasks.chunking_task import ChunkingTask
from ragchat.core.document_processing.tasks.parsing_task import ParsingTask
from ragchat.core.document_processing.tasks.vector_store_task import VectorStoreTask, vector_id

__all__ = ["ChunkingTask", "ParsingTask", "VectorStoreTask", "vector_id"]

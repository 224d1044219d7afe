"""
Document service orchestrator.

Coordinates document listing, ingestion and deletion. The document row is
the source of the stable id written to every vector, so deletion cleans up
by id rather than by filename.

Dependencies: ragchat.boundary.db, ragchat.boundary.vdb, ragchat.core.document_processing
System role: Document management orchestration
"""

import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.document_crud import document_crud
from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient
from ragchat.boundary.vdb.vector_schemas import VectorIndex, document_filter
from ragchat.core.document_processing.tasks import ChunkingTask, ParsingTask, VectorStoreTask
from ragchat.core.exceptions import (
    DocumentNotFoundError,
    DocumentProcessingError,
    ParsingError,
    PersistenceError,
    RagChatError,
    VectorStoreError,
)
from ragchat.models.document import (
    DocumentDeleteResponse,
    DocumentListResponse,
    DocumentSummary,
    DocumentUploadResponse,
)

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle for one caller: list, upload, delete.
    """

    def __init__(
        self,
        db: AsyncSession,
        index: VectorIndex,
        embeddings: EmbeddingClient | None = None,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        batch_size: int = 100,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata
            index: Vector index holding document chunks
            embeddings: Embedding capability (required for ingestion only)
            chunk_size: Ingestion chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            batch_size: Vectors per upsert call
        """
        self.db = db
        self._index = index
        self._embeddings = embeddings
        self._parser = ParsingTask()
        self._chunker = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self._batch_size = batch_size

    async def list_documents(self, owner_id: str, limit: int | None = None) -> DocumentListResponse:
        """List the caller's documents, newest first."""
        documents = await document_crud.list_for_owner(self.db, owner_id, limit=limit)
        items = [DocumentSummary.model_validate(d) for d in documents]
        return DocumentListResponse(documents=items, total=len(items))

    async def ingest(self, owner_id: str, file_name: str, content: bytes) -> DocumentUploadResponse:
        """
        Parse, chunk, embed and index an uploaded PDF.

        The document row is flushed first so its id can tag every vector; it
        is only committed once all batches are upserted.

        Args:
            owner_id: Caller identity
            file_name: Original upload name
            content: Raw PDF bytes

        Returns:
            DocumentUploadResponse: New document id and chunk count

        Raises:
            ParsingError: If the PDF is unreadable or has no text
            DocumentProcessingError: If embedding or indexing fails
            PersistenceError: If the document row cannot be saved
        """
        logger.info(f"{__name__}:ingest - START file={file_name}, bytes={len(content)}")

        pages = await run_in_threadpool(self._parser.parse, content, file_name)
        chunks = self._chunker.chunk(pages)
        if not chunks:
            raise ParsingError("PDF document contains no extractable text", file_name=file_name)

        if self._embeddings is None:
            raise DocumentProcessingError("Embedding capability is not configured")

        try:
            document = await document_crud.create(
                self.db,
                owner_id=owner_id,
                name=file_name,
                chunk_count=len(chunks),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to save document: {e}", operation="create_document") from e

        document_id = str(document.id)
        uploader = VectorStoreTask(self._embeddings, self._index, batch_size=self._batch_size)

        try:
            count = await uploader.upload(chunks, document_id, file_name, owner_id)
        except RagChatError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:ingest - Indexing FAILED, document rolled back: {e}")
            await self._cleanup_vectors(document_id, owner_id)
            raise DocumentProcessingError(
                f"Failed to index document: {e.message}",
                document_id=document_id,
            ) from e

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            await self._cleanup_vectors(document_id, owner_id)
            raise PersistenceError(f"Failed to save document: {e}", operation="create_document") from e

        logger.info(
            f"{__name__}:ingest - END",
            extra={"document_id": document_id, "chunks": count},
        )
        return DocumentUploadResponse(document_id=document.id, chunks=count)

    async def delete(self, owner_id: str, document_id: UUID) -> DocumentDeleteResponse:
        """
        Delete an owned document and its vectors.

        The row is deleted and committed first. Vector cleanup failure is
        logged and reported via vectors_deleted=False.

        Raises:
            DocumentNotFoundError: If the document does not exist or is not owned by the caller
        """
        deleted = await document_crud.delete_for_owner(self.db, document_id, owner_id)
        if not deleted:
            raise DocumentNotFoundError(str(document_id))
        await self.db.commit()

        vectors_deleted = await self._cleanup_vectors(str(document_id), owner_id)
        return DocumentDeleteResponse(vectors_deleted=vectors_deleted)

    async def _cleanup_vectors(self, document_id: str, owner_id: str) -> bool:
        try:
            await self._index.delete_many(document_filter(document_id, owner_id))
        except VectorStoreError as e:
            logger.error(f"{__name__}:_cleanup_vectors - FAILED document_id={document_id}: {e}")
            return False
        return True

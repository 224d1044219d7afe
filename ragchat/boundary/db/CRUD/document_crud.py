"""
Document CRUD operations.

Owner-scoped listing and deletion of DocumentModel rows.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel, scoped by owner."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        List the owner's documents, newest first.

        Args:
            session: Async database session
            owner_id: Caller identity
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> bool:
        """
        Delete a document row only if it belongs to the owner.

        Args:
            session: Async database session
            id: Document UUID
            owner_id: Caller identity

        Returns:
            True if a row was deleted, False if not found or not owned
        """
        stmt = delete(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


document_crud = DocumentCRUD()

"""
Session CRUD operations.

Owner-scoped reads and creation for SessionModel.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.session_model import SessionModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """CRUD operations for SessionModel, scoped by owner."""

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> SessionModel | None:
        """
        Retrieve a session only if it belongs to the owner.

        Args:
            session: Async database session
            id: Session UUID
            owner_id: Caller identity

        Returns:
            SessionModel if found and owned, None otherwise
        """
        stmt = select(SessionModel).where(
            SessionModel.id == id,
            SessionModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[SessionModel]:
        """
        List the owner's sessions, newest first.

        Args:
            session: Async database session
            owner_id: Caller identity
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Sequence of SessionModels
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.owner_id == owner_id)
            .order_by(SessionModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


session_crud = SessionCRUD()

"""
Turn CRUD operations.

Append-only inserts and owner-scoped reads of a session's turns.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Chat message persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.session_model import SessionModel
from ragchat.boundary.db.models.turn_model import TurnModel


class TurnCRUD(BaseCRUD[TurnModel]):
    """CRUD operations for TurnModel."""

    def __init__(self) -> None:
        super().__init__(TurnModel)

    async def append(
        self,
        session: AsyncSession,
        session_id: UUID,
        role: str,
        content: str,
    ) -> TurnModel:
        """
        Insert one turn at the end of a session.

        Args:
            session: Async database session
            session_id: Owning session UUID
            role: 'user' or 'assistant'
            content: Message text

        Returns:
            TurnModel: Created turn
        """
        return await self.create(session, session_id=session_id, role=role, content=content)

    async def list_for_session(
        self,
        session: AsyncSession,
        session_id: UUID,
        owner_id: str,
    ) -> Sequence[TurnModel]:
        """
        Read a session's turns in creation order, scoped by owner.

        Turns of a session that belongs to someone else read as empty.

        Args:
            session: Async database session
            session_id: Session UUID
            owner_id: Caller identity

        Returns:
            Sequence of TurnModels ordered by (created_at, id)
        """
        stmt = (
            select(TurnModel)
            .join(SessionModel, SessionModel.id == TurnModel.session_id)
            .where(
                TurnModel.session_id == session_id,
                SessionModel.owner_id == owner_id,
            )
            .order_by(TurnModel.created_at, TurnModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


turn_crud = TurnCRUD()

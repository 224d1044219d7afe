"""
Session manager.

Resolves or creates the conversation for a request, appends turns, and
serves owner-scoped session and history reads.

Dependencies: ragchat.boundary.db.CRUD, ragchat.models.session
System role: Session use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.session_crud import session_crud
from ragchat.boundary.db.CRUD.turn_crud import turn_crud
from ragchat.boundary.db.models.session_model import TITLE_MAX_LENGTH
from ragchat.core.exceptions import PersistenceError, SessionNotFoundError
from ragchat.models.chat import TurnRole
from ragchat.models.session import (
    ChatHistoryResponse,
    SessionListResponse,
    SessionResponse,
    TurnResponse,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """Session lifecycle and turn persistence for one database session."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session manager with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def resolve_or_create(
        self,
        owner_id: str,
        supplied_session_id: UUID | None,
        seed_title: str,
    ) -> UUID:
        """
        Return the session id to use for this request.

        A supplied id must name a session owned by the caller, so turns are
        never written into someone else's conversation. Otherwise a new
        session titled with the first 50 characters of seed_title is
        created and committed.

        Args:
            owner_id: Caller identity
            supplied_session_id: Session id sent by the client, if any
            seed_title: Text the title is derived from (the first query)

        Returns:
            UUID: Resolved session id

        Raises:
            SessionNotFoundError: If the supplied id is unknown or owned by someone else
            PersistenceError: If the session row cannot be created
        """
        if supplied_session_id is not None:
            session = await session_crud.get_for_owner(self.db, supplied_session_id, owner_id)
            if session is None:
                logger.warning(
                    f"{__name__}:resolve_or_create - Rejected session id not owned by caller",
                    extra={"session_id": str(supplied_session_id), "owner_id": owner_id},
                )
                raise SessionNotFoundError(str(supplied_session_id))
            return session.id

        try:
            session = await session_crud.create(
                self.db,
                owner_id=owner_id,
                title=seed_title[:TITLE_MAX_LENGTH],
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:resolve_or_create - FAILED: {type(e).__name__}: {e}")
            raise PersistenceError(f"Failed to create session: {e}", operation="create_session") from e

        logger.info(
            f"{__name__}:resolve_or_create - Created session",
            extra={"session_id": str(session.id), "owner_id": owner_id},
        )
        return session.id

    async def persist_turn(self, session_id: UUID, role: TurnRole, content: str) -> None:
        """
        Append one turn and commit.

        Raises:
            PersistenceError: If the insert or commit fails
        """
        try:
            await turn_crud.append(self.db, session_id=session_id, role=role.value, content=content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:persist_turn - FAILED role={role.value}: {type(e).__name__}: {e}")
            raise PersistenceError(f"Failed to save {role.value} message: {e}", operation="persist_turn") from e

    async def list_sessions(
        self,
        owner_id: str,
        limit: int | None = 50,
        offset: int = 0,
    ) -> SessionListResponse:
        """List the caller's sessions, newest first."""
        sessions = await session_crud.list_for_owner(self.db, owner_id, limit=limit, offset=offset)
        items = [SessionResponse.model_validate(s) for s in sessions]
        return SessionListResponse(sessions=items, total=len(items))

    async def get_history(self, session_id: UUID, owner_id: str) -> ChatHistoryResponse:
        """
        Read a session's turns in creation order.

        Raises:
            SessionNotFoundError: If the session does not exist or is not owned by the caller
        """
        session = await session_crud.get_for_owner(self.db, session_id, owner_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))

        turns = await turn_crud.list_for_session(self.db, session_id, owner_id)
        messages = [TurnResponse.model_validate(t) for t in turns]
        return ChatHistoryResponse(session_id=session_id, messages=messages, total=len(messages))

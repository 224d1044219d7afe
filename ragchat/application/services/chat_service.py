"""
Chat service for streaming retrieval-augmented conversation.

Splits a request into two phases:

1. prepare(): everything that must succeed before streaming starts
   (query validation, session resolution, user-turn persistence,
   ambient context). Failures here become structured HTTP errors.
2. stream(): runs the chat agent and yields its events. The assistant
   turn is persisted once the agent reports FINISH, before that event is
   handed to the transport; failures at that point are logged and swallowed.

Dependencies: ragchat.core.agentic_system, ragchat.core.retriever, ragchat.boundary.db
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ragchat.application.services.session_service import SessionManager
from ragchat.boundary.db.CRUD.document_crud import document_crud
from ragchat.core.agentic_system.agent.chat_agent import MAX_STEPS, ChatAgent
from ragchat.core.agentic_system.agent.chat_agent_tools import build_tool_registry
from ragchat.core.exceptions import ValidationError
from ragchat.core.history_sanitizer import last_query, sanitize_history
from ragchat.core.retriever import RetrievalClient
from ragchat.models.chat import ChatRequest, ChatTurn, TurnRole
from ragchat.models.document import DocumentSummary
from ragchat.models.streaming import OutputEvent, OutputEventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedChat:
    """Request state resolved before the first byte is streamed."""

    session_id: UUID
    owner_id: str
    query: str
    system_context: str
    history: list[ChatTurn]


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates session resolution, retrieval, the chat agent and turn
    persistence for one request.
    """

    def __init__(
        self,
        db: AsyncSession,
        agent: ChatAgent,
        retrieval: RetrievalClient,
        session_factory: async_sessionmaker[AsyncSession],
        default_system_prompt: str = "You are a helpful AI assistant.",
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for pre-stream work
            agent: Chat agent driving generation
            retrieval: Retrieval client for ambient context and tools
            session_factory: Opens fresh sessions for work done while streaming
            default_system_prompt: System context when retrieval yields nothing
        """
        self.db = db
        self.agent = agent
        self.retrieval = retrieval
        self._session_factory = session_factory
        self._default_system_prompt = default_system_prompt

    async def prepare(self, owner_id: str, request: ChatRequest) -> PreparedChat:
        """
        Run the pre-stream phase.

        Args:
            owner_id: Caller identity
            request: Validated chat request with at least one message

        Returns:
            PreparedChat: Resolved session, context and sanitized history

        Raises:
            ValidationError: If the latest query is blank
            SessionNotFoundError: If sessionId names a session the caller does not own
            PersistenceError: If the session or user turn cannot be saved
        """
        messages = request.messages or []
        query = last_query(messages)
        if not query.strip():
            raise ValidationError("Query text is empty", field="messages")

        manager = SessionManager(self.db)
        session_id = await manager.resolve_or_create(owner_id, request.session_id, query)
        await manager.persist_turn(session_id, TurnRole.USER, query)
        logger.info(
            f"{__name__}:prepare - User turn stored",
            extra={"session_id": str(session_id), "query_len": len(query)},
        )

        if request.use_retrieval:
            system_context = await self.retrieval.build_context(
                query, owner_id, self._default_system_prompt
            )
        else:
            system_context = self._default_system_prompt

        history = sanitize_history(messages, fallback_query=query)
        return PreparedChat(
            session_id=session_id,
            owner_id=owner_id,
            query=query,
            system_context=system_context,
            history=history,
        )

    async def stream(self, prepared: PreparedChat) -> AsyncGenerator[OutputEvent, None]:
        """
        Stream agent events for a prepared request.

        Closing this generator before FINISH (client disconnect) stops the agent
        and skips assistant-turn persistence.

        Yields:
            OutputEvent: Agent events, ending with FINISH or ERROR
        """
        tools = build_tool_registry(prepared.owner_id, self.retrieval, self._list_documents)
        delivered: list[str] = []

        async for event in self.agent.run(
            prepared.system_context,
            prepared.history,
            tools,
            max_steps=MAX_STEPS,
        ):
            if event.event is OutputEventType.TEXT_DELTA:
                delivered.append(event.data["text"])
            elif event.event is OutputEventType.FINISH:
                # Stored before the final frame is sent
                await self._persist_assistant_turn(prepared.session_id, "".join(delivered))
            elif event.event is OutputEventType.ERROR:
                logger.warning(
                    f"{__name__}:stream - Generation failed, assistant turn not stored",
                    extra={"session_id": str(prepared.session_id)},
                )

            yield event

    async def _persist_assistant_turn(self, session_id: UUID, text: str) -> None:
        if not text:
            return
        try:
            async with self._session_factory() as db:
                await SessionManager(db).persist_turn(session_id, TurnRole.ASSISTANT, text)
        except Exception as e:
            # Every text delta has already been streamed
            logger.error(
                f"{__name__}:_persist_assistant_turn - FAILED: {type(e).__name__}: {e}",
                extra={"session_id": str(session_id)},
            )
            return
        logger.info(
            f"{__name__}:_persist_assistant_turn - Stored",
            extra={"session_id": str(session_id), "answer_len": len(text)},
        )

    async def _list_documents(self, owner_id: str) -> list[DocumentSummary]:
        async with self._session_factory() as db:
            documents = await document_crud.list_for_owner(db, owner_id)
        return [DocumentSummary.model_validate(d) for d in documents]

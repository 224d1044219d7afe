"""
Dependency injection container.

Factory functions for FastAPI dependencies. Heavy clients (vector index,
embeddings, chat model, identity resolver) are built once and cached.

Dependencies: ragchat.configs, ragchat.application, ragchat.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.application.services import ChatService, DocumentService, SessionManager
from ragchat.boundary.auth.supabase_identity import CallerIdentity, SupabaseIdentityResolver
from ragchat.boundary.db import get_async_db, get_async_session_factory
from ragchat.configs import Settings, get_settings
from ragchat.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._vector_index = None
        self._embeddings = None
        self._chat_agent = None
        self._retrieval = None
        self._identity_resolver = None

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from ragchat.boundary.vdb.vector_store_factory import get_vector_index
            self._vector_index = get_vector_index()
        return self._vector_index

    @property
    def embeddings(self):
        """Get cached embedding client."""
        if self._embeddings is None:
            from ragchat.boundary.vdb.vector_store_factory import get_embedding_client
            self._embeddings = get_embedding_client()
        return self._embeddings

    @property
    def retrieval(self):
        """Get cached retrieval client."""
        if self._retrieval is None:
            from ragchat.core.retriever import RetrievalClient

            settings = get_settings().vector_store
            self._retrieval = RetrievalClient(
                embeddings=self.embeddings,
                index=self.vector_index,
                context_top_k=settings.context_top_k,
                tool_top_k=settings.tool_top_k,
                score_threshold=settings.score_threshold,
            )
        return self._retrieval

    @property
    def chat_agent(self):
        """Get cached chat agent."""
        if self._chat_agent is None:
            from ragchat.core.agentic_system.agent.chat_agent import ChatAgent

            settings = get_settings().llm
            self._chat_agent = ChatAgent(
                model_id=settings.model,
                temperature=settings.temperature,
                api_key=settings.api_key,
            )
        return self._chat_agent

    @property
    def identity_resolver(self):
        """Get cached identity resolver."""
        if self._identity_resolver is None:
            settings = get_settings().auth
            self._identity_resolver = SupabaseIdentityResolver(url=settings.url, key=settings.key)
        return self._identity_resolver

    def clear(self) -> None:
        """Clear all cached instances."""
        self._vector_index = None
        self._embeddings = None
        self._chat_agent = None
        self._retrieval = None
        self._identity_resolver = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_identity_resolver() -> SupabaseIdentityResolver:
    """Get the identity resolver."""
    return get_service_cache().identity_resolver


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def authenticate(
    authorization: str | None,
    resolver: SupabaseIdentityResolver,
) -> CallerIdentity:
    """
    Resolve the caller from a raw Authorization header.

    Raises:
        AuthenticationError: If no identity can be resolved
    """
    caller = await resolver.get_caller(bearer_token(authorization))
    if caller is None:
        raise AuthenticationError()
    return caller


async def get_current_caller(
    authorization: str | None = Header(default=None),
    resolver: SupabaseIdentityResolver = Depends(get_identity_resolver),
) -> CallerIdentity:
    """FastAPI dependency resolving the authenticated caller."""
    return await authenticate(authorization, resolver)


def get_session_manager(db: AsyncSession = Depends(get_async_db)) -> SessionManager:
    """
    Get session manager instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionManager: Session manager instance
    """
    return SessionManager(db=db)


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service bound to the configured vector index
    """
    cache = get_service_cache()
    settings = get_settings().vector_store
    return DocumentService(
        db=db,
        index=cache.vector_index,
        embeddings=cache.embeddings,
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
        batch_size=settings.upsert_batch_size,
    )


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance with chat agent and retrieval client.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service instance
    """
    cache = get_service_cache()
    return ChatService(
        db=db,
        agent=cache.chat_agent,
        retrieval=cache.retrieval,
        session_factory=get_async_session_factory(),
        default_system_prompt=get_settings().llm.default_system_prompt,
    )

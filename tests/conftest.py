"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, deterministic embeddings, in-memory
vector index, a scripted chat model and caller identities.
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import uuid
from collections.abc import Callable

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessageChunk

KEYWORDS = ("alpha", "beta", "gamma")


class KeywordEmbeddings(Embeddings):
    """Three-dimensional embeddings counting the words alpha, beta and gamma."""

    def _vector(self, text: str) -> list[float]:
        lowered = text.lower()
        vector = [float(lowered.count(word)) for word in KEYWORDS]
        return vector if any(vector) else [0.1, 0.1, 0.1]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


class ScriptedChatModel:
    """
    Chat model stand-in that replays scripted streaming steps.

    Each step is a list of AIMessageChunks (or an exception to raise).
    When the script runs out the last step repeats.
    """

    def __init__(self, steps: list) -> None:
        self._steps = list(steps)
        self.calls: list[list] = []
        self.bound_tools = None

    def bind_tools(self, tools):
        self.bound_tools = tools
        return self

    async def astream(self, messages):
        self.calls.append(list(messages))
        step = self._steps.pop(0) if len(self._steps) > 1 else self._steps[0]
        if isinstance(step, Exception):
            raise step
        for chunk in step:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk


def text_step(*deltas: str, finish_reason: str = "STOP") -> list[AIMessageChunk]:
    """Scripted step streaming text deltas and finishing normally."""
    chunks = [AIMessageChunk(content=delta) for delta in deltas]
    chunks.append(AIMessageChunk(content="", response_metadata={"finish_reason": finish_reason}))
    return chunks


def tool_step(*calls: tuple[str, dict]) -> list[AIMessageChunk]:
    """Scripted step requesting tool calls."""
    return [
        AIMessageChunk(
            content="",
            tool_call_chunks=[
                {
                    "name": name,
                    "args": json.dumps(args),
                    "id": f"call_{index}",
                    "index": index,
                }
                for index, (name, args) in enumerate(calls)
            ],
        )
    ]


@pytest.fixture
def make_text_step() -> Callable[..., list[AIMessageChunk]]:
    return text_step


@pytest.fixture
def make_tool_step() -> Callable[..., list[AIMessageChunk]]:
    return tool_step


@pytest.fixture
def make_chat_model() -> Callable[[list], ScriptedChatModel]:
    return ScriptedChatModel


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Test engine (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from ragchat.boundary.db import models  # noqa: F401
    from ragchat.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a session on the in-memory SQLite database.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def embedding_client():
    """Embedding client over deterministic keyword embeddings."""
    from ragchat.boundary.vdb.embeddings_wrapper import EmbeddingClient

    return EmbeddingClient(dimension=len(KEYWORDS), embeddings=KeywordEmbeddings())


@pytest.fixture
def vector_index():
    """Empty in-memory vector index."""
    from ragchat.boundary.vdb.memory_store import InMemoryVectorIndex

    return InMemoryVectorIndex()


@pytest.fixture
def retrieval_client(embedding_client, vector_index):
    """Retrieval client over the in-memory index."""
    from ragchat.core.retriever import RetrievalClient

    return RetrievalClient(embeddings=embedding_client, index=vector_index)


@pytest.fixture
def owner_id() -> str:
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def other_owner_id() -> str:
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def index_passage(embedding_client, vector_index):
    """Insert one passage into the in-memory index."""
    from ragchat.boundary.vdb.vector_schemas import VectorRecord

    async def _index(text: str, owner: str, filename: str = "notes.pdf", document_id: str | None = None):
        document_id = document_id or str(uuid.uuid4())
        vector = await embedding_client.embed(text)
        record = VectorRecord(
            id=f"{document_id}-{uuid.uuid4().hex[:6]}",
            values=vector,
            metadata={
                "text": text,
                "filename": filename,
                "document_id": document_id,
                "user_id": owner,
            },
        )
        await vector_index.upsert([record])
        return record

    return _index

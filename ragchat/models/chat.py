"""
Chat domain models and schemas.

Request schemas for the chat endpoint and the sanitized turn type that the
orchestrator consumes.

Dependencies: pydantic
System role: Chat API contracts
"""

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TurnRole(str, Enum):
    """Roles that are persisted and sent to the generation engine."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One sanitized conversation turn."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str


class RawMessage(BaseModel):
    """
    Message as supplied by the client.

    Role and content are kept loose; the history sanitizer decides what survives.
    """

    model_config = ConfigDict(extra="allow")

    role: Any = None
    content: Any = None


class ChatRequest(BaseModel):
    """Request schema for the streaming chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[RawMessage] | None = Field(default=None, description="Conversation so far")
    session_id: UUID | None = Field(
        default=None,
        alias="sessionId",
        description="Existing session to continue; a new one is created when omitted",
    )
    use_retrieval: bool = Field(
        default=True,
        alias="useRetrieval",
        description="Inject ambient document context before generation",
    )


class ErrorResponse(BaseModel):
    """Structured error body for failures before streaming starts."""

    error: str

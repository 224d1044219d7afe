"""
Session domain models and schemas.

Response schemas for session listing and chat history reads.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SessionResponse(BaseModel):
    """Session summary owned by the caller."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    created_at: datetime


class SessionListResponse(BaseModel):
    """Response schema for session listing."""

    sessions: list[SessionResponse]
    total: int = Field(description="Number of sessions returned")


class TurnResponse(BaseModel):
    """Single persisted turn in a session."""

    model_config = ConfigDict(from_attributes=True)

    role: str = Field(description="Turn role: 'user' or 'assistant'")
    content: str
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """Response schema for a session's chat history."""

    session_id: UUID
    messages: list[TurnResponse]
    total: int = Field(description="Total number of messages")

"""Pydantic schemas for API contracts and the streaming protocol."""

from ragchat.models.chat import ChatRequest, ChatTurn, ErrorResponse, RawMessage, TurnRole
from ragchat.models.streaming import OutputEvent, OutputEventType

__all__ = [
    "ChatRequest",
    "ChatTurn",
    "ErrorResponse",
    "OutputEvent",
    "OutputEventType",
    "RawMessage",
    "TurnRole",
]

"""
Streaming event schemas for the chat pipeline.

Defines the output events produced by the generation orchestrator and
consumed by the transport adapter.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class OutputEventType(str, Enum):
    """Orchestrator-to-transport event types."""

    TEXT_DELTA = "text-delta"
    TOOL_CALL = "tool-call"
    TOOL_RESULT = "tool-result"
    STEP_FINISH = "step-finish"
    FINISH = "finish"
    ERROR = "error"


TERMINAL_EVENT_TYPES = frozenset({OutputEventType.FINISH, OutputEventType.ERROR})


class OutputEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: OutputEventType
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        """Whether this event ends the stream."""
        return self.event in TERMINAL_EVENT_TYPES

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    @classmethod
    def text_delta(cls, text: str) -> "OutputEvent":
        return cls(event=OutputEventType.TEXT_DELTA, data={"text": text})

    @classmethod
    def tool_call(cls, call_id: str, name: str, args: dict[str, Any]) -> "OutputEvent":
        return cls(
            event=OutputEventType.TOOL_CALL,
            data={"tool_call_id": call_id, "tool_name": name, "args": args},
        )

    @classmethod
    def tool_result(cls, call_id: str, name: str, result: str) -> "OutputEvent":
        return cls(
            event=OutputEventType.TOOL_RESULT,
            data={"tool_call_id": call_id, "tool_name": name, "result": result},
        )

    @classmethod
    def step_finish(
        cls,
        finish_reason: str,
        tool_calls: int,
        tool_results: int,
        text_length: int,
        is_continued: bool,
    ) -> "OutputEvent":
        return cls(
            event=OutputEventType.STEP_FINISH,
            data={
                "finish_reason": finish_reason,
                "tool_calls": tool_calls,
                "tool_results": tool_results,
                "text_length": text_length,
                "is_continued": is_continued,
            },
        )

    @classmethod
    def finish(cls, full_text: str, finish_reason: str, steps: int) -> "OutputEvent":
        return cls(
            event=OutputEventType.FINISH,
            data={"full_text": full_text, "finish_reason": finish_reason, "steps": steps},
        )

    @classmethod
    def error(cls, message: str) -> "OutputEvent":
        return cls(event=OutputEventType.ERROR, data={"message": message})

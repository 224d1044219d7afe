"""
Data-stream transport adapter.

Encodes OutputEvents as newline-delimited `<code>:<json>` frames and pumps
them into a StreamingResponse, stopping as soon as the client goes away.

    0:"text"                      text delta
    9:{toolCallId,toolName,args}  tool call
    a:{toolCallId,result}         tool result
    e:{finishReason,...}          step boundary
    d:{finishReason,textLength}   finished
    3:"message"                   error

Dependencies: starlette
System role: Streaming wire format
"""

import json
import logging
from collections.abc import AsyncGenerator

from starlette.requests import Request

from ragchat.models.streaming import OutputEvent, OutputEventType

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Chat-Id"

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Vercel-AI-Data-Stream": "v1",
}


def _frame(code: str, payload) -> str:
    return f"{code}:{json.dumps(payload, ensure_ascii=False, default=str)}\n"


def encode_event(event: OutputEvent) -> str:
    """Encode one event as a data-stream frame."""
    data = event.data
    if event.event is OutputEventType.TEXT_DELTA:
        return _frame("0", data["text"])
    if event.event is OutputEventType.TOOL_CALL:
        return _frame("9", {
            "toolCallId": data["tool_call_id"],
            "toolName": data["tool_name"],
            "args": data["args"],
        })
    if event.event is OutputEventType.TOOL_RESULT:
        return _frame("a", {
            "toolCallId": data["tool_call_id"],
            "result": data["result"],
        })
    if event.event is OutputEventType.STEP_FINISH:
        return _frame("e", {
            "finishReason": data["finish_reason"],
            "toolCalls": data["tool_calls"],
            "toolResults": data["tool_results"],
            "textLength": data["text_length"],
            "isContinued": data["is_continued"],
        })
    if event.event is OutputEventType.FINISH:
        return _frame("d", {
            "finishReason": data["finish_reason"],
            "textLength": len(data["full_text"]),
        })
    if event.event is OutputEventType.ERROR:
        return _frame("3", data["message"])
    raise ValueError(f"Unsupported event type: {event.event}")


def stream_headers(session_id: str) -> dict[str, str]:
    """Response headers, including the resolved session id."""
    return {SESSION_HEADER: session_id, **STREAM_HEADERS}


async def stream_events(
    request: Request,
    events: AsyncGenerator[OutputEvent, None],
) -> AsyncGenerator[str, None]:
    """
    Encode events until the stream ends or the client disconnects.

    On disconnect the event source is closed, which stops generation and
    skips anything the source would have done after its last event.
    """
    try:
        async for event in events:
            if await request.is_disconnected():
                logger.info(f"{__name__}:stream_events - Client disconnected, stopping stream")
                break
            yield encode_event(event)
    finally:
        await events.aclose()

"""
Test suite for the data-stream transport adapter.

System role: Verification of streaming wire format
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from ragchat.api.routers.router_utils.data_stream import (
    SESSION_HEADER,
    encode_event,
    stream_events,
    stream_headers,
)
from ragchat.models.streaming import OutputEvent


class TestEncodeEvent:
    def test_text_delta(self) -> None:
        assert encode_event(OutputEvent.text_delta('say "hi"\n')) == '0:"say \\"hi\\"\\n"\n'

    def test_text_keeps_unicode(self) -> None:
        assert encode_event(OutputEvent.text_delta("héllo")) == '0:"héllo"\n'

    def test_tool_call(self) -> None:
        frame = encode_event(OutputEvent.tool_call("call_1", "query_knowledge", {"query": "cells"}))

        code, payload = frame.rstrip("\n").split(":", 1)
        assert code == "9"
        assert json.loads(payload) == {
            "toolCallId": "call_1",
            "toolName": "query_knowledge",
            "args": {"query": "cells"},
        }

    def test_tool_result_omits_name(self) -> None:
        frame = encode_event(OutputEvent.tool_result("call_1", "query_knowledge", "found"))

        assert frame == 'a:{"toolCallId": "call_1", "result": "found"}\n'

    def test_finish_reports_text_length(self) -> None:
        frame = encode_event(OutputEvent.finish("Hello", "stop", 1))

        assert json.loads(frame[2:]) == {"finishReason": "stop", "textLength": 5}

    def test_error(self) -> None:
        assert encode_event(OutputEvent.error("rate limited")) == '3:"rate limited"\n'

    def test_every_frame_is_one_line(self) -> None:
        events = [
            OutputEvent.text_delta("a\nb"),
            OutputEvent.tool_result("c", "t", "line1\nline2"),
            OutputEvent.step_finish("stop", 0, 0, 3, False),
            OutputEvent.error("multi\nline"),
        ]

        for event in events:
            frame = encode_event(event)
            assert frame.endswith("\n")
            assert frame.count("\n") == 1


class TestStreamHeaders:
    def test_headers(self) -> None:
        headers = stream_headers("abc")

        assert headers[SESSION_HEADER] == "abc"
        assert headers["Cache-Control"] == "no-cache"
        assert headers["X-Vercel-AI-Data-Stream"] == "v1"


class TestStreamEvents:
    @pytest.mark.asyncio
    async def test_stops_and_closes_source_on_disconnect(self) -> None:
        request = MagicMock()
        request.is_disconnected = AsyncMock(side_effect=[False, True])
        state = {"closed": False, "produced": 0}

        async def source():
            try:
                for text in ["one", "two", "three"]:
                    state["produced"] += 1
                    yield OutputEvent.text_delta(text)
            finally:
                state["closed"] = True

        frames = [frame async for frame in stream_events(request, source())]

        assert frames == ['0:"one"\n']
        assert state["closed"] is True
        assert state["produced"] == 2

    @pytest.mark.asyncio
    async def test_full_stream(self) -> None:
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=False)

        async def source():
            yield OutputEvent.text_delta("Hi")
            yield OutputEvent.finish("Hi", "stop", 1)

        frames = [frame async for frame in stream_events(request, source())]

        assert frames == ['0:"Hi"\n', 'd:{"finishReason": "stop", "textLength": 2}\n']

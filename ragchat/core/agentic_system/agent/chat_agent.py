"""
Generation orchestrator.

Drives the bounded tool-calling loop against the chat model and turns it
into a single stream of OutputEvents:

    Init -> Streaming -> (StepBoundary <-> ToolExecuting)* -> Finish | Error

Each step streams one model response, forwarding text deltas as they
arrive. If the response requests tools, they run in call order, their
results are appended to the context and the model is invoked again.
The loop stops when the model finishes without tool calls or after
MAX_STEPS steps.

Dependencies: langchain_core, langchain_google_genai
System role: Chat agent orchestration
"""

import logging
import uuid
from collections.abc import AsyncGenerator
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessageChunk, BaseMessage, ToolMessage
from langchain_core.tools import BaseTool
from langchain_google_genai import ChatGoogleGenerativeAI

from ragchat.core.agentic_system.agent.chat_agent_prompt import build_messages
from ragchat.core.exceptions import GenerationError
from ragchat.core.history_sanitizer import content_to_text
from ragchat.models.chat import ChatTurn
from ragchat.models.streaming import OutputEvent

logger = logging.getLogger(__name__)

MAX_STEPS = 5

TOOL_CALLS_FINISH_REASON = "tool-calls"
DEFAULT_FINISH_REASON = "stop"


def _finish_reason(message: AIMessageChunk) -> str:
    if message.tool_calls:
        return TOOL_CALLS_FINISH_REASON
    raw = (message.response_metadata or {}).get("finish_reason")
    if raw is None:
        return DEFAULT_FINISH_REASON
    # Gemini reports e.g. "STOP", "MAX_TOKENS"
    name = getattr(raw, "name", raw)
    return str(name).lower().replace("_", "-")


class ChatAgent:
    """
    Tool-calling chat agent over a LangChain chat model.

    The model is shared across requests; tools and history are per call.
    """

    def __init__(
        self,
        model: BaseChatModel | None = None,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize chat agent.

        Args:
            model: Pre-built chat model (tests); built from model_id otherwise
            model_id: Gemini model identifier
            temperature: Sampling temperature
            api_key: Google API key (falls back to GOOGLE_API_KEY env)
        """
        if model is None:
            kwargs: dict[str, Any] = {"model": model_id, "temperature": temperature}
            if api_key:
                kwargs["google_api_key"] = api_key
            model = ChatGoogleGenerativeAI(**kwargs)
        self._model = model
        self._model_id = model_id

    async def _execute_tool(self, registry: dict[str, BaseTool], call: dict[str, Any]) -> str:
        selected = registry.get(call["name"])
        if selected is None:
            logger.warning(f"{__name__}:_execute_tool - Unknown tool requested: {call['name']}")
            return f"Error: tool '{call['name']}' is not available."
        result = await selected.ainvoke(call.get("args") or {})
        return content_to_text(result.content if isinstance(result, ToolMessage) else result)

    async def run(
        self,
        system_context: str,
        history: list[ChatTurn],
        tools: list[BaseTool],
        max_steps: int = MAX_STEPS,
    ) -> AsyncGenerator[OutputEvent, None]:
        """
        Run the bounded generation loop.

        Args:
            system_context: System text (ambient context or default prompt)
            history: Sanitized turns, user first
            tools: Tools the model may call
            max_steps: Ceiling on model invocations

        Yields:
            OutputEvent: text deltas, tool calls/results and step boundaries,
            ending with exactly one FINISH or ERROR event
        """
        logger.info(
            f"{__name__}:run - START turns={len(history)}, tools={len(tools)}, max_steps={max_steps}"
        )

        messages: list[BaseMessage] = build_messages(system_context, history, with_tools=bool(tools))
        registry = {t.name: t for t in tools}
        model = self._model.bind_tools(tools) if tools else self._model

        full_text = ""
        finish_reason = DEFAULT_FINISH_REASON
        step = 0

        try:
            while step < max_steps:
                step += 1
                aggregate: AIMessageChunk | None = None
                step_text_length = 0

                async for chunk in model.astream(messages):
                    aggregate = chunk if aggregate is None else aggregate + chunk
                    delta = content_to_text(chunk.content)
                    if delta:
                        full_text += delta
                        step_text_length += len(delta)
                        yield OutputEvent.text_delta(delta)

                if aggregate is None:
                    raise GenerationError("Generation engine returned an empty response")

                finish_reason = _finish_reason(aggregate)
                tool_calls = list(aggregate.tool_calls)

                if not tool_calls:
                    yield OutputEvent.step_finish(finish_reason, 0, 0, step_text_length, False)
                    break

                for call in tool_calls:
                    if not call.get("id"):
                        call["id"] = f"call_{uuid.uuid4().hex}"
                aggregate.tool_calls = tool_calls
                messages.append(aggregate)

                results = 0
                for call in tool_calls:
                    yield OutputEvent.tool_call(call["id"], call["name"], call.get("args") or {})
                    output = await self._execute_tool(registry, call)
                    messages.append(
                        ToolMessage(content=output, tool_call_id=call["id"], name=call["name"])
                    )
                    results += 1
                    yield OutputEvent.tool_result(call["id"], call["name"], output)

                logger.info(
                    f"{__name__}:run - Step {step} executed {results} tool call(s)",
                    extra={"step": step},
                )
                yield OutputEvent.step_finish(
                    finish_reason,
                    len(tool_calls),
                    results,
                    step_text_length,
                    step < max_steps,
                )
            else:
                logger.warning(f"{__name__}:run - Step ceiling reached ({max_steps})")

        except Exception as e:
            logger.error(f"{__name__}:run - FAILED at step {step}: {type(e).__name__}: {e}")
            yield OutputEvent.error(str(e) or type(e).__name__)
            return

        logger.info(f"{__name__}:run - END steps={step}, text_len={len(full_text)}")
        yield OutputEvent.finish(full_text, finish_reason, step)

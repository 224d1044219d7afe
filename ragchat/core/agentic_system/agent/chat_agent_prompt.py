"""
Chat agent prompt.

Combines the per-request system context with tool guidance and the
sanitized conversation history.

Dependencies: langchain_core.prompts
System role: Prompt template for the generation orchestrator
"""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from ragchat.models.chat import ChatTurn, TurnRole

TOOL_GUIDANCE = """You can call tools to look at the user's uploaded documents:
- list_documents: see which documents exist
- query_knowledge: search their contents

Search before answering questions about the user's documents. If nothing
relevant is found, say so instead of guessing."""

CHAT_AGENT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    MessagesPlaceholder("history"),
])


def to_langchain_messages(history: list[ChatTurn]) -> list[BaseMessage]:
    """Convert sanitized turns to LangChain messages."""
    return [
        HumanMessage(content=turn.content) if turn.role is TurnRole.USER
        else AIMessage(content=turn.content)
        for turn in history
    ]


def build_messages(
    system_context: str,
    history: list[ChatTurn],
    with_tools: bool = True,
) -> list[BaseMessage]:
    """
    Render the full message list for the first engine call.

    Args:
        system_context: Ambient context or the default system prompt
        history: Sanitized turns, user first
        with_tools: Append tool usage guidance to the system message

    Returns:
        list[BaseMessage]: System message followed by the history
    """
    system_prompt = f"{system_context}\n\n{TOOL_GUIDANCE}" if with_tools else system_context
    return CHAT_AGENT_PROMPT.invoke({
        "system_prompt": system_prompt,
        "history": to_langchain_messages(history),
    }).to_messages()

"""
Conversation history sanitizer.

Turns an arbitrary client-supplied message list into a strictly alternating,
user-first sequence of non-empty user/assistant turns. Gemini rejects
histories whose roles do not alternate, so every request passes through here
before reaching the generation engine.

Dependencies: None (pure function)
System role: Message-history normalization for the generation orchestrator
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ragchat.models.chat import ChatTurn, TurnRole

MERGE_SEPARATOR = "\n\n"

_ALLOWED_ROLES = {role.value for role in TurnRole}


def content_to_text(content: Any) -> str:
    """
    Flatten message content of unknown shape into plain text.

    Accepts plain strings, lists of parts (strings or ``{"type": "text",
    "text": ...}`` dicts) and falls back to ``str()`` for anything else.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Mapping):
                text = item.get("text")
                if isinstance(text, str):
                    parts.append(text)
        return "".join(parts)
    return str(content)


def _read(message: Any, key: str) -> Any:
    if isinstance(message, Mapping):
        return message.get(key)
    return getattr(message, key, None)


def last_query(messages: Iterable[Any]) -> str:
    """
    Text of the most recent user message, or of the last message if none is a user.

    Args:
        messages: Raw messages as received from the client

    Returns:
        str: Query text (may be empty)
    """
    items = list(messages)
    for message in reversed(items):
        if _read(message, "role") == TurnRole.USER.value:
            return content_to_text(_read(message, "content"))
    if items:
        return content_to_text(_read(items[-1], "content"))
    return ""


def sanitize_history(messages: Iterable[Any], fallback_query: str = "") -> list[ChatTurn]:
    """
    Normalize raw messages into a valid alternating turn sequence.

    Rules, in order:
    1. Drop messages whose role is not user/assistant.
    2. Drop messages whose content is empty after trimming.
    3. Merge consecutive same-role messages, joined by a blank line.
    4. Drop leading assistant turns.
    5. If nothing is left, return a single user turn holding ``fallback_query``.

    Never raises. Applying it to its own output returns the same output.

    Args:
        messages: Raw messages (dicts or objects with role/content)
        fallback_query: Text used when the history reduces to nothing

    Returns:
        list[ChatTurn]: Sanitized turns, user first
    """
    cleaned: list[ChatTurn] = []

    for message in messages:
        role = _read(message, "role")
        if not isinstance(role, str) or role not in _ALLOWED_ROLES:
            continue
        role = str(TurnRole(role).value)
        text = content_to_text(_read(message, "content"))
        if not text.strip():
            continue

        if cleaned and cleaned[-1].role.value == role:
            cleaned[-1] = ChatTurn(
                role=cleaned[-1].role,
                content=cleaned[-1].content + MERGE_SEPARATOR + text,
            )
        else:
            cleaned.append(ChatTurn(role=TurnRole(role), content=text))

    while cleaned and cleaned[0].role is not TurnRole.USER:
        cleaned.pop(0)

    if not cleaned and fallback_query.strip():
        cleaned.append(ChatTurn(role=TurnRole.USER, content=fallback_query))

    return cleaned

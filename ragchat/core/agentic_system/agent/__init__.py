"""
Chat agent module.

Provides the tool-calling chat agent and its per-request tool registry.

Dependencies: langchain_core, langchain_google_genai, ragchat.core.retriever
System role: Agent module exports
"""

from ragchat.core.agentic_system.agent.chat_agent import MAX_STEPS, ChatAgent
from ragchat.core.agentic_system.agent.chat_agent_prompt import build_messages
from ragchat.core.agentic_system.agent.chat_agent_tools import build_tool_registry

__all__ = ["ChatAgent", "MAX_STEPS", "build_messages", "build_tool_registry"]

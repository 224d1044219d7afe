"""Agentic system: chat agent and tools."""

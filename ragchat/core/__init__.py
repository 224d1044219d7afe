"""Core domain logic: sanitizer, retrieval client, agentic system, exceptions."""

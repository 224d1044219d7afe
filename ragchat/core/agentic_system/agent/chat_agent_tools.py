"""
Chat agent tools.

Builds the per-request tool registry: list_documents and query_knowledge,
both bound to the caller's identity so the model can never widen the scope.
Tools are read-only and return strings; expected failures come back as
descriptive text for the model rather than exceptions.

Dependencies: langchain_core.tools, ragchat.core.retriever
System role: Tool registry for the generation orchestrator
"""

import json
import logging
from collections.abc import Awaitable, Callable

from langchain_core.tools import BaseTool, tool

from ragchat.core.agentic_system.agent.chat_agent_schema import (
    ListDocumentsInput,
    QueryKnowledgeInput,
)
from ragchat.core.exceptions import RetrievalError
from ragchat.core.retriever import RetrievalClient, format_passages
from ragchat.models.document import DocumentSummary

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = "The user has not uploaded any documents yet."
NO_MATCH_MESSAGE = "No relevant information was found in the user's documents for this query."

DocumentLister = Callable[[str], Awaitable[list[DocumentSummary]]]


def build_tool_registry(
    owner_id: str,
    retrieval: RetrievalClient,
    list_documents_for: DocumentLister,
) -> list[BaseTool]:
    """
    Create the tools available to one request.

    Args:
        owner_id: Caller identity every tool is scoped to
        retrieval: Retrieval client used by query_knowledge
        list_documents_for: Async callable returning an owner's documents

    Returns:
        list[BaseTool]: Tools in registration order
    """

    @tool("list_documents", args_schema=ListDocumentsInput)
    async def list_documents(include_metadata: bool = False) -> str:
        """List the documents the user has uploaded.

        Use this when the user asks what files or documents are available,
        or before searching when you need to know what exists.
        """
        logger.info(f"{__name__}:list_documents - owner_id={owner_id}")
        try:
            documents = await list_documents_for(owner_id)
        except Exception as e:
            logger.error(f"{__name__}:list_documents - FAILED: {type(e).__name__}: {e}")
            return f"Unable to list documents: {e}"

        if not documents:
            return NO_DOCUMENTS_MESSAGE

        if include_metadata:
            payload = [
                {
                    "id": str(doc.id),
                    "name": doc.name,
                    "created_at": doc.created_at.isoformat() if doc.created_at else None,
                    "chunk_count": doc.chunk_count,
                }
                for doc in documents
            ]
        else:
            payload = [{"id": str(doc.id), "name": doc.name} for doc in documents]
        return json.dumps(payload)

    @tool("query_knowledge", args_schema=QueryKnowledgeInput)
    async def query_knowledge(query: str) -> str:
        """Search the user's uploaded documents for passages relevant to a query.

        Use this to ground answers in the user's own material. Results are
        prefixed with the source document name.
        """
        logger.info(f"{__name__}:query_knowledge - query_len={len(query)}")
        try:
            passages = await retrieval.retrieve(query, owner_id, retrieval.tool_top_k)
        except RetrievalError as e:
            logger.warning(f"{__name__}:query_knowledge - Retrieval failed: {e}")
            return f"Knowledge search is currently unavailable: {e.message}"

        if not passages:
            return NO_MATCH_MESSAGE
        return format_passages(passages)

    return [list_documents, query_knowledge]

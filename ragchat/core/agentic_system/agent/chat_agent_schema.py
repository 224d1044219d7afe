"""
Chat agent tool schemas.

Typed argument schemas for the tools exposed to the generation engine.
The field descriptions are sent to the model as part of the tool schema.

Dependencies: pydantic
System role: Agent tool parameter definitions
"""

from pydantic import BaseModel, Field


class ListDocumentsInput(BaseModel):
    """Arguments for list_documents."""

    include_metadata: bool = Field(
        default=False,
        description="Include upload date and chunk count for each document",
    )


class QueryKnowledgeInput(BaseModel):
    """Arguments for query_knowledge."""

    query: str = Field(
        description="Self-contained search query describing the information needed",
    )

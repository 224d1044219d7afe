"""
Document domain models and schemas.

Response schemas for document listing, upload and deletion.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DocumentSummary(BaseModel):
    """Document owned by the caller."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime
    chunk_count: int = 0


class DocumentListResponse(BaseModel):
    """Response schema for document listing."""

    documents: list[DocumentSummary]
    total: int


class DocumentUploadResponse(BaseModel):
    """Response schema after a document has been ingested."""

    success: bool = True
    document_id: UUID
    chunks: int = Field(description="Number of chunks embedded and indexed")


class DocumentDeleteResponse(BaseModel):
    """Response schema after a document has been deleted."""

    success: bool = True
    vectors_deleted: bool = Field(description="Whether vector cleanup succeeded")

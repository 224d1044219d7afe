"""
Document API endpoints.

Routes:
- GET /documents - List the caller's documents
- POST /documents/upload - Upload and index a PDF
- DELETE /documents/{id} - Delete a document and its vectors

Dependencies: ragchat.application.services.document_service
System role: Document management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status

from ragchat.api.deps import get_current_caller, get_document_service
from ragchat.api.routers.router_utils.error_handling import error_body, handle_api_errors
from ragchat.application.services.document_service import DocumentService
from ragchat.boundary.auth.supabase_identity import CallerIdentity
from ragchat.models.document import (
    DocumentDeleteResponse,
    DocumentListResponse,
    DocumentUploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
@handle_api_errors
async def list_documents(
    caller: CallerIdentity = Depends(get_current_caller),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List the caller's documents, newest first."""
    return await document_service.list_documents(caller.id)


@router.post("/upload", response_model=DocumentUploadResponse)
@handle_api_errors
async def upload_document(
    file: UploadFile | None = File(default=None),
    caller: CallerIdentity = Depends(get_current_caller),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Upload a PDF, split it into chunks and index them for the caller.

    Args:
        file: Multipart PDF upload
        caller: Authenticated caller
        document_service: Injected DocumentService

    Returns:
        DocumentUploadResponse: New document id and chunk count

    Raises:
        400: No file, not a PDF, or no extractable text
        500: Embedding, indexing or storage failure
    """
    if file is None or not file.filename:
        return error_body("No file uploaded", status.HTTP_400_BAD_REQUEST)

    content = await file.read()
    logger.info(
        "Document upload received",
        extra={"file_name": file.filename, "size_bytes": len(content)},
    )
    return await document_service.ingest(caller.id, file.filename, content)


@router.delete("/{document_id}", response_model=DocumentDeleteResponse)
@handle_api_errors
async def delete_document(
    document_id: UUID,
    caller: CallerIdentity = Depends(get_current_caller),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Delete an owned document and clean up its vectors by document id.

    Raises:
        404: Document does not exist or belongs to another caller
    """
    return await document_service.delete(caller.id, document_id)

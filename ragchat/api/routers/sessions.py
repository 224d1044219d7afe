"""
Session API endpoints.

Routes:
- GET /sessions - List the caller's sessions
- GET /sessions/{id}/messages - Get a session's chat history

Dependencies: ragchat.application.services.session_service, ragchat.models
System role: Session read HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ragchat.api.deps import get_current_caller, get_session_manager
from ragchat.api.routers.router_utils.error_handling import handle_api_errors
from ragchat.application.services.session_service import SessionManager
from ragchat.boundary.auth.supabase_identity import CallerIdentity
from ragchat.models.session import ChatHistoryResponse, SessionListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionListResponse)
@handle_api_errors
async def list_sessions(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    caller: CallerIdentity = Depends(get_current_caller),
    session_manager: SessionManager = Depends(get_session_manager),
) -> SessionListResponse:
    """
    List the caller's sessions, newest first.

    Args:
        limit: Maximum number of sessions (default 50)
        offset: Number of sessions to skip
        caller: Authenticated caller
        session_manager: Injected SessionManager

    Returns:
        SessionListResponse: Sessions and count
    """
    return await session_manager.list_sessions(caller.id, limit=limit, offset=offset)


@router.get("/{session_id}/messages", response_model=ChatHistoryResponse)
@handle_api_errors
async def get_session_messages(
    session_id: UUID,
    caller: CallerIdentity = Depends(get_current_caller),
    session_manager: SessionManager = Depends(get_session_manager),
) -> ChatHistoryResponse:
    """
    Get a session's turns in creation order.

    Raises:
        404: Session does not exist or belongs to another caller
    """
    return await session_manager.get_history(session_id, caller.id)

"""
Streaming chat endpoint.

Routes: POST /chat

Validation, authentication, session resolution and user-turn persistence
happen before the response starts and fail with a JSON `{"error": ...}`
body. After that the response is a data stream (see router_utils.data_stream)
and failures are reported inline as error frames.

Dependencies: ragchat.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import StreamingResponse

from ragchat.api.deps import authenticate, get_chat_service, get_identity_resolver
from ragchat.api.routers.router_utils.data_stream import stream_events, stream_headers
from ragchat.api.routers.router_utils.error_handling import error_body, handle_api_errors
from ragchat.application.services.chat_service import ChatService
from ragchat.boundary.auth.supabase_identity import SupabaseIdentityResolver
from ragchat.models.chat import ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@handle_api_errors
async def chat(
    request: Request,
    body: ChatRequest,
    authorization: str | None = Header(default=None),
    resolver: SupabaseIdentityResolver = Depends(get_identity_resolver),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Stream an assistant reply for a conversation.

    The resolved session id is sent in the X-Chat-Id header so a client
    that omitted sessionId learns the new one before the body arrives.

    Args:
        request: Raw request (used for disconnect detection)
        body: Messages, optional sessionId and useRetrieval flag
        authorization: Bearer token header
        resolver: Injected identity resolver
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: text/plain data stream

    Raises:
        400: No messages, or blank query
        401: Caller identity unresolved
        404: sessionId names a session the caller does not own
        500: Session or user-turn persistence failed
    """
    if not body.messages:
        return error_body("No messages", status.HTTP_400_BAD_REQUEST)

    caller = await authenticate(authorization, resolver)
    prepared = await chat_service.prepare(caller.id, body)

    logger.info(
        "Chat stream starting",
        extra={"session_id": str(prepared.session_id), "turns": len(prepared.history)},
    )
    return StreamingResponse(
        stream_events(request, chat_service.stream(prepared)),
        media_type="text/plain; charset=utf-8",
        headers=stream_headers(str(prepared.session_id)),
    )

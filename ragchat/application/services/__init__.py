"""Application services layer."""

from ragchat.application.services.chat_service import ChatService, PreparedChat
from ragchat.application.services.document_service import DocumentService
from ragchat.application.services.session_service import SessionManager

__all__ = ["ChatService", "DocumentService", "PreparedChat", "SessionManager"]

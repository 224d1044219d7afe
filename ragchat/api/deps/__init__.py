"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    authenticate,
    bearer_token,
    get_chat_service,
    get_current_caller,
    get_document_service,
    get_identity_resolver,
    get_service_cache,
    get_session_manager,
    get_settings_dependency,
)

__all__ = [
    "authenticate",
    "bearer_token",
    "get_chat_service",
    "get_current_caller",
    "get_document_service",
    "get_identity_resolver",
    "get_service_cache",
    "get_session_manager",
    "get_settings_dependency",
]

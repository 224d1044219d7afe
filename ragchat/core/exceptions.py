"""
Exception hierarchy for the chat backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RagChatError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthenticationError(RagChatError):
    """Raised when the caller identity cannot be resolved."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class SessionNotFoundError(RagChatError):
    """Raised when a session cannot be found for the caller."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class DocumentNotFoundError(RagChatError):
    """Raised when a document cannot be found for the caller."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document not found: {document_id}", {"document_id": document_id})


class PersistenceError(RagChatError):
    """Raised when a storage write fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DocumentProcessingError(RagChatError):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document parsing fails."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, details=details)


class EmbeddingError(RagChatError):
    """Raised when embedding generation fails."""

    pass


class VectorStoreError(RagChatError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(RagChatError):
    """Raised when retrieval (embedding or index search) fails."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details)


class GenerationError(RagChatError):
    """Raised when the generation engine faults."""

    pass

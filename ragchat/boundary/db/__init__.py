"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - SessionModel, TurnModel, DocumentModel: Core domain entities
  - session_crud, turn_crud, document_crud: CRUD operation singletons

Dependencies: sqlalchemy, ragchat.configs
System role: Database adapter providing persistent storage for sessions,
turns and document metadata.
"""

from ragchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from ragchat.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from ragchat.boundary.db.models import DocumentModel, SessionModel, TurnModel
from ragchat.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    SessionCRUD,
    TurnCRUD,
    document_crud,
    session_crud,
    turn_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "UUIDMixin",
    # Connection
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "SessionModel",
    "TurnModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "SessionCRUD",
    "TurnCRUD",
    # CRUD singletons
    "document_crud",
    "session_crud",
    "turn_crud",
]

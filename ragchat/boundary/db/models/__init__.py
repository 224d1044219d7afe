"""
Database models package.

Exports:
  - SessionModel: Conversation owned by a caller
  - TurnModel: Persisted user/assistant message
  - DocumentModel: Ingested document metadata

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from ragchat.boundary.db.models.document_model import DocumentModel
from ragchat.boundary.db.models.session_model import SessionModel
from ragchat.boundary.db.models.turn_model import TurnModel

__all__ = [
    "DocumentModel",
    "SessionModel",
    "TurnModel",
]

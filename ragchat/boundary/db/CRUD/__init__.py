"""CRUD operations for database models."""

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from ragchat.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from ragchat.boundary.db.CRUD.turn_crud import TurnCRUD, turn_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "SessionCRUD",
    "TurnCRUD",
    "document_crud",
    "session_crud",
    "turn_crud",
]

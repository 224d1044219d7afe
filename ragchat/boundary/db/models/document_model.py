"""
Document ORM model.

Metadata row for an ingested document. The row id is the stable key stored
on every vector the document produced.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Document metadata persistence
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ragchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key, also written to vector metadata as document_id
        owner_id: Caller identity that uploaded the document
        name: Original filename
        chunk_count: Number of chunks indexed
        created_at: Upload timestamp (UTC)
    """

    __tablename__ = "documents"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

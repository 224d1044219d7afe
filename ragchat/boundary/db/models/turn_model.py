"""
Turn ORM model.

One persisted user or assistant message in a session. Append-only.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Chat message persistence
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, CreatedAtMixin


class TurnModel(Base, CreatedAtMixin):
    """
    Turn ORM model.

    Ordering is (created_at, id); the autoincrement id breaks ties between
    turns written within the same clock tick.

    Attributes:
        id: Autoincrement primary key
        session_id: Owning session
        role: 'user' or 'assistant'
        content: Message text
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "turns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    session = relationship("SessionModel", back_populates="turns")

"""
Session ORM model.

Represents one conversation thread owned by a single caller.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Session persistence for chat context management
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin

TITLE_MAX_LENGTH = 50


class SessionModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Session ORM model.

    Created lazily on the first message of a conversation. Every read is
    scoped by owner_id. Sessions are never deleted by the chat pipeline.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Caller identity that created the session
        title: First query truncated to 50 characters
        turns: Persisted user/assistant turns in creation order
        created_at: Session creation timestamp (UTC)
    """

    __tablename__ = "sessions"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False, default="")

    turns = relationship(
        "TurnModel",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="TurnModel.id",
    )

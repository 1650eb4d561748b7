from sqlalchemy import DateTime, Integer, Text, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from enum import Enum as PyEnum
from chatprompt.database.base import Base
import uuid


# ------------------------------
# Enum to define message roles
# ------------------------------
class MessageRole(PyEnum):
    """Enum representing the role of the message sender."""
    USER = "user"             # Sent by the user
    ASSISTANT = "assistant"   # Generated by the AI provider
    SYSTEM = "system"         # System-level instructions


# ------------------------------
# Message Model
# ------------------------------
class Message(Base):
    """
    SQLAlchemy model representing one chat turn.

    Messages are immutable once written. A message does not point at its
    prompt directly; the link (and the conversation order) is held by
    `PromptMessage`.
    """
    __tablename__ = "messages"

    # Primary key - UUID for global uniqueness
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )

    # Role of the message sender (user, assistant, system)
    role: Mapped[MessageRole] = mapped_column(
        SQLEnum(MessageRole, name="message_role"),
        nullable=False,
        index=True
    )

    # Message content (can be multi-line, so Text is used)
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    # Tokens billed for this message: input tokens for user turns,
    # output tokens for assistant turns. Null when unknown.
    token_cost: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id!r}, role={self.role.value!r}, token_cost={self.token_cost!r})>"

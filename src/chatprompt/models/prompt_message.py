from sqlalchemy import DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from chatprompt.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .prompt import Prompt
    from .message import Message


class PromptMessage(Base):
    """
    Join row linking a Prompt to one of its Messages.

    The autoincrement `id` is the ordering key: rows for a prompt sorted by
    `id` ascending give the conversation in the order it was written.
    """
    __tablename__ = "prompt_messages"

    # Integer (not UUID) on purpose: insertion order == conversation order
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("prompts.id"),
        nullable=False,
        index=True
    )

    message_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("messages.id"),
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    prompt: Mapped["Prompt"] = relationship(
        "Prompt",
        back_populates="prompt_messages"
    )

    message: Mapped["Message"] = relationship("Message")

    def __repr__(self) -> str:
        return f"<PromptMessage(id={self.id!r}, prompt_id={self.prompt_id!r}, message_id={self.message_id!r})>"

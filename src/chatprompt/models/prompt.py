from sqlalchemy import String, DateTime, Boolean, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, expression
from datetime import datetime, timezone
from chatprompt.database.base import Base
import uuid
from typing import TYPE_CHECKING, Optional

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .prompt_cost import PromptCost
    from .prompt_message import PromptMessage
    from .user_prompt import UserPrompt


class Prompt(Base):
    """
    SQLAlchemy model for a Prompt (a conversation).

    A prompt is created once with its name and the model identifier it was
    opened with. After creation only the soft-delete and visibility flags
    change. Messages are attached through `PromptMessage`, owners through
    `UserPrompt`, and token totals live in the one-to-one `PromptCost`.
    """
    __tablename__ = "prompts"

    # Primary key: UUID (generated using uuid4), indexed for faster lookup
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )

    # Human-readable conversation name, e.g. "Trip Planning"
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False
    )

    # Provider model identifier the prompt was created with (e.g. "gpt-4o-mini")
    prompt_model: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # Soft-delete flag; deleted prompts are invisible to every lookup
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=expression.false(),
        nullable=False,
        index=True
    )

    # Hidden prompts still exist but are left out of listings
    is_visible: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=expression.true(),
        nullable=False
    )

    # Set client-side so the value keeps microseconds on every backend; listings sort on it
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # One-to-One: token totals for this prompt
    cost: Mapped[Optional["PromptCost"]] = relationship(
        "PromptCost",
        back_populates="prompt",
        uselist=False,
        lazy="select"
    )

    # One-to-Many: ordered links to the messages of this prompt
    prompt_messages: Mapped[list["PromptMessage"]] = relationship(
        "PromptMessage",
        back_populates="prompt",
        lazy="select",
        order_by="PromptMessage.id"
    )

    # One-to-Many: ownership rows
    owners: Mapped[list["UserPrompt"]] = relationship(
        "UserPrompt",
        back_populates="prompt",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Prompt(id={self.id!r}, name={self.name!r}, prompt_model={self.prompt_model!r})>"

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from chatprompt.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .prompt import Prompt


class UserPrompt(Base):
    """
    Ownership row linking a user to a prompt.

    Users are managed outside this package, so `user_id` is an opaque UUID
    without a foreign key. No uniqueness is imposed on (user_id, prompt_id):
    a prompt may be shared, and ownership is simply "a matching row exists".
    """
    __tablename__ = "user_prompts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True
    )

    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("prompts.id"),
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    prompt: Mapped["Prompt"] = relationship(
        "Prompt",
        back_populates="owners"
    )

    def __repr__(self) -> str:
        return f"<UserPrompt(user_id={self.user_id!r}, prompt_id={self.prompt_id!r})>"

from sqlalchemy import DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from chatprompt.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .prompt import Prompt


class PromptCost(Base):
    """
    Cumulative token totals for a single prompt.

    Created alongside the prompt with zero totals and afterwards only changed
    through an atomic `col = col + n` update (see PromptCostRepository).
    """
    __tablename__ = "prompt_costs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )

    # One-to-one with Prompt, enforced by the unique constraint
    prompt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("prompts.id"),
        nullable=False,
        unique=True,
        index=True
    )

    total_input_cost: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False
    )

    total_output_cost: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    prompt: Mapped["Prompt"] = relationship(
        "Prompt",
        back_populates="cost"
    )

    def __repr__(self) -> str:
        return (
            f"<PromptCost(prompt_id={self.prompt_id!r}, "
            f"total_input_cost={self.total_input_cost!r}, total_output_cost={self.total_output_cost!r})>"
        )

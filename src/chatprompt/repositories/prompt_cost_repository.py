"""
PromptCost repository: creation with zero totals and atomic increments.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
import logging

from chatprompt.exceptions.base import MissingCostRecordError
from chatprompt.models.prompt_cost import PromptCost
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class PromptCostRepository(BaseRepository[PromptCost]):
    """
    Repository for PromptCost entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(PromptCost, db)

    async def create_for_prompt(self, prompt_id: UUID) -> PromptCost:
        """
        Create the cost record of a prompt with both totals at zero.

        Raises:
            DuplicateError: If the prompt already has a cost record.
        """
        return await self.create(prompt_id=prompt_id, total_input_cost=0, total_output_cost=0)

    async def get_by_prompt(self, prompt_id: UUID) -> PromptCost | None:
        return await self.find_by_field("prompt_id", prompt_id)

    async def get_by_prompt_or_raise(self, prompt_id: UUID) -> PromptCost:
        """
        Raises:
            MissingCostRecordError: If the prompt has no cost record.
        """
        record = await self.get_by_prompt(prompt_id)
        if record is None:
            logger.error(
                "prompt_cost.missing",
                extra={"prompt_id": str(prompt_id)},
            )
            raise MissingCostRecordError(prompt_id)
        return record

    async def increment(self, prompt_id: UUID, input_tokens: int, output_tokens: int) -> PromptCost:
        """
        Add token counts to a prompt's totals.

        The update is a single `SET col = col + :n` statement, so concurrent
        increments for the same prompt cannot lose each other's counts.

        Raises:
            MissingCostRecordError: If the prompt has no cost record. The
                increment is never skipped silently.
            RepositoryError: If a count is negative or the update fails.
        """
        if input_tokens < 0 or output_tokens < 0:
            raise RepositoryError(
                "Token counts must not be negative",
                fields=["input_tokens", "output_tokens"],
                error_code="invalid_input",
            )

        record = await self.get_by_prompt_or_raise(prompt_id)

        try:
            stmt = (
                update(PromptCost)
                .where(PromptCost.prompt_id == prompt_id)
                .values(
                    total_input_cost=PromptCost.total_input_cost + input_tokens,
                    total_output_cost=PromptCost.total_output_cost + output_tokens,
                )
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(stmt)
            await self.db.refresh(record)

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error incrementing cost for prompt {prompt_id}: {e}")
            raise RepositoryError("Failed to update prompt cost") from e

        logger.info(
            "prompt_cost.incremented",
            extra={
                "prompt_id": str(prompt_id),
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_input_cost": record.total_input_cost,
                "total_output_cost": record.total_output_cost,
            },
        )
        return record

"""
Prompt repository: creation, active/visible lookups and the soft-state flags.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
import logging

from chatprompt.models.prompt import Prompt
from chatprompt.models.user_prompt import UserPrompt
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class PromptRepository(BaseRepository[Prompt]):
    """
    Repository for Prompt entity operations.

    "Active" means `is_deleted = False`; "listed" additionally requires
    `is_visible = True`. Deleted prompts are never returned by lookups here.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Prompt, db)

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def create_prompt(self, name: str, prompt_model: str) -> Prompt:
        """
        Create a new prompt. The name is stripped of surrounding whitespace.

        Raises:
            RepositoryError: If name or model is empty, or the write fails.
        """
        name = (name or "").strip()
        if not name:
            raise RepositoryError("Prompt name must not be empty", fields=["name"], error_code="invalid_input")
        if not prompt_model:
            raise RepositoryError("Prompt model must not be empty", fields=["prompt_model"], error_code="invalid_input")

        logger.info("Creating prompt", extra={"prompt_model": prompt_model})
        return await self.create(name=name, prompt_model=prompt_model)

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_active(self, prompt_id: UUID) -> Prompt | None:
        """
        Return the prompt if it exists and is not soft-deleted, else None.
        """
        try:
            query = select(Prompt).where(
                and_(
                    Prompt.id == prompt_id,
                    Prompt.is_deleted.is_(False)
                )
            )
            result = await self.db.execute(query)
            prompt = result.scalar_one_or_none()

            logger.debug(f"Active prompt lookup {prompt_id}: {'found' if prompt else 'not found'}")
            return prompt

        except Exception as e:
            logger.error(f"Error retrieving active prompt {prompt_id}: {e}")
            raise RepositoryError("Failed to retrieve prompt") from e

    async def get_listed_for_user(self, user_id: UUID) -> list[tuple[UUID, str]]:
        """
        Return (id, name) of every prompt linked to `user_id` through UserPrompt
        that is neither deleted nor hidden, newest first by `created_at`.
        Prompts sharing the exact same `created_at` come back in id order, which
        is stable between calls but says nothing about creation order.

        Explicit join instead of relationship loading:
            SELECT p.id, p.name FROM prompts p
            JOIN user_prompts up ON up.prompt_id = p.id
            WHERE up.user_id = :user_id AND NOT p.is_deleted AND p.is_visible
        """
        try:
            query = (
                select(Prompt.id, Prompt.name)
                .join(UserPrompt, UserPrompt.prompt_id == Prompt.id)
                .where(
                    and_(
                        UserPrompt.user_id == user_id,
                        Prompt.is_deleted.is_(False),
                        Prompt.is_visible.is_(True),
                    )
                )
                .order_by(Prompt.created_at.desc(), Prompt.id)
            )
            result = await self.db.execute(query)
            rows = [(row.id, row.name) for row in result.all()]

            logger.debug(f"Retrieved {len(rows)} listed prompts for user: {user_id}")
            return rows

        except Exception as e:
            logger.error(f"Error listing prompts for user {user_id}: {e}")
            raise RepositoryError("Failed to list user prompts") from e

    # =================================================================================================================
    # Soft-state Operations
    # =================================================================================================================

    async def soft_delete(self, prompt_id: UUID) -> Prompt | None:
        """
        Mark an active prompt as deleted. Returns None if no active prompt matched.
        """
        if await self.get_active(prompt_id) is None:
            return None
        logger.info("Soft-deleting prompt", extra={"prompt_id": str(prompt_id)})
        return await self.update(prompt_id, is_deleted=True)

    async def set_visibility(self, prompt_id: UUID, visible: bool) -> Prompt | None:
        """
        Show or hide an active prompt in listings. Returns None if no active prompt matched.
        """
        if await self.get_active(prompt_id) is None:
            return None
        return await self.update(prompt_id, is_visible=visible)

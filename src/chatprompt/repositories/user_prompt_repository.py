"""
UserPrompt repository: ownership links between users and prompts.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
import logging

from chatprompt.models.user_prompt import UserPrompt
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)


class UserPromptRepository(BaseRepository[UserPrompt]):
    """
    Repository for UserPrompt entity operations.

    Ownership is the existence of a row for the exact (prompt_id, user_id) pair.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(UserPrompt, db)

    async def link(self, user_id: UUID, prompt_id: UUID) -> UserPrompt:
        """Record `user_id` as an owner of `prompt_id`."""
        return await self.create(user_id=user_id, prompt_id=prompt_id)

    async def is_owner(self, prompt_id: UUID, user_id: UUID) -> bool:
        """
        True iff a UserPrompt row links this user to this prompt.
        """
        try:
            query = (
                select(UserPrompt.id)
                .where(
                    and_(
                        UserPrompt.prompt_id == prompt_id,
                        UserPrompt.user_id == user_id
                    )
                )
                .limit(1)
            )
            result = await self.db.execute(query)
            owned = result.scalar() is not None

            logger.debug(f"Ownership check prompt={prompt_id} user={user_id}: {owned}")
            return owned

        except Exception as e:
            logger.error(f"Error checking ownership of prompt {prompt_id} for user {user_id}: {e}")
            raise RepositoryError("Failed to check prompt ownership") from e

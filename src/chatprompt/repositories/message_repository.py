"""
Message repository for handling message-specific database operations.

Messages are attached to a prompt through `PromptMessage` rows. The
autoincrement id of those rows is the conversation order, so every read here
orders by `PromptMessage.id`, never by timestamps.
"""

from typing import Literal
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from chatprompt.models.message import Message, MessageRole
from chatprompt.models.prompt_message import PromptMessage
from .base_repository import BaseRepository, RepositoryError

logger = logging.getLogger(__name__)

Ordering = Literal["ASC", "DESC"]


class MessageRepository(BaseRepository[Message]):
    """
    Repository for Message entity operations and their prompt links.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def create_message(
        self,
        role: MessageRole,
        content: str,
        token_cost: int | None = None
    ) -> Message:
        """
        Create a standalone message. Content is stored as given.

        Raises:
            RepositoryError: If token_cost is negative or the write fails.
        """
        if token_cost is not None and token_cost < 0:
            raise RepositoryError("token_cost must not be negative", fields=["token_cost"], error_code="invalid_input")

        return await self.create(role=role, content=content, token_cost=token_cost)

    async def link_to_prompt(self, prompt_id: UUID, message_id: UUID) -> PromptMessage:
        """
        Append an existing message to a prompt. The new link's id places it
        after every earlier message of that prompt.
        """
        link_repo = BaseRepository(PromptMessage, self.db)
        return await link_repo.create(prompt_id=prompt_id, message_id=message_id)

    async def append_to_prompt(
        self,
        prompt_id: UUID,
        role: MessageRole,
        content: str,
        token_cost: int | None = None
    ) -> tuple[Message, PromptMessage]:
        """
        Create a message and link it to the end of a prompt's conversation.

        Both rows are flushed, not committed; the caller decides durability.
        """
        logger.info(
            f"Appending {role.value} message to prompt: {prompt_id}",
            extra={"prompt_id": str(prompt_id), "role": role.value, "token_cost": token_cost},
        )
        message = await self.create_message(role=role, content=content, token_cost=token_cost)
        link = await self.link_to_prompt(prompt_id, message.id)
        return message, link

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_prompt_messages(
        self,
        prompt_id: UUID,
        ordering: Ordering = "ASC",
        offset: int = 0,
        limit: int | None = None
    ) -> list[tuple[int, Message]]:
        """
        Retrieve (link_id, Message) pairs for a prompt.

        One explicit join, ordered by the link id in the requested direction
        and bounded by offset/limit:

            SELECT pm.id, m.* FROM prompt_messages pm
            JOIN messages m ON m.id = pm.message_id
            WHERE pm.prompt_id = :prompt_id
            ORDER BY pm.id {ASC|DESC} OFFSET :offset LIMIT :limit

        Args:
            prompt_id (UUID): The prompt whose messages to fetch.
            ordering: "ASC" oldest first, "DESC" newest first.
            offset (int): Number of rows to skip.
            limit (int | None): Maximum rows (None for all).

        Raises:
            RepositoryError: If the ordering is invalid or the query fails.
        """
        ordering = ordering.upper()
        if ordering not in ("ASC", "DESC"):
            raise RepositoryError(f"Invalid ordering '{ordering}'", fields=["ordering"], error_code="invalid_input")

        try:
            query = (
                select(PromptMessage.id, Message)
                .join(Message, Message.id == PromptMessage.message_id)
                .where(PromptMessage.prompt_id == prompt_id)
                .order_by(PromptMessage.id.desc() if ordering == "DESC" else PromptMessage.id.asc())
                .offset(offset)
            )
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            rows = [(link_id, message) for link_id, message in result.all()]

            logger.debug(f"Retrieved {len(rows)} messages for prompt: {prompt_id}")
            return rows

        except Exception as e:
            logger.error(f"Error retrieving messages for prompt {prompt_id}: {e}")
            raise RepositoryError("Failed to retrieve prompt messages") from e

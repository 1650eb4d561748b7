"""
Prompt lifecycle: creation, listing, ownership and message listings.
"""

from typing import Any, Mapping
from uuid import UUID
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from chatprompt.exceptions.base import NotFoundError
from chatprompt.models.prompt import Prompt
from chatprompt.repositories.message_repository import MessageRepository
from chatprompt.repositories.prompt_cost_repository import PromptCostRepository
from chatprompt.repositories.prompt_repository import PromptRepository
from chatprompt.repositories.user_prompt_repository import UserPromptRepository
from chatprompt.schemas.chat import AiRequestConfig
from chatprompt.schemas.prompt import (
    MessageView,
    PromptCostView,
    PromptCreated,
    PromptData,
    PromptSummary,
)
from chatprompt.utils.pagination import page_parser

logger = logging.getLogger(__name__)


class PromptService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.prompts = PromptRepository(session)
        self.messages = MessageRepository(session)
        self.costs = PromptCostRepository(session)
        self.owners = UserPromptRepository(session)

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create_prompt(self, config: AiRequestConfig, name: str, user_id: UUID) -> PromptCreated:
        """
        Create a prompt with zeroed cost totals, owned by `user_id`.

        The Prompt, its PromptCost and the UserPrompt link are written in one
        transaction: either all three are committed or none is.
        """
        try:
            prompt = await self.prompts.create_prompt(name=name, prompt_model=config.model)
            await self.costs.create_for_prompt(prompt.id)
            await self.owners.link(user_id=user_id, prompt_id=prompt.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.warning("prompt.create.rolled_back", extra={"user_id": str(user_id)})
            raise

        logger.info(
            "prompt.create.success",
            extra={"prompt_id": str(prompt.id), "user_id": str(user_id), "prompt_model": config.model},
        )
        return PromptCreated(status=200, prompt_data=PromptData(prompt_id=prompt.id))

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def list_prompts(self, user_id: UUID) -> list[PromptSummary]:
        """Prompts owned by the user that are neither deleted nor hidden."""
        rows = await self.prompts.get_listed_for_user(user_id)
        return [PromptSummary(id=prompt_id, name=name) for prompt_id, name in rows]

    async def prompt_exists(self, prompt_id: UUID) -> Prompt | None:
        """The prompt if it exists and is not deleted, else None."""
        return await self.prompts.get_active(prompt_id)

    async def get_prompt_or_raise(self, prompt_id: UUID) -> Prompt:
        prompt = await self.prompts.get_active(prompt_id)
        if prompt is None:
            raise NotFoundError(f"Prompt with ID {prompt_id} not found", fields=["prompt_id"])
        return prompt

    async def is_owner(self, prompt_id: UUID, user_id: UUID) -> bool:
        return await self.owners.is_owner(prompt_id, user_id)

    async def list_messages(self, prompt_id: UUID, query: Mapping[str, Any] | None = None) -> list[MessageView]:
        """
        Messages of a prompt, paged by `query` (ordering/limit/offset/page,
        see utils.pagination). Rows follow conversation order in the requested
        direction; `MessageView.id` is the Message id.
        """
        page = page_parser(query)
        rows = await self.messages.get_prompt_messages(
            prompt_id, ordering=page.ordering, offset=page.offset, limit=page.limit
        )
        return [MessageView(content=message.content, id=message.id) for _, message in rows]

    async def get_prompt_cost(self, prompt_id: UUID) -> PromptCostView:
        """
        Raises:
            MissingCostRecordError: If the prompt has no cost record.
        """
        record = await self.costs.get_by_prompt_or_raise(prompt_id)
        return PromptCostView.model_validate(record)

    # =================================================================================================================
    # Soft-state updates
    # =================================================================================================================

    async def delete_prompt(self, prompt_id: UUID) -> None:
        """
        Soft-delete a prompt. Its rows stay; it disappears from every lookup.

        Raises:
            NotFoundError: If no active prompt has this id.
        """
        prompt = await self.prompts.soft_delete(prompt_id)
        if prompt is None:
            raise NotFoundError(f"Prompt with ID {prompt_id} not found", fields=["prompt_id"])
        await self.session.commit()
        logger.info("prompt.delete.success", extra={"prompt_id": str(prompt_id)})

    async def set_visibility(self, prompt_id: UUID, visible: bool) -> Prompt:
        """
        Raises:
            NotFoundError: If no active prompt has this id.
        """
        prompt = await self.prompts.set_visibility(prompt_id, visible)
        if prompt is None:
            raise NotFoundError(f"Prompt with ID {prompt_id} not found", fields=["prompt_id"])
        await self.session.commit()
        logger.info("prompt.visibility.updated", extra={"prompt_id": str(prompt_id), "is_visible": visible})
        return prompt

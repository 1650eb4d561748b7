"""
Chat orchestration: one user message in, one provider reply out.
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from chatprompt.models.message import MessageRole
from chatprompt.providers.registry import ProviderRegistry
from chatprompt.repositories.message_repository import MessageRepository
from chatprompt.repositories.prompt_cost_repository import PromptCostRepository
from chatprompt.schemas.chat import (
    AiRequestConfig,
    ChatMessage,
    SendMessageRequest,
    SendMessageResult,
)
from .history import load_history

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 2


class ChatService:
    """
    Runs the send-message recipe against one session.

    The steps are strictly sequential and each persistence step commits on
    its own. There is no compensation: if a later step fails, what earlier
    steps committed stays. In particular a provider failure leaves the
    database untouched, a failure after the user message is stored leaves
    that message without a reply, and a missing cost record leaves both
    messages stored with totals unchanged.
    """

    def __init__(
        self,
        session: AsyncSession,
        registry: ProviderRegistry,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ):
        self.session = session
        self.registry = registry
        self.history_window = history_window
        self.messages = MessageRepository(session)
        self.costs = PromptCostRepository(session)

    async def build_context(self, body: SendMessageRequest) -> list[ChatMessage]:
        """Recent history followed by the new user message."""
        history = await load_history(self.messages, body.prompt_id, self.history_window)
        return [*history, ChatMessage(role=MessageRole.USER, content=body.message)]

    async def send_message(self, config: AiRequestConfig, body: SendMessageRequest) -> SendMessageResult:
        """
        Send `body.message` to the configured provider in the context of
        `body.prompt_id` and persist the exchange.

        Steps:
            1. load the last `history_window` messages (chronological)
            2. append the new user message
            3. dispatch to the provider
            4. store the user message (token_cost = input tokens), commit
            5. store the reply (token_cost = output tokens), commit
            6. add both counts to the prompt's cost totals, commit
            7. return the reply text

        The caller is expected to have checked that the prompt exists and
        belongs to the user.

        Raises:
            UnknownProviderError: `config.provider` is not registered (nothing written).
            ProviderError: the backend call failed (nothing written).
            MissingCostRecordError: the prompt has no cost row (both messages written).
            RepositoryError: a database write failed.
        """
        prompt_id = body.prompt_id
        start = time.perf_counter()
        log_ctx = {"prompt_id": str(prompt_id), "provider": config.provider, "model": config.model}

        logger.info("chat.send.start", extra=log_ctx)

        context = await self.build_context(body)
        logger.debug("chat.send.context_built", extra={**log_ctx, "messages_count": len(context)})

        reply = await self.registry.send(config, context)

        await self.messages.append_to_prompt(
            prompt_id, MessageRole.USER, body.message, token_cost=reply.input_tokens
        )
        await self.session.commit()
        logger.debug("chat.send.user_message_saved", extra=log_ctx)

        await self.messages.append_to_prompt(
            prompt_id, reply.role, reply.content, token_cost=reply.output_tokens
        )
        await self.session.commit()
        logger.debug("chat.send.reply_saved", extra=log_ctx)

        await self.costs.increment(prompt_id, reply.input_tokens, reply.output_tokens)
        await self.session.commit()

        logger.info(
            "chat.send.success",
            extra={
                **log_ctx,
                "input_tokens": reply.input_tokens,
                "output_tokens": reply.output_tokens,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return SendMessageResult(content=reply.content)

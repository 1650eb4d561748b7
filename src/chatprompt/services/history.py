"""
Conversation history loading for provider calls.
"""

from uuid import UUID
import logging

from chatprompt.repositories.message_repository import MessageRepository
from chatprompt.schemas.chat import ChatMessage

logger = logging.getLogger(__name__)


async def load_history(
    message_repository: MessageRepository,
    prompt_id: UUID,
    window: int,
) -> list[ChatMessage]:
    """
    Return the `window` most recent messages of a prompt, oldest first.

    The newest rows are selected with `ORDER BY PromptMessage.id DESC LIMIT
    window` and then reversed, so the result is a chronological tail of the
    conversation. A non-positive window returns [] without querying.
    """
    if window <= 0:
        return []

    rows = await message_repository.get_prompt_messages(prompt_id, ordering="DESC", limit=window)
    history = [ChatMessage(role=message.role, content=message.content) for _, message in reversed(rows)]

    logger.debug(
        "history.loaded",
        extra={"prompt_id": str(prompt_id), "window": window, "messages_count": len(history)},
    )
    return history

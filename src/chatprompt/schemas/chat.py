"""
DTOs exchanged with AI providers and the chat orchestrator.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from chatprompt.models.message import MessageRole


class ChatMessage(BaseModel):
    """One turn of a conversation as sent to a provider."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str


class ProviderReply(BaseModel):
    """
    Normalised provider response.

    `input_tokens` is what the provider billed for the whole context it
    received; `output_tokens` is what it billed for `content`.
    """

    content: str
    role: MessageRole = MessageRole.ASSISTANT
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)


class AiRequestConfig(BaseModel):
    """Which backend and model to call, plus optional sampling parameters."""

    provider: str
    model: str
    temperature: float | None = None
    max_tokens: int | None = Field(default=None, gt=0)


class SendMessageRequest(BaseModel):
    message: str
    prompt_id: UUID


class SendMessageResult(BaseModel):
    content: str

"""
OpenAI chat completions backend.
"""

import logging

import httpx

from chatprompt.models.message import MessageRole
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage, ProviderReply
from .base import HttpProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(HttpProvider):
    """OpenAI API provider (`POST /chat/completions`)."""

    name = "openAI"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openai.com/v1",
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, base_url, timeout_seconds, client)

    def build_payload(self, config: AiRequestConfig, messages: list[ChatMessage]) -> dict:
        payload = {
            "model": config.model,
            "messages": [{"role": m.role.value, "content": m.content} for m in messages],
        }
        if config.temperature is not None:
            payload["temperature"] = config.temperature
        if config.max_tokens is not None:
            payload["max_completion_tokens"] = config.max_tokens
        return payload

    async def generate(self, config: AiRequestConfig, messages: list[ChatMessage]) -> ProviderReply:
        api_key = self._require_api_key()
        payload = self.build_payload(config, messages)
        logger.debug(f"OpenAI request: model={config.model}, messages_count={len(messages)}")

        data = await self._post_json(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            payload=payload,
        )

        choices = data.get("choices") or []
        if not choices or not isinstance(choices[0].get("message"), dict):
            raise self._malformed("choices[0].message")

        message = choices[0]["message"]
        usage = data.get("usage") or {}
        try:
            role = MessageRole(message.get("role") or MessageRole.ASSISTANT.value)
        except ValueError:
            role = MessageRole.ASSISTANT

        return ProviderReply(
            content=message.get("content") or "",
            role=role,
            input_tokens=int(usage.get("prompt_tokens") or 0),
            output_tokens=int(usage.get("completion_tokens") or 0),
        )

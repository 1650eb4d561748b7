"""
Anthropic Messages API backend.

Anthropic takes system instructions as a top-level `system` string rather
than a message, requires `max_tokens`, and returns content as a list of typed
blocks. The adapter hides those differences behind the common Provider shape.
"""

import logging

import httpx

from chatprompt.models.message import MessageRole
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage, ProviderReply
from .base import HttpProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(HttpProvider):
    """Anthropic API provider (`POST /v1/messages`)."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        default_max_tokens: int = 1024,
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, base_url, timeout_seconds, client)
        self.api_version = api_version
        self.default_max_tokens = default_max_tokens

    def build_payload(self, config: AiRequestConfig, messages: list[ChatMessage]) -> dict:
        system_parts = [m.content for m in messages if m.role is MessageRole.SYSTEM]
        turns = [
            {"role": m.role.value, "content": m.content}
            for m in messages
            if m.role is not MessageRole.SYSTEM
        ]

        payload = {
            "model": config.model,
            "max_tokens": config.max_tokens or self.default_max_tokens,
            "messages": turns,
        }
        if system_parts:
            payload["system"] = "\n\n".join(system_parts)
        if config.temperature is not None:
            payload["temperature"] = config.temperature
        return payload

    async def generate(self, config: AiRequestConfig, messages: list[ChatMessage]) -> ProviderReply:
        api_key = self._require_api_key()
        payload = self.build_payload(config, messages)
        logger.debug(f"Anthropic request: model={config.model}, messages_count={len(payload['messages'])}")

        data = await self._post_json(
            f"{self.base_url}/v1/messages",
            headers={
                "x-api-key": api_key,
                "anthropic-version": self.api_version,
                "content-type": "application/json",
            },
            payload=payload,
        )

        blocks = data.get("content")
        if not isinstance(blocks, list):
            raise self._malformed("content")

        text = "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )
        usage = data.get("usage") or {}

        return ProviderReply(
            content=text,
            role=MessageRole.ASSISTANT,
            input_tokens=int(usage.get("input_tokens") or 0),
            output_tokens=int(usage.get("output_tokens") or 0),
        )

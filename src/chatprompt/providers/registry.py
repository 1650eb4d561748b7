"""
Provider registry: maps provider identifiers to Provider instances.

The registry is a plain object built once at startup and passed to the
services that need it; there is no module-level global.
"""

import logging
import time

from chatprompt.config import Settings
from chatprompt.exceptions.provider import ProviderError, UnknownProviderError
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage, ProviderReply
from .base import Provider
from .openai import OpenAIProvider
from .anthropic import AnthropicProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(self):
        self._providers: dict[str, Provider] = {}

    def register(self, name: str, provider: Provider) -> None:
        """Register `provider` under `name`, replacing any earlier entry."""
        if name in self._providers:
            logger.warning("provider.registry.replaced", extra={"provider": name})
        self._providers[name] = provider

    def get(self, name: str) -> Provider:
        """
        Raises:
            UnknownProviderError: If nothing is registered under `name`.
        """
        try:
            return self._providers[name]
        except KeyError:
            raise UnknownProviderError(name, available=self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    async def send(self, config: AiRequestConfig, messages: list[ChatMessage]) -> ProviderReply:
        """
        Dispatch `messages` to the provider named in `config`.

        Single attempt, no retry. Provider failures surface as ProviderError
        with the original exception chained.

        Raises:
            UnknownProviderError: If `config.provider` is not registered.
            ProviderError: If the backend call fails.
        """
        provider = self.get(config.provider)
        start = time.perf_counter()

        logger.info(
            "provider.send.start",
            extra={"provider": config.provider, "model": config.model, "messages_count": len(messages)},
        )

        try:
            reply = await provider.generate(config, messages)
        except ProviderError:
            raise
        except Exception as e:
            logger.exception("provider.send.unexpected_error", extra={"provider": config.provider})
            raise ProviderError(f"{config.provider} call failed", provider=config.provider) from e

        logger.info(
            "provider.send.success",
            extra={
                "provider": config.provider,
                "model": config.model,
                "input_tokens": reply.input_tokens,
                "output_tokens": reply.output_tokens,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return reply


def build_default_registry(settings: Settings) -> ProviderRegistry:
    """Registry with the OpenAI and Anthropic backends configured from settings."""
    registry = ProviderRegistry()
    registry.register(
        "openAI",
        OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
        ),
    )
    registry.register(
        "anthropic",
        AnthropicProvider(
            api_key=settings.ANTHROPIC_API_KEY,
            base_url=settings.ANTHROPIC_BASE_URL,
            api_version=settings.ANTHROPIC_VERSION,
            default_max_tokens=settings.ANTHROPIC_MAX_TOKENS,
            timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
        ),
    )
    return registry

"""
Wiring helpers: build services from a session and the process-wide settings.

    async for session in get_async_session():
        chat = get_chat_service(session)
        await chat.send_message(config, body)
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from chatprompt.config import Settings, get_settings
from chatprompt.providers.registry import ProviderRegistry, build_default_registry
from chatprompt.schemas.chat import AiRequestConfig
from chatprompt.services.chat_service import ChatService
from chatprompt.services.prompt_service import PromptService


# One registry per process, built from settings on first use.
@lru_cache()
def get_provider_registry() -> ProviderRegistry:
    return build_default_registry(get_settings())


def get_chat_service(session: AsyncSession, registry: ProviderRegistry | None = None) -> ChatService:
    return ChatService(
        session,
        registry or get_provider_registry(),
        history_window=get_settings().HISTORY_WINDOW,
    )


def get_prompt_service(session: AsyncSession) -> PromptService:
    return PromptService(session)


def get_default_ai_config(settings: Settings | None = None) -> AiRequestConfig:
    """Request config for callers that do not pick a provider or model."""
    settings = settings or get_settings()
    return AiRequestConfig(provider=settings.DEFAULT_PROVIDER, model=settings.DEFAULT_MODEL)

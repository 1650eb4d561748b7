import pytest

from chatprompt.config.settings import Settings
from chatprompt.exceptions.provider import ProviderError, UnknownProviderError
from chatprompt.models.message import MessageRole
from chatprompt.providers.anthropic import AnthropicProvider
from chatprompt.providers.openai import OpenAIProvider
from chatprompt.providers.registry import ProviderRegistry, build_default_registry
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage

from ..test_fixtures.service_fixtures import FakeProvider


class TestProviderRegistryLookup:

    def test_register_and_get(self):
        registry = ProviderRegistry()
        provider = FakeProvider()

        registry.register("openAI", provider)

        assert registry.get("openAI") is provider
        assert "openAI" in registry
        assert "anthropic" not in registry

    def test_unknown_provider_lists_available(self):
        registry = ProviderRegistry()
        registry.register("openAI", FakeProvider())
        registry.register("anthropic", FakeProvider())

        with pytest.raises(UnknownProviderError) as exc_info:
            registry.get("mistral")

        assert exc_info.value.provider == "mistral"
        assert exc_info.value.available == ["anthropic", "openAI"]
        assert exc_info.value.to_payload()["code"] == "unknown_provider"

    def test_register_replaces_existing(self):
        registry = ProviderRegistry()
        first, second = FakeProvider(), FakeProvider()

        registry.register("openAI", first)
        registry.register("openAI", second)

        assert registry.get("openAI") is second
        assert registry.names() == ["openAI"]

    def test_build_default_registry(self):
        settings = Settings(OPENAI_API_KEY="sk-test", ANTHROPIC_API_KEY="ak-test")

        registry = build_default_registry(settings)

        assert registry.names() == ["anthropic", "openAI"]
        assert isinstance(registry.get("openAI"), OpenAIProvider)
        assert isinstance(registry.get("anthropic"), AnthropicProvider)


@pytest.mark.asyncio
class TestProviderRegistrySend:

    async def test_send_returns_provider_reply(self):
        registry = ProviderRegistry()
        provider = FakeProvider(content="pong", input_tokens=1, output_tokens=2)
        registry.register("openAI", provider)
        messages = [ChatMessage(role=MessageRole.USER, content="ping")]

        reply = await registry.send(AiRequestConfig(provider="openAI", model="gpt-4o-mini"), messages)

        assert reply.content == "pong"
        assert (reply.input_tokens, reply.output_tokens) == (1, 2)
        assert provider.calls[0][1] == messages

    async def test_send_unknown_provider(self):
        with pytest.raises(UnknownProviderError):
            await ProviderRegistry().send(AiRequestConfig(provider="nope", model="x"), [])

    async def test_provider_error_passes_through_unchanged(self):
        registry = ProviderRegistry()
        provider = FakeProvider()
        error = ProviderError("bad gateway", provider="openAI", status_code=502)
        provider.error = error
        registry.register("openAI", provider)

        with pytest.raises(ProviderError) as exc_info:
            await registry.send(AiRequestConfig(provider="openAI", model="m"), [])

        assert exc_info.value is error

    async def test_other_exceptions_are_wrapped_with_cause(self):
        registry = ProviderRegistry()
        provider = FakeProvider()
        provider.error = ValueError("boom")
        registry.register("openAI", provider)

        with pytest.raises(ProviderError) as exc_info:
            await registry.send(AiRequestConfig(provider="openAI", model="m"), [])

        assert exc_info.value.provider == "openAI"
        assert isinstance(exc_info.value.__cause__, ValueError)

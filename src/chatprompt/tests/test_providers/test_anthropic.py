import json

import httpx
import pytest

from chatprompt.exceptions.provider import ProviderError
from chatprompt.models.message import MessageRole
from chatprompt.providers.anthropic import AnthropicProvider
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage

MESSAGES_REPLY = {
    "id": "msg_1",
    "type": "message",
    "role": "assistant",
    "content": [
        {"type": "text", "text": "Day 1: "},
        {"type": "tool_use", "id": "t1", "name": "search", "input": {}},
        {"type": "text", "text": "Colosseum"},
    ],
    "usage": {"input_tokens": 20, "output_tokens": 5},
}


def make_provider(handler, **kwargs) -> AnthropicProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AnthropicProvider(api_key="ak-test", base_url="https://anthropic.test", client=client, **kwargs)


@pytest.mark.asyncio
class TestAnthropicProvider:

    async def test_generate_builds_request_and_parses_reply(self):
        """
        Behavior:
                - System turns move to the top-level `system` field.
                - Auth and version headers are sent; max_tokens falls back to the default.
                - Only text blocks make up the reply content.
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=MESSAGES_REPLY)

        provider = make_provider(handler, default_max_tokens=256)
        messages = [
            ChatMessage(role=MessageRole.SYSTEM, content="You are a travel agent."),
            ChatMessage(role=MessageRole.USER, content="Plan Rome"),
        ]

        reply = await provider.generate(AiRequestConfig(provider="anthropic", model="claude-x"), messages)

        assert seen["url"] == "https://anthropic.test/v1/messages"
        assert seen["headers"]["x-api-key"] == "ak-test"
        assert seen["headers"]["anthropic-version"] == "2023-06-01"
        assert seen["body"]["system"] == "You are a travel agent."
        assert seen["body"]["messages"] == [{"role": "user", "content": "Plan Rome"}]
        assert seen["body"]["max_tokens"] == 256

        assert reply.content == "Day 1: Colosseum"
        assert reply.role is MessageRole.ASSISTANT
        assert (reply.input_tokens, reply.output_tokens) == (20, 5)

    async def test_explicit_max_tokens_wins(self):
        provider = AnthropicProvider(api_key="k", default_max_tokens=256)

        payload = provider.build_payload(
            AiRequestConfig(provider="anthropic", model="m", max_tokens=32),
            [ChatMessage(role=MessageRole.USER, content="hi")],
        )

        assert payload["max_tokens"] == 32
        assert "system" not in payload

    async def test_http_error(self):
        provider = make_provider(lambda request: httpx.Response(529, json={"type": "error"}))

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate(
                AiRequestConfig(provider="anthropic", model="m"),
                [ChatMessage(role=MessageRole.USER, content="hi")],
            )

        assert exc_info.value.status_code == 529
        assert exc_info.value.http_status() == 502

    async def test_missing_content_is_malformed(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"usage": {}}))

        with pytest.raises(ProviderError):
            await provider.generate(
                AiRequestConfig(provider="anthropic", model="m"),
                [ChatMessage(role=MessageRole.USER, content="hi")],
            )

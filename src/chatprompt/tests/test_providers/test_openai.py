import json

import httpx
import pytest

from chatprompt.exceptions.provider import ProviderError
from chatprompt.models.message import MessageRole
from chatprompt.providers.openai import OpenAIProvider
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage

CONVERSATION = [
    ChatMessage(role=MessageRole.USER, content="Plan a 3-day trip to Rome"),
    ChatMessage(role=MessageRole.ASSISTANT, content="Day 1: Colosseum"),
    ChatMessage(role=MessageRole.USER, content="Add Florence"),
]

COMPLETION = {
    "id": "chatcmpl-1",
    "model": "gpt-4o-mini",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "Day 4: Uffizi"}}],
    "usage": {"prompt_tokens": 42, "completion_tokens": 7, "total_tokens": 49},
}


def make_provider(handler, api_key: str | None = "sk-test") -> OpenAIProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIProvider(api_key=api_key, base_url="https://api.test/v1/", client=client)


@pytest.mark.asyncio
class TestOpenAIProvider:

    async def test_generate_builds_request_and_parses_reply(self):
        """
        Behavior:
                - The request goes to {base}/chat/completions with bearer auth and
                  the messages in order.
                - Reply content and token usage come back normalised.
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=COMPLETION)

        provider = make_provider(handler)
        config = AiRequestConfig(provider="openAI", model="gpt-4o-mini", temperature=0.3, max_tokens=100)

        reply = await provider.generate(config, CONVERSATION)

        assert seen["url"] == "https://api.test/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["temperature"] == 0.3
        assert seen["body"]["max_completion_tokens"] == 100
        assert [m["role"] for m in seen["body"]["messages"]] == ["user", "assistant", "user"]

        assert reply.content == "Day 4: Uffizi"
        assert reply.role is MessageRole.ASSISTANT
        assert (reply.input_tokens, reply.output_tokens) == (42, 7)

    async def test_optional_parameters_are_omitted(self):
        provider = OpenAIProvider(api_key="k")

        payload = provider.build_payload(AiRequestConfig(provider="openAI", model="gpt-4o"), CONVERSATION)

        assert "temperature" not in payload
        assert "max_completion_tokens" not in payload

    async def test_missing_usage_counts_as_zero(self):
        body = {"choices": [{"message": {"role": "assistant", "content": "ok"}}]}
        provider = make_provider(lambda request: httpx.Response(200, json=body))

        reply = await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

        assert (reply.input_tokens, reply.output_tokens) == (0, 0)

    async def test_http_error_raises_provider_error_with_status(self):
        provider = make_provider(lambda request: httpx.Response(429, json={"error": {"message": "slow down"}}))

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

        assert exc_info.value.status_code == 429
        assert exc_info.value.provider == "openAI"

    async def test_transport_error_is_chained(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    async def test_malformed_body(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"choices": []}))

        with pytest.raises(ProviderError):
            await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

    async def test_non_json_body(self):
        provider = make_provider(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(ProviderError):
            await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

    async def test_missing_api_key_fails_before_any_request(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=COMPLETION)

        provider = make_provider(handler, api_key=None)

        with pytest.raises(ProviderError):
            await provider.generate(AiRequestConfig(provider="openAI", model="m"), CONVERSATION)

        assert calls == []

"""
Provider interface and the HTTP plumbing shared by the concrete backends.
"""

from abc import ABC, abstractmethod
import logging

import httpx

from chatprompt.exceptions.provider import ProviderError
from chatprompt.schemas.chat import AiRequestConfig, ChatMessage, ProviderReply

logger = logging.getLogger(__name__)


class Provider(ABC):
    """Abstract base class for AI backends."""

    #: identifier used in logs and errors
    name: str = "provider"

    @abstractmethod
    async def generate(self, config: AiRequestConfig, messages: list[ChatMessage]) -> ProviderReply:
        """Send the ordered conversation and return the normalised reply."""


class HttpProvider(Provider):
    """
    Provider speaking JSON over HTTP through `httpx.AsyncClient`.

    A client may be injected (shared connection pool, or `httpx.MockTransport`
    in tests). Without one, a short-lived client is opened per call.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ProviderError(f"{self.name} API key is not configured", provider=self.name)
        return self.api_key

    async def _post_json(self, url: str, headers: dict, payload: dict) -> dict:
        """
        POST `payload` and return the decoded JSON body.

        Raises:
            ProviderError: on transport errors, non-2xx statuses and bodies
                that are not a JSON object.
        """
        try:
            if self._client is not None:
                response = await self._client.post(url, headers=headers, json=payload, timeout=self.timeout_seconds)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.warning(
                "provider.transport_error",
                extra={"provider": self.name, "error_type": type(e).__name__},
            )
            raise ProviderError(f"{self.name} request failed: {type(e).__name__}", provider=self.name) from e

        logger.debug(
            "provider.response",
            extra={"provider": self.name, "status_code": response.status_code},
        )

        if not response.is_success:
            logger.error(
                "provider.http_error",
                extra={"provider": self.name, "status_code": response.status_code, "body": response.text[:500]},
            )
            raise ProviderError(
                f"{self.name} API error: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.name} returned a non-JSON body", provider=self.name, status_code=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                f"{self.name} returned an unexpected body", provider=self.name, status_code=response.status_code
            )
        return data

    def _malformed(self, what: str) -> ProviderError:
        logger.error("provider.malformed_reply", extra={"provider": self.name, "missing": what})
        return ProviderError(f"{self.name} reply is missing {what}", provider=self.name, status_code=200)

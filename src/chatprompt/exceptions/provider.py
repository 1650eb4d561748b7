"""
Exceptions raised by the provider registry and the provider integrations.

They mirror the RepositoryError surface (message, error_code, to_payload(),
http_status()) so callers can handle both families the same way.
"""


class ProviderError(Exception):
    """
    An AI backend call failed (network, auth, rate limit, malformed reply).

    The original exception, when there is one, is chained via `raise ... from`.
    `status_code` is the backend's HTTP status when a response was received.
    """

    error_code = "provider_error"
    default_status = 502

    def __init__(self, message: str, *, provider: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        parts = []
        if self.provider:
            parts.append(f"provider: {self.provider}")
        if self.status_code is not None:
            parts.append(f"status: {self.status_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        payload = {"detail": self.message, "code": self.error_code}
        if self.provider:
            payload["provider"] = self.provider
        return payload

    def http_status(self) -> int:
        return self.default_status


class UnknownProviderError(ProviderError):
    """The requested provider identifier is not registered."""

    error_code = "unknown_provider"
    default_status = 400

    def __init__(self, provider: str, available: list[str] | None = None):
        available = sorted(available or [])
        message = f"Unknown AI provider '{provider}'"
        if available:
            message += f"; available: {', '.join(available)}"
        super().__init__(message, provider=provider)
        self.available = available


__all__ = ["ProviderError", "UnknownProviderError"]

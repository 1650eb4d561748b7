"""
App-level exceptions for persistence and dispatch operations.

Every public error exposes the same small surface so an outer layer (HTTP,
CLI, worker) can turn it into a response without knowing where it came from:

    - message:    human-friendly text, safe to show to clients
    - fields:     optional field names related to the error
    - constraint: optional DB constraint name (kept for logs, never in payloads)
    - error_code: canonical short code used by clients
    - to_payload() / http_status()
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "duplicate": 409,
        "invalid_field": 422,
        "not_found": 404,
        "invalid_input": 422,
        "missing_cost_record": 500,
        # fallback: default to 400 for general repository errors
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

            {
                "detail": "A human-friendly message",
                "code": "duplicate",           # optional canonical code
                "fields": ["name"],            # optional list for client usage
            }

        `constraint` is deliberately left out of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        HTTP status for this error: looked up from `error_code`, 400 otherwise.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class MissingCostRecordError(RepositoryError):
    """
    A prompt has no PromptCost row.

    This is a data-integrity gap (a prompt created without its cost record),
    so it maps to a server error rather than a client one.
    """

    def __init__(self, prompt_id, message: str | None = None):
        super().__init__(
            message or f"No cost record exists for prompt {prompt_id}",
            fields=["prompt_id"],
            error_code="missing_cost_record",
        )
        self.prompt_id = prompt_id


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "MissingCostRecordError",
]

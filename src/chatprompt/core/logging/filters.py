"""
Logging filters.

RequestIdFilter attaches a correlation id to every record. The id lives in a
`contextvars.ContextVar`, so it follows a logical operation across `await`
boundaries and is isolated between concurrently running tasks. Whoever starts
a unit of work (an HTTP handler, a worker job, a CLI command) calls
`set_request_id(...)`; every log line emitted inside that context then carries
the id. Records without one get the sentinel "-", so format strings that
reference `%(request_id)s` never fail.

RedactFilter masks sensitive `extra` fields (API keys, auth headers, tokens)
before a record reaches any handler.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: pass it to reset_request_id(token) to restore the previous value
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id` exists.

    Precedence: an explicit `extra={"request_id": ...}`, then the contextvar,
    then "-". Always returns True; it annotates, it never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Replace the value of any sensitive `extra` key with a placeholder."""

    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "api_key",
        "x-api-key",
        "x_api_key",
        "authorization",
    }
    PLACEHOLDER = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.PLACEHOLDER
        return True

"""
Request ID context for log correlation.

The ID comes from the caller's ``X-Request-ID`` header when it is safe to echo
back, otherwise a fresh one is generated. ``CorrelationLogFilter`` stamps it
on every log record emitted while the request is in flight, including those
from the Access Objects.
"""

import logging
import re
import uuid
from contextvars import ContextVar

# Unset outside a request
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# Caller-supplied IDs end up in headers and log lines
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def get_request_id() -> str | None:
    return request_id_var.get()


def set_request_id(request_id: str) -> str:
    request_id_var.set(request_id)
    return request_id


def generate_request_id() -> str:
    return uuid.uuid4().hex


def resolve_request_id(candidate: str | None) -> str:
    """Return ``candidate`` if it is a safe request ID, else a new one."""
    if candidate and _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return generate_request_id()


class CorrelationLogFilter(logging.Filter):
    """Adds ``record.request_id`` ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


__all__ = [
    "CorrelationLogFilter",
    "generate_request_id",
    "get_request_id",
    "request_id_var",
    "resolve_request_id",
    "set_request_id",
]

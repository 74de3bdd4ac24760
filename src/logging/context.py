# src/logging/context.py — v2
"""Contextual logging support — attach user_id, request_id, operation to log records.

Context variables follow the asyncio task that set them, so coalesced
callers keep their own request context while sharing one provider call.
"""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_user_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "user_id", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    user_id: str | None = None
    request_id: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        user_id=_user_id.get(),
        request_id=_request_id.get(),
        operation=_operation.get(),
    )


def set_request_context(user_id: str, request_id: str | None = None) -> str:
    """Set request-level context. Returns the request id in effect."""
    request_id = request_id or uuid.uuid4().hex[:12]
    _user_id.set(user_id)
    _request_id.set(request_id)
    return request_id


def set_operation(operation: str | None) -> None:
    """Set the operation name (analyze, reference_match, ...)."""
    _operation.set(operation)


@contextmanager
def operation_context(operation: str) -> Iterator[None]:
    """Scope an operation name to a block, restoring the previous one."""
    token = _operation.set(operation)
    try:
        yield
    finally:
        _operation.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _user_id.set(None)
    _request_id.set(None)
    _operation.set(None)

"""
Correlation ID held in a context variable.

Set by the HTTP middleware per request and by the live websocket per session,
so log lines from concurrent conversations can be told apart.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

from contextvars import ContextVar
import uuid

_current: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind correlation_id, or a fresh UUID4 when none is given, and return it."""
    bound = correlation_id or uuid.uuid4().hex
    _current.set(bound)
    return bound


def get_correlation_id() -> str:
    return _current.get()


def clear_correlation_id() -> None:
    _current.set("")

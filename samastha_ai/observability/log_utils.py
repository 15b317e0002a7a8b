"""
Log-safe rendering of context values.

Conversation and ingestion code attaches queries, embedding vectors, audio
payloads and model responses to log records. These helpers shrink such values
to short summaries and never raise, so a log call cannot break a turn.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

DEFAULT_MAX_LENGTH = 200


def _describe(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    return value if isinstance(value, str) else str(value)


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Render a value for a log record.

    Sequences and mappings collapse to their size (a 768-float vector becomes
    "list(768 items)"); text longer than max_length is cut and annotated with
    its original length.
    """
    if value is None:
        return "None"
    try:
        text = _describe(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def _safe_extra(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Emit message at level with every context value passed through safe_log_value."""
    logger.log(level, message, extra=_safe_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Record a failure at ERROR with its traceback.

    The extra carries error_type and error_msg alongside the caller's context
    so domain errors mapped to HTTP responses stay searchable in the log.
    """
    extra = _safe_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)

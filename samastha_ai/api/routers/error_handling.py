"""
Router error handling.

A decorator that maps domain exceptions to HTTP status codes with a
structured ErrorResponse body, logging each failure with its context.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from samastha_ai.core.exceptions import (
    AssistantException,
    ChunkNotFoundError,
    ConversationNotFoundError,
    DimensionMismatchError,
    DocumentNotFoundError,
    EmbeddingError,
    UnsupportedDocumentTypeError,
    ValidationError,
)
from samastha_ai.models.common import ErrorResponse
from samastha_ai.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_EXCEPTION: list[tuple[type[AssistantException], int]] = [
    (DocumentNotFoundError, status.HTTP_404_NOT_FOUND),
    (ChunkNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConversationNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (UnsupportedDocumentTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (EmbeddingError, status.HTTP_502_BAD_GATEWAY),
    (DimensionMismatchError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: AssistantException) -> int:
    for exc_type, code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: AssistantException) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=status_for(exc), content=body.model_dump())


def handle_domain_errors(func: F) -> F:
    """
    Decorator translating AssistantException subclasses into JSON error responses.

    4xx outcomes are logged as warnings, everything else with a traceback.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AssistantException as e:
            code = status_for(e)
            if code < 500:
                logger.warning(
                    f"{__name__}:{func.__name__} - {type(e).__name__}: {e.message}",
                    extra={"status_code": code},
                )
            else:
                log_exception_with_context(
                    logger,
                    f"{__name__}:{func.__name__} - {type(e).__name__}",
                    e,
                    status_code=code,
                )
            return error_response(e)

    return wrapper  # type: ignore[return-value]

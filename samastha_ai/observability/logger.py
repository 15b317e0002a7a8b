"""
Root logging setup.

One stdout handler whose lines carry the request or live-session correlation
ID between the level and the message.

Dependencies: logging (stdlib), samastha_ai.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from samastha_ai.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(correlation_id)s] %(message)s"
QUIET_LIBRARIES = ("httpx", "httpcore", "websockets", "google_genai", "uvicorn.access")


class CorrelationIdFilter(logging.Filter):
    """Stamps record.correlation_id, "-" outside any request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Replace root handlers with the correlated stdout handler; idempotent."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

"""
Observability: root logging, correlation IDs and HTTP middleware.
"""

from samastha_ai.observability.correlation import get_correlation_id, set_correlation_id
from samastha_ai.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]

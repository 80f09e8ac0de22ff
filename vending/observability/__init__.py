"""
Observability module - Logging and Metrics.
"""

from vending.observability.logging import get_logger, log_context, setup_logging
from vending.observability.metrics import metrics

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
    "metrics",
]

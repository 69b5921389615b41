"""Utility modules for the API."""

from src.utils.logging import LogContext, get_logger, setup_logging
from src.utils.metrics import MetricsMiddleware, metrics
from src.utils.pagination import Page, paginate

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Metrics
    "metrics",
    "MetricsMiddleware",
    # Pagination
    "Page",
    "paginate",
]

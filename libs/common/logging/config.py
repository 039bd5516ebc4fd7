"""Logging configuration for the order signer gateway.

Example:
    >>> from libs.common.logging.config import configure_logging
    >>> logger = configure_logging(service_name="order_signer", log_level="INFO")
    >>> logger.info("Service started", extra={"context": {"port": 3000}})
"""

import logging
import sys
from typing import Optional

from libs.common.logging.context import get_trace_id
from libs.common.logging.formatter import JSONFormatter


class TraceIDFilter(logging.Filter):
    """Logging filter that stamps the current trace id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    include_context: bool = True,
) -> logging.Logger:
    """Configure structured JSON logging on the root logger.

    Replaces any existing root handlers with a single stdout handler using
    JSONFormatter and TraceIDFilter. Call once at service startup.

    Args:
        service_name: Name of the service (e.g., "order_signer")
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_context: Whether to include context dict in output

    Returns:
        Configured root logger instance

    Raises:
        ValueError: If log_level is invalid
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JSONFormatter(
            service_name=service_name,
            include_context=include_context,
        )
    )
    handler.addFilter(TraceIDFilter())

    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger by name (root logger when name is None)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context_fields: object,
) -> None:
    """Log a message with additional context fields.

    Context fields appear under the "context" key of the JSON output.

    Example:
        >>> log_with_context(logger, "INFO", "Order relayed", status=200, token_id="123")
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra={"context": context_fields})

"""Structured logging for the order signer gateway.

JSON log lines on stdout, with a per-request trace id that is propagated to
the relay target and echoed back to the caller.

Usage:
    # At service startup
    from libs.common.logging import configure_logging
    configure_logging(service_name="order_signer", log_level="INFO")

    # In request handlers
    from libs.common.logging import get_logger, log_with_context
    logger = get_logger(__name__)
    log_with_context(logger, "INFO", "Order signed", token_id="123", side="BUY")
"""

from libs.common.logging.config import (
    configure_logging,
    get_logger,
    log_with_context,
)
from libs.common.logging.context import (
    TRACE_ID_HEADER,
    clear_trace_id,
    generate_trace_id,
    get_trace_id,
    set_trace_id,
)
from libs.common.logging.formatter import JSONFormatter

__all__ = [
    "configure_logging",
    "get_logger",
    "log_with_context",
    "generate_trace_id",
    "get_trace_id",
    "set_trace_id",
    "clear_trace_id",
    "TRACE_ID_HEADER",
    "JSONFormatter",
]

"""Trace ID context propagation.

Each HTTP request gets a trace id (taken from the X-Trace-ID header or freshly
generated). It lives in a context variable so every log line emitted while
handling that request, and the outgoing relay call, carry the same id.

Example:
    >>> trace_id = generate_trace_id()
    >>> set_trace_id(trace_id)
    >>> get_trace_id() == trace_id
    True
"""

import contextvars
import uuid

_trace_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

TRACE_ID_HEADER = "X-Trace-ID"


def generate_trace_id() -> str:
    """Generate a new UUID4 trace id."""
    return str(uuid.uuid4())


def get_trace_id() -> str | None:
    """Get the trace id of the current context, or None if unset."""
    return _trace_id_var.get()


def set_trace_id(trace_id: str) -> None:
    """Set the trace id for the current context.

    Args:
        trace_id: The trace ID to set

    Raises:
        ValueError: If trace_id is empty
    """
    if not trace_id:
        raise ValueError("Trace ID cannot be empty")
    _trace_id_var.set(trace_id)


def clear_trace_id() -> None:
    """Clear the trace id from the current context."""
    _trace_id_var.set(None)

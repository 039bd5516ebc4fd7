"""ASGI middleware for trace ID extraction and injection.

Example:
    >>> from fastapi import FastAPI
    >>> from libs.common.logging.middleware import add_trace_id_middleware
    >>>
    >>> app = FastAPI()
    >>> add_trace_id_middleware(app)
"""

from typing import Callable

from fastapi import FastAPI
from starlette.types import ASGIApp

from libs.common.logging.context import (
    TRACE_ID_HEADER,
    clear_trace_id,
    generate_trace_id,
    set_trace_id,
)


def add_trace_id_middleware(app: FastAPI) -> None:
    """Install ASGITraceIDMiddleware on a FastAPI application.

    Call this after every other middleware has been added so the trace id is
    set before authentication runs and is present on every response,
    including 401s and responses relayed verbatim from the worker.
    """
    app.add_middleware(ASGITraceIDMiddleware)


def _decode_trace_id(raw: bytes) -> str | None:
    """Return the incoming trace id, or None when it is not plain ASCII.

    The id is echoed in response headers and forwarded on outgoing calls,
    both of which only carry ASCII reliably.
    """
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError:
        return None


class ASGITraceIDMiddleware:
    """Raw ASGI middleware managing the request trace id.

    Takes the id from the X-Trace-ID request header (or generates one), keeps
    it in the logging context for the duration of the request and appends it
    to the response headers. Status, body and other headers pass through
    untouched.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        trace_id_bytes = headers.get(TRACE_ID_HEADER.lower().encode())
        trace_id = _decode_trace_id(trace_id_bytes) if trace_id_bytes else None
        if trace_id is None:
            trace_id = generate_trace_id()

        set_trace_id(trace_id)
        # Exposed as request.state.trace_id for handlers running outside this middleware.
        scope.setdefault("state", {})["trace_id"] = trace_id

        async def send_with_trace_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((TRACE_ID_HEADER.lower().encode(), trace_id.encode()))
                message["headers"] = response_headers

            await send(message)

        try:
            await self.app(scope, receive, send_with_trace_id)
        finally:
            clear_trace_id()

"""Async HTTP client that forwards the current trace id.

Outgoing calls made while a request is being handled carry the same
X-Trace-ID as the incoming request, so the worker's logs can be joined with
the signer's. The header is stamped by an httpx request event hook, which
runs for every request the client sends, redirects included.

Example:
    >>> async with get_traced_client(timeout=5.0) as client:
    ...     response = await client.post("https://worker.example/relay", json={})
"""

from typing import Any, Optional

import httpx

from libs.common.logging.context import TRACE_ID_HEADER, get_trace_id


async def inject_trace_id(request: httpx.Request) -> None:
    """Request hook: add X-Trace-ID unless the caller already set one."""
    trace_id = get_trace_id()
    if trace_id and TRACE_ID_HEADER not in request.headers:
        request.headers[TRACE_ID_HEADER] = trace_id


class TracedHTTPXClient(httpx.AsyncClient):
    """httpx.AsyncClient with ``inject_trace_id`` installed as the first request hook."""

    def __init__(self, **kwargs: Any) -> None:
        event_hooks = dict(kwargs.pop("event_hooks", None) or {})
        event_hooks["request"] = [inject_trace_id, *event_hooks.get("request", [])]
        super().__init__(event_hooks=event_hooks, **kwargs)


def get_traced_client(
    base_url: Optional[str] = None,
    timeout: float = 10.0,
    **kwargs: Any,
) -> TracedHTTPXClient:
    """Create a traced async HTTP client.

    Args:
        base_url: Base URL for all requests (optional)
        timeout: Request timeout in seconds
        **kwargs: Additional httpx.AsyncClient parameters (e.g. transport)
    """
    if base_url is not None:
        kwargs["base_url"] = base_url
    return TracedHTTPXClient(timeout=timeout, **kwargs)

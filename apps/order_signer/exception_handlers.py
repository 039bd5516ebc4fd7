"""Exception handlers for the Order Signer Gateway.

Converts outcome exceptions and framework errors into the service's JSON
error envelope (``ok: false`` plus an ``error`` string), so no failure ever
produces an empty or ambiguous response.
"""

from __future__ import annotations

from typing import cast

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.order_signer.errors import OrderOutcomeError
from libs.common.logging import TRACE_ID_HEADER, get_logger

logger = get_logger(__name__)


async def order_outcome_handler(request: Request, exc: Exception) -> JSONResponse:
    outcome = cast(OrderOutcomeError, exc)
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_payload())


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"ok": False, "error": str(http_exc.detail)},
        headers=http_exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    # Runs in ServerErrorMiddleware, outside the trace middleware's header injection.
    trace_id = getattr(request.state, "trace_id", None)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "Internal error"},
        headers={TRACE_ID_HEADER: trace_id} if trace_id else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the gateway's exception handlers on an application."""
    app.add_exception_handler(OrderOutcomeError, order_outcome_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""Bearer-token auth gate for the Order Signer Gateway.

Every route except ``/health`` requires ``Authorization: Bearer <token>``
matching SIGNER_TOKEN. The check runs as HTTP middleware, before the request
body is read, so a rejected request never reaches normalization, signing or
the relay.

Security Notes:
    - Only the literal "Bearer " prefix is accepted (case-sensitive)
    - An empty token always fails, whatever the configured secret is
    - Comparison uses hmac.compare_digest (constant time)
    - The presented token is never logged

Usage:
    from apps.order_signer.auth import enforce_bearer_auth

    app.middleware("http")(enforce_bearer_auth)
"""

from __future__ import annotations

import hmac
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from apps.order_signer import metrics
from libs.common.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
PUBLIC_PATHS = frozenset({"/health"})


def extract_bearer_token(header_value: str | None) -> str:
    """
    Extract the token from an Authorization header value.

    Examples:
        >>> extract_bearer_token("Bearer abc123")
        'abc123'

        >>> extract_bearer_token("bearer abc123")
        ''

        >>> extract_bearer_token(None)
        ''
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return ""
    return header_value[len(BEARER_PREFIX) :]


def authorize(header_value: str | None, expected_token: str) -> bool:
    """
    Check an Authorization header against the configured shared secret.

    Args:
        header_value: Raw Authorization header (may be None)
        expected_token: Configured SIGNER_TOKEN

    Returns:
        True only if a non-empty bearer token equals expected_token exactly
    """
    token = extract_bearer_token(header_value)
    if not token or not expected_token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected_token.encode("utf-8"))


def unauthorized_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"ok": False, "error": "Unauthorized"},
    )


async def enforce_bearer_auth(request: Request, call_next: Any) -> Any:
    """Reject any non-public request without a valid bearer token.

    The expected token comes from the settings stored on ``app.state`` at
    startup.

    Args:
        request: Incoming request
        call_next: Next middleware or endpoint handler

    Returns:
        Response from the next handler, or 401 when the token does not match
    """
    if request.url.path in PUBLIC_PATHS:
        return await call_next(request)

    settings = request.app.state.settings
    expected = settings.signer_token.get_secret_value()

    if not authorize(request.headers.get("Authorization"), expected):
        metrics.auth_failures_total.inc()
        logger.warning(
            "Rejected request with missing or invalid bearer token",
            extra={
                "path": request.url.path,
                "method": request.method,
                "has_auth_header": "authorization" in request.headers,
            },
        )
        return unauthorized_response()

    return await call_next(request)

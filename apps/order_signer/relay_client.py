"""
Relay client for forwarding signed orders to the worker.

The worker fronts the exchange's order endpoint. The signer wraps each signed
order in an envelope naming the downstream path and method, POSTs it to the
worker with the worker's own bearer credential and hands back whatever the
worker answered: status, raw body bytes and content type. The relay does not
retry and does not judge downstream status codes; that is the caller's call.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from apps.order_signer import metrics
from apps.order_signer.errors import RelayTransportError
from apps.order_signer.schemas import RelayResponse, SignedOrder
from libs.common.logging import get_logger, log_with_context
from libs.common.logging.http_client import get_traced_client

logger = get_logger(__name__)

RELAY_PATH = "/order"
RELAY_METHOD = "POST"
USER_AGENT = "poly-signer-service/1.0"
DEFAULT_CONTENT_TYPE = "text/plain"


def build_envelope(signed_order: SignedOrder) -> dict[str, Any]:
    """Wrap a signed order in the worker's request envelope."""
    return {"path": RELAY_PATH, "method": RELAY_METHOD, "body": signed_order}


class RelayClient:
    """
    Async HTTP client for the relay target.

    Holds one long-lived traced httpx client (trace id propagated via
    X-Trace-ID). Call ``aclose()`` at shutdown.

    Examples:
        >>> relay = RelayClient("https://worker.example/relay", "worker-token")
        >>> response = await relay.relay(signed_order)
        >>> response.status, response.content_type
        (200, 'application/json')
    """

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._token = token
        self._client = http_client or get_traced_client(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def relay(self, signed_order: SignedOrder) -> RelayResponse:
        """
        POST a signed order to the worker.

        Args:
            signed_order: Signed order, forwarded unmodified inside the envelope

        Returns:
            RelayResponse with the worker's status, raw body and content type

        Raises:
            RelayTransportError: On connect, DNS, timeout or read failures, or
                when the configured URL cannot be parsed
        """
        started = time.monotonic()
        # A malformed URL fails while httpx builds the request, as InvalidURL or ValueError.
        try:
            response = await self._client.post(
                self.url,
                json=build_envelope(signed_order),
                headers=self._headers(),
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error(
                "Relay request failed",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            raise RelayTransportError(str(exc) or type(exc).__name__) from exc
        finally:
            metrics.relay_duration_seconds.observe(time.monotonic() - started)

        metrics.relay_responses_total.labels(status_class=metrics.status_class(response.status_code)).inc()
        result = RelayResponse(
            status=response.status_code,
            body=response.content,
            content_type=response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
        )
        log_with_context(
            logger,
            "INFO",
            "Relay target responded",
            status=result.status,
            content_type=result.content_type,
            body_length=len(result.body),
        )
        return result

    async def aclose(self) -> None:
        await self._client.aclose()

"""
Order pipeline: normalization, signing and relay.

Two operations sit on top of the same stages:

- ``sign_only``: normalize, sign, return the signed order
- ``sign_and_relay``: normalize, sign, relay to the worker, return the
  worker's raw response

Stages run strictly in that order for a request. Failures are raised as
OrderOutcomeError subclasses carrying their HTTP mapping; nothing else
escapes these methods.
"""

from __future__ import annotations

import time
from typing import Any

from apps.order_signer import metrics
from apps.order_signer.errors import (
    InvalidInputError,
    PlaceFailedError,
    RelayNotConfiguredError,
    RelayTransportError,
    SignFailedError,
    describe_exception,
)
from apps.order_signer.normalizer import normalize_order_input
from apps.order_signer.relay_client import RelayClient
from apps.order_signer.schemas import OrderRequest, RelayResponse, SignedOrder
from apps.order_signer.signing import OrderSigner
from libs.common.logging import get_logger, log_with_context

logger = get_logger(__name__)


class _SigningError(Exception):
    """Internal marker wrapping whatever the signing provider raised."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause


class OrderPipeline:
    """
    Composes the normalizer, the signing provider and the optional relay.

    Attributes:
        signer: Signing provider
        relay_client: Relay client, or None when the worker is not configured

    Examples:
        >>> pipeline = OrderPipeline(signer=signer, relay_client=None)
        >>> signed = await pipeline.sign_only({"tokenID": "t1", "price": "0.5", "size": "10"})
    """

    def __init__(self, signer: OrderSigner, relay_client: RelayClient | None = None) -> None:
        self.signer = signer
        self.relay_client = relay_client

    def _normalize(self, raw_body: Any, operation: str) -> OrderRequest:
        errors, order = normalize_order_input(raw_body)
        if errors:
            metrics.requests_total.labels(operation=operation, outcome="invalid_input").inc()
            log_with_context(
                logger,
                "INFO",
                "Rejected order input",
                operation=operation,
                errors=errors,
                partial_order=order.to_payload(),
            )
            raise InvalidInputError(errors)
        return order

    async def _sign(self, order: OrderRequest, operation: str) -> SignedOrder:
        started = time.monotonic()
        try:
            signed_order = await self.signer.sign(order)
        except Exception as exc:
            logger.error(
                "Signing provider failed",
                extra={"operation": operation, "token_id": order.token_id, "error": describe_exception(exc)},
            )
            raise _SigningError(exc) from exc
        finally:
            metrics.sign_duration_seconds.observe(time.monotonic() - started)

        log_with_context(
            logger,
            "INFO",
            "Order signed",
            operation=operation,
            token_id=order.token_id,
            side=order.side,
            price=order.price,
            size=order.size,
        )
        return signed_order

    async def sign_only(self, raw_body: Any) -> SignedOrder:
        """
        Normalize and sign an order. Never contacts the relay target.

        Raises:
            InvalidInputError: Normalization produced errors (nothing signed)
            SignFailedError: The signing provider raised
        """
        order = self._normalize(raw_body, "sign")
        try:
            signed_order = await self._sign(order, "sign")
        except _SigningError as exc:
            metrics.requests_total.labels(operation="sign", outcome="sign_failed").inc()
            raise SignFailedError(describe_exception(exc.cause)) from exc.cause

        metrics.requests_total.labels(operation="sign", outcome="success").inc()
        return signed_order

    async def sign_and_relay(self, raw_body: Any) -> RelayResponse:
        """
        Normalize, sign and relay an order to the worker.

        Returns:
            The worker's response, to be passed back to the caller verbatim

        Raises:
            InvalidInputError: Normalization produced errors (nothing signed)
            RelayNotConfiguredError: No worker configured; carries the signed order
            PlaceFailedError: Signing failed or the relay transport failed
        """
        order = self._normalize(raw_body, "place")
        try:
            signed_order = await self._sign(order, "place")
        except _SigningError as exc:
            metrics.requests_total.labels(operation="place", outcome="place_failed").inc()
            raise PlaceFailedError(describe_exception(exc.cause)) from exc.cause

        if self.relay_client is None:
            metrics.requests_total.labels(operation="place", outcome="not_configured").inc()
            logger.warning("Relay requested but WORKER_URL/WORKER_TOKEN are not configured")
            raise RelayNotConfiguredError(signed_order)

        try:
            response = await self.relay_client.relay(signed_order)
        except RelayTransportError as exc:
            metrics.requests_total.labels(operation="place", outcome="place_failed").inc()
            raise PlaceFailedError(describe_exception(exc.__cause__ or exc)) from exc

        metrics.requests_total.labels(operation="place", outcome="relayed").inc()
        return response

"""
Signing provider capability and its py-clob-client adapter.

The gateway treats signing as an opaque capability: given a canonical
OrderRequest, produce a signed order. ``OrderSigner`` is the protocol the
pipeline depends on; ``ClobOrderSigner`` implements it on top of the
exchange's Python SDK, which holds the private key and knows the order
format and signature scheme.

The SDK call is synchronous and may make HTTP calls of its own (tick size
and market lookups), so it runs in a worker thread to keep the event loop
free.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from py_clob_client.client import ClobClient
from py_clob_client.clob_types import OrderArgs

from apps.order_signer.config import SignerSettings
from apps.order_signer.schemas import OrderRequest, SignedOrder
from libs.common.logging import get_logger

logger = get_logger(__name__)


class OrderSigner(Protocol):
    """Anything that can turn a canonical order into a signed order."""

    async def sign(self, order: OrderRequest) -> SignedOrder:
        """Sign an order. Any exception means the order could not be signed."""
        ...


def build_order_args(order: OrderRequest) -> OrderArgs:
    """
    Convert a canonical order into SDK order arguments.

    Conversion happens here, at the signing boundary, rather than in the
    normalizer: string fields that do not parse raise ValueError, which the
    pipeline reports as a signing failure.
    """
    return OrderArgs(
        token_id=order.token_id,
        price=float(order.price),
        size=float(order.size),
        side=order.side,
        fee_rate_bps=int(order.fee_rate_bps),
        nonce=int(order.nonce) if order.nonce is not None else 0,
        expiration=int(order.expiration) if order.expiration is not None else 0,
    )


class ClobOrderSigner:
    """
    OrderSigner backed by py-clob-client.

    Examples:
        >>> signer = ClobOrderSigner.from_settings(settings)
        >>> signed = await signer.sign(OrderRequest(token_id="t1", price="0.5", size="10"))
        >>> "signature" in signed
        True
    """

    def __init__(self, client: ClobClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: SignerSettings) -> ClobOrderSigner:
        """Create a signer holding the configured key for the configured network."""
        client = ClobClient(
            settings.clob_host,
            chain_id=settings.chain_id,
            key=settings.private_key.get_secret_value(),
        )
        logger.info(
            "Signing client initialized",
            extra={"host": settings.clob_host, "chain_id": settings.chain_id},
        )
        return cls(client)

    async def sign(self, order: OrderRequest) -> SignedOrder:
        order_args = build_order_args(order)
        signed = await asyncio.to_thread(self._client.create_order, order_args)
        return signed.dict()

"""
Data models for the Order Signer Gateway.

OrderRequest is the canonical, normalized order handed to the signer. Its
Python attributes are snake_case; ``to_payload()`` renders the camelCase wire
form, leaving unset optional fields out entirely so "not set" is never
confused with "set to empty or zero".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Opaque signed order artifact as produced by the signing provider.
SignedOrder = dict[str, Any]


class OrderSide(str, Enum):
    """Order side accepted by the signer."""

    BUY = "BUY"
    SELL = "SELL"


class OrderRequest(BaseModel):
    """
    Canonical order request, post-normalization.

    Numeric fields other than ``expiration`` are carried as strings to avoid
    precision loss. ``side`` is a plain string because the normalizer returns
    a best-effort order even when the side is invalid; a side outside
    OrderSide only ever travels alongside a non-empty error list.

    Examples:
        >>> order = OrderRequest(token_id="t1", price="0.5", size="10")
        >>> order.to_payload()
        {'tokenID': 't1', 'price': '0.5', 'size': '10', 'side': 'BUY', 'feeRateBps': '0'}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token_id: str = Field(alias="tokenID")
    price: str
    size: str
    side: str = OrderSide.BUY.value
    fee_rate_bps: str = Field(default="0", alias="feeRateBps")
    expiration: int | float | None = None
    nonce: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire representation with camelCase keys and absent optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class RelayResponse:
    """Raw response from the relay target, passed back to the caller unmodified.

    ``body`` holds the bytes exactly as received; it is never decoded, so a
    declared charset always still describes it.
    """

    status: int
    body: bytes
    content_type: str


class HealthResponse(BaseModel):
    """Unauthenticated health payload."""

    model_config = ConfigDict(populate_by_name=True)

    ok: Literal[True] = True
    host: str
    chain_id: int = Field(alias="chainId")


class SignResponse(BaseModel):
    """Successful /sign payload."""

    model_config = ConfigDict(populate_by_name=True)

    ok: Literal[True] = True
    signed_order: SignedOrder = Field(alias="signedOrder")

"""
Input normalization for untrusted order payloads.

``normalize_order_input`` turns an arbitrary decoded JSON body into a
canonical OrderRequest. Rules are applied independently and every violation
is collected; the function never short-circuits and always returns a
best-effort order next to the error list, so callers can surface the partial
order when debugging a rejected request.

Coercion mirrors how the upstream clients serialize these fields: numeric
values become strings (``0`` -> ``"0"``, ``10.0`` -> ``"10"``), booleans
become ``"true"``/``"false"`` and ``null`` becomes ``"null"``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from apps.order_signer.schemas import OrderRequest, OrderSide

TOKEN_ID_REQUIRED = "tokenID is required"
PRICE_REQUIRED = "price is required"
SIZE_REQUIRED = "size is required"
INVALID_SIDE = "side must be BUY or SELL"
INVALID_EXPIRATION = "expiration must be unix seconds (number)"

_VALID_SIDES = frozenset(side.value for side in OrderSide)


def _is_falsy(value: Any) -> bool:
    """JSON-level falsiness: null, false, 0 and the empty string.

    Empty arrays and objects are *not* falsy here.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    return False


def coerce_to_string(value: Any) -> str:
    """Render a decoded JSON value as the string the signer expects."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return json.dumps(value, separators=(",", ":"))


def coerce_to_number(value: Any) -> float:
    """Convert a decoded JSON value to a number, NaN when not numeric.

    Booleans map to 0/1, null and blank strings to 0, numeric strings are
    parsed after trimming. Containers are not numbers.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return math.nan
        try:
            if text.lower().startswith(("0x", "0o", "0b")):
                return _int_to_float(int(text, 0))
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def normalize_order_input(raw_body: Any) -> tuple[list[str], OrderRequest]:
    """Validate and normalize an order payload.

    Args:
        raw_body: Decoded request body. Anything other than a JSON object is
            treated as an empty object.

    Returns:
        Tuple of (errors, order). ``errors`` is empty when the order may be
        signed. ``order`` is always populated on a best-effort basis: missing
        required fields are carried as empty strings and an invalid side is
        kept as given (upper-cased).

    Examples:
        >>> errors, order = normalize_order_input({"tokenID": "t1", "price": 0, "size": "10"})
        >>> errors
        []
        >>> order.price
        '0'
        >>> errors, order = normalize_order_input({"tokenID": "t1", "price": "1", "size": "1", "side": "hold"})
        >>> errors, order.side
        (['side must be BUY or SELL'], 'HOLD')
    """
    body: Mapping[str, Any] = raw_body if isinstance(raw_body, Mapping) else {}
    errors: list[str] = []

    # Required
    if _is_falsy(body.get("tokenID")):
        errors.append(TOKEN_ID_REQUIRED)
    if "price" not in body:
        errors.append(PRICE_REQUIRED)
    if "size" not in body:
        errors.append(SIZE_REQUIRED)

    fields: dict[str, Any] = {
        "token_id": coerce_to_string(body["tokenID"]) if "tokenID" in body else "",
        "price": coerce_to_string(body["price"]) if "price" in body else "",
        "size": coerce_to_string(body["size"]) if "size" in body else "",
    }

    # Optional, with defaults
    raw_side = body.get("side")
    side = OrderSide.BUY.value if _is_falsy(raw_side) else coerce_to_string(raw_side).upper()
    if side not in _VALID_SIDES:
        errors.append(INVALID_SIDE)
    fields["side"] = side

    fields["fee_rate_bps"] = coerce_to_string(body["feeRateBps"]) if "feeRateBps" in body else "0"

    if "expiration" in body:
        expiration = coerce_to_number(body["expiration"])
        if not math.isfinite(expiration):
            errors.append(INVALID_EXPIRATION)
        else:
            fields["expiration"] = int(expiration) if expiration.is_integer() else expiration

    if "nonce" in body:
        fields["nonce"] = coerce_to_string(body["nonce"])

    return errors, OrderRequest(**fields)

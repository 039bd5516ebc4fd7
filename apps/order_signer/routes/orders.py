"""Order endpoints: sign-only and sign-and-relay.

Both routes accept an arbitrary JSON object of order fields. The body is
read and decoded here rather than through a Pydantic request model, because
validation errors must be accumulated by the normalizer and reported in the
service's own envelope.

Endpoints:
    POST /sign  - returns {ok: true, signedOrder}
    POST /place - returns the worker's response verbatim
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from apps.order_signer.config import SignerSettings
from apps.order_signer.dependencies import get_pipeline, get_settings
from apps.order_signer.errors import InvalidInputError, PayloadTooLargeError
from apps.order_signer.pipeline import OrderPipeline
from apps.order_signer.schemas import SignResponse

router = APIRouter()

INVALID_JSON_MESSAGE = "request body must be valid JSON"


async def read_json_body(request: Request, max_bytes: int) -> Any:
    """
    Read and decode the request body.

    An empty body decodes to ``{}``.

    Raises:
        PayloadTooLargeError: Body exceeds max_bytes
        InvalidInputError: Body is not valid JSON
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(int(declared), max_bytes)

    raw = await request.body()
    if len(raw) > max_bytes:
        raise PayloadTooLargeError(len(raw), max_bytes)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidInputError([INVALID_JSON_MESSAGE]) from None


@router.post("/sign", tags=["orders"], response_model=SignResponse)
async def sign_order(
    request: Request,
    settings: SignerSettings = Depends(get_settings),
    pipeline: OrderPipeline = Depends(get_pipeline),
) -> SignResponse:
    """
    Normalize and sign an order without relaying it.

    Returns:
        200 {ok: true, signedOrder}

    Errors:
        400 Invalid input, 413 Payload too large, 500 Sign failed
    """
    body = await read_json_body(request, settings.max_body_bytes)
    signed_order = await pipeline.sign_only(body)
    return SignResponse(signed_order=signed_order)


@router.post("/place", tags=["orders"])
async def place_order(
    request: Request,
    settings: SignerSettings = Depends(get_settings),
    pipeline: OrderPipeline = Depends(get_pipeline),
) -> Response:
    """
    Normalize, sign and relay an order to the worker.

    On a completed relay the worker's status code, body and content type are
    returned exactly as received, including 4xx/5xx statuses.

    Errors:
        400 Invalid input, 400 relay not configured (with signedOrder),
        413 Payload too large, 500 Place failed
    """
    body = await read_json_body(request, settings.max_body_bytes)
    result = await pipeline.sign_and_relay(body)
    # Set the header directly: media_type would append a charset to text/* types.
    return Response(
        content=result.body,
        status_code=result.status,
        headers={"Content-Type": result.content_type},
    )

"""
Outcome exceptions for the order pipeline.

Each exception carries the HTTP status and JSON body it maps to, so the
pipeline stays free of HTTP concerns and the exception handlers stay
trivial. Every body has ``ok: false`` and a short ``error`` string.
"""

from __future__ import annotations

from typing import Any

from apps.order_signer.schemas import SignedOrder
from libs.common.exceptions import SignerGatewayError

RELAY_NOT_CONFIGURED_MESSAGE = "WORKER_URL/WORKER_TOKEN not configured on signer"


def describe_exception(exc: BaseException) -> str:
    """Stringify a collaborator failure as ``"<Type>: <message>"``."""
    message = str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


class OrderOutcomeError(SignerGatewayError):
    """Base class for failures that end a request with a structured response."""

    status_code: int = 500
    error: str = "Internal error"

    def to_payload(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error}


class InvalidInputError(OrderOutcomeError):
    """Order payload failed normalization. Nothing was signed."""

    status_code = 400
    error = "Invalid input"

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)

    def to_payload(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error, "errors": self.errors}


class PayloadTooLargeError(OrderOutcomeError):
    status_code = 413
    error = "Payload too large"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"request body of {size} bytes exceeds limit of {limit}")
        self.size = size
        self.limit = limit


class SignFailedError(OrderOutcomeError):
    """The signing provider raised while signing a valid order."""

    error = "Sign failed"

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error, "details": self.details}


class PlaceFailedError(OrderOutcomeError):
    """Sign-and-relay failed after validation (signing or relay transport)."""

    error = "Place failed"

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error, "details": self.details}


class RelayNotConfiguredError(OrderOutcomeError):
    """
    The order was signed but no relay target is configured.

    The freshly signed order is returned to the caller so operators can
    inspect it without a working relay path.
    """

    status_code = 400
    error = RELAY_NOT_CONFIGURED_MESSAGE

    def __init__(self, signed_order: SignedOrder) -> None:
        super().__init__(RELAY_NOT_CONFIGURED_MESSAGE)
        self.signed_order = signed_order

    def to_payload(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error, "signedOrder": self.signed_order}


class RelayTransportError(SignerGatewayError):
    """Network-level failure talking to the relay target (connect, DNS, timeout, read)."""

    pass

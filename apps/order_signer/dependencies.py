"""FastAPI dependency providers for the Order Signer Gateway.

Settings and the pipeline are created once at startup and stored on
``app.state``; routes receive them through these providers, which tests can
replace via ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from fastapi import Request

if TYPE_CHECKING:
    from apps.order_signer.config import SignerSettings
    from apps.order_signer.pipeline import OrderPipeline


def get_settings(request: Request) -> SignerSettings:
    """Get the frozen settings from app state.

    Raises:
        RuntimeError: If settings were not stored at startup
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError(
            "SignerSettings not initialized in app.state. "
            "create_app() stores them before any route is reachable."
        )
    return cast("SignerSettings", settings)


def get_pipeline(request: Request) -> OrderPipeline:
    """Get the order pipeline from app state.

    Raises:
        RuntimeError: If the pipeline was not stored at startup
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError(
            "OrderPipeline not initialized in app.state. "
            "create_app() stores it before any route is reachable."
        )
    return cast("OrderPipeline", pipeline)

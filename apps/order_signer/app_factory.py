"""Application factory for the Order Signer Gateway.

Wires settings, the signing provider, the optional relay client and the
routes into a FastAPI application. Collaborators can be injected, which is
how tests substitute a fake signer or a stubbed relay target without touching
cryptography or the network.

Usage:
    # Production (see main.py)
    settings = load_settings()
    app = create_app(settings)

    # Tests
    app = create_app(settings, signer=FakeSigner())

    # uvicorn factory mode (settings read from the environment)
    $ uvicorn --factory apps.order_signer.app_factory:create_app
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import make_asgi_app

from apps.order_signer import __version__
from apps.order_signer.auth import enforce_bearer_auth
from apps.order_signer.config import SignerSettings, load_settings
from apps.order_signer.exception_handlers import register_exception_handlers
from apps.order_signer.pipeline import OrderPipeline
from apps.order_signer.relay_client import RelayClient
from apps.order_signer.routes import health, orders
from apps.order_signer.signing import ClobOrderSigner, OrderSigner
from libs.common.logging import get_logger
from libs.common.logging.middleware import add_trace_id_middleware

logger = get_logger(__name__)

SERVICE_NAME = "order_signer"


def build_relay_client(settings: SignerSettings) -> RelayClient | None:
    """Create the relay client, or None when the worker is not configured."""
    if settings.worker_url is None or settings.worker_token is None:
        return None
    return RelayClient(
        url=str(settings.worker_url),
        token=settings.worker_token.get_secret_value(),
        timeout=settings.relay_timeout_seconds,
    )


def create_app(
    settings: SignerSettings | None = None,
    *,
    signer: OrderSigner | None = None,
    relay_client: RelayClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Frozen settings; loaded from the environment when omitted
        signer: Signing provider; a ClobOrderSigner holding the configured
            key is created when omitted
        relay_client: Relay client; built from settings when omitted (None
            if WORKER_URL/WORKER_TOKEN are unset)

    Returns:
        FastAPI: Configured application instance

    Raises:
        ConfigurationError: If settings are loaded here and are invalid
    """
    if settings is None:
        settings = load_settings()
    if signer is None:
        signer = ClobOrderSigner.from_settings(settings)
    if relay_client is None:
        relay_client = build_relay_client(settings)

    pipeline = OrderPipeline(signer=signer, relay_client=relay_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Order signer starting",
            extra={
                "version": __version__,
                "host": settings.clob_host,
                "chain_id": settings.chain_id,
                "relay_configured": relay_client is not None,
            },
        )
        try:
            yield
        finally:
            if relay_client is not None:
                await relay_client.aclose()
            logger.info("Order signer shutting down")

    app = FastAPI(
        title="Order Signer",
        description="Authenticated order signing and relay gateway",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline

    app.include_router(health.router)
    app.include_router(orders.router)
    app.mount("/metrics", make_asgi_app())

    register_exception_handlers(app)

    # Last added runs first: trace id, then auth, then routes.
    app.middleware("http")(enforce_bearer_auth)
    add_trace_id_middleware(app)

    return app

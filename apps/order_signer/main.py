"""
Order Signer Gateway entrypoint.

Endpoints:
- GET  /health  - signing network host and chain id (no auth)
- POST /sign    - normalize and sign an order
- POST /place   - normalize, sign and relay an order to the worker
- GET  /metrics - Prometheus metrics

Environment Variables:
    PRIVATE_KEY: Signing key, 0x + 64 hex chars (required)
    SIGNER_TOKEN: Bearer secret for all routes except /health (required)
    CLOB_HOST: Signing network host (default: https://clob.polymarket.com)
    CHAIN_ID: Chain identifier (default: 137)
    WORKER_URL: Relay target URL (optional)
    WORKER_TOKEN: Relay target bearer token (optional)
    HOST / PORT: Bind address (default: 0.0.0.0:3000)
    LOG_LEVEL: Logging level (default: INFO)

Usage:
    $ order-signer
    $ python -m apps.order_signer.main

Startup fails fast: missing or malformed configuration is logged and the
process exits with status 1 before binding the port.
"""

from __future__ import annotations

import sys

import uvicorn

from apps.order_signer.app_factory import SERVICE_NAME, create_app
from apps.order_signer.config import load_settings
from libs.common.exceptions import ConfigurationError
from libs.common.logging import configure_logging, get_logger

logger = get_logger(__name__)


def run() -> None:
    """Load configuration, build the app and serve it with uvicorn."""
    configure_logging(service_name=SERVICE_NAME)

    try:
        settings = load_settings()
        configure_logging(service_name=SERVICE_NAME, log_level=settings.log_level)
        app = create_app(settings)
    except (ConfigurationError, ValueError) as exc:
        logger.critical("Fatal: %s", exc)
        sys.exit(1)

    logger.info(
        "Signer service listening",
        extra={"host": settings.host, "port": settings.port},
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

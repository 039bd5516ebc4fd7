"""Shared fixtures for order signer tests.

Signing is replaced with deterministic fakes implementing the OrderSigner
protocol, so tests never need a real key holder or network access.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from apps.order_signer.app_factory import create_app
from apps.order_signer.config import SignerSettings
from apps.order_signer.relay_client import RelayClient
from apps.order_signer.schemas import OrderRequest, SignedOrder

TEST_PRIVATE_KEY = "0x" + "ab" * 32
TEST_SIGNER_TOKEN = "signer-secret"
TEST_WORKER_URL = "https://worker.test/relay"
TEST_WORKER_TOKEN = "worker-secret"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_SIGNER_TOKEN}"}
MINIMAL_ORDER = {"tokenID": "t1", "price": "0.5", "size": "10"}


class FakeSigner:
    """Deterministic OrderSigner: the signed order is a pure function of the input."""

    def __init__(self) -> None:
        self.calls: list[OrderRequest] = []

    async def sign(self, order: OrderRequest) -> SignedOrder:
        self.calls.append(order)
        payload = order.to_payload()
        return {
            "order": payload,
            "signature": "0xsig-" + "-".join(f"{key}={payload[key]}" for key in sorted(payload)),
        }


class FailingSigner:
    """OrderSigner that always raises."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or RuntimeError("signer unavailable")
        self.calls = 0

    async def sign(self, order: OrderRequest) -> SignedOrder:
        self.calls += 1
        raise self.exc


def make_settings(**overrides: Any) -> SignerSettings:
    values: dict[str, Any] = {
        "private_key": TEST_PRIVATE_KEY,
        "signer_token": TEST_SIGNER_TOKEN,
        "_env_file": None,
    }
    values.update(overrides)
    return SignerSettings(**values)


def make_relay_client(handler: Any) -> RelayClient:
    """RelayClient whose HTTP layer is served by ``handler(request) -> httpx.Response``."""
    return RelayClient(
        url=TEST_WORKER_URL,
        token=TEST_WORKER_TOKEN,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture()
def settings() -> SignerSettings:
    return make_settings()


@pytest.fixture()
def relay_settings() -> SignerSettings:
    return make_settings(worker_url=TEST_WORKER_URL, worker_token=TEST_WORKER_TOKEN)


@pytest.fixture()
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture()
def client(settings: SignerSettings, fake_signer: FakeSigner) -> Iterator[TestClient]:
    """App without a relay target configured."""
    app = create_app(settings, signer=fake_signer)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def failing_signer() -> FailingSigner:
    return FailingSigner()


@pytest.fixture()
def settings_factory() -> Any:
    return make_settings


@pytest.fixture()
def relay_client_factory() -> Any:
    return make_relay_client


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return dict(AUTH_HEADERS)


@pytest.fixture()
def minimal_order() -> dict[str, str]:
    return dict(MINIMAL_ORDER)

"""
HTTP-level tests for the Order Signer Gateway.

Tests verify:
- /health payload
- /sign success, validation and signer failure envelopes
- /place: not configured, verbatim relay passthrough, transport failures
- Body size and JSON decoding limits
- Error envelope for unknown routes and trace id echo
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from apps.order_signer.app_factory import build_relay_client, create_app
from apps.order_signer.dependencies import get_pipeline
from apps.order_signer.normalizer import INVALID_EXPIRATION, SIZE_REQUIRED, TOKEN_ID_REQUIRED
from apps.order_signer.relay_client import RelayClient


@pytest.fixture()
def relay_app_client(relay_settings, fake_signer, relay_client_factory):
    """Build a TestClient whose relay target is served by a handler function."""

    def _build(handler):
        app = create_app(
            relay_settings,
            signer=fake_signer,
            relay_client=relay_client_factory(handler),
        )
        return TestClient(app)

    return _build


class TestBuildRelayClient:
    def test_none_without_worker(self, settings):
        assert build_relay_client(settings) is None

    def test_none_with_url_but_no_token(self, settings_factory):
        assert build_relay_client(settings_factory(worker_url="https://worker.test/relay")) is None

    @pytest.mark.asyncio()
    async def test_client_targets_worker_url(self, relay_settings):
        relay_client = build_relay_client(relay_settings)

        assert relay_client is not None
        assert relay_client.url == "https://worker.test/relay"
        await relay_client.aclose()


class TestHealth:
    def test_health_reports_network(self, client, settings):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "host": settings.clob_host,
            "chainId": settings.chain_id,
        }


class TestSign:
    def test_sign_success(self, client, auth_headers, minimal_order):
        response = client.post("/sign", json=minimal_order, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["signedOrder"]["order"] == {
            "tokenID": "t1",
            "price": "0.5",
            "size": "10",
            "side": "BUY",
            "feeRateBps": "0",
        }

    def test_sign_invalid_input(self, client, fake_signer, auth_headers):
        response = client.post(
            "/sign",
            json={"price": "0.5", "expiration": "not-a-number"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {
            "ok": False,
            "error": "Invalid input",
            "errors": [TOKEN_ID_REQUIRED, SIZE_REQUIRED, INVALID_EXPIRATION],
        }
        assert fake_signer.calls == []

    def test_sign_empty_body_is_empty_object(self, client, auth_headers):
        response = client.post("/sign", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_sign_invalid_json(self, client, auth_headers):
        response = client.post(
            "/sign",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "ok": False,
            "error": "Invalid input",
            "errors": ["request body must be valid JSON"],
        }

    def test_sign_failure(self, settings, failing_signer, auth_headers, minimal_order):
        with TestClient(create_app(settings, signer=failing_signer)) as test_client:
            response = test_client.post("/sign", json=minimal_order, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "ok": False,
            "error": "Sign failed",
            "details": "RuntimeError: signer unavailable",
        }

    def test_payload_too_large(self, settings_factory, fake_signer, auth_headers):
        app = create_app(settings_factory(max_body_bytes=64), signer=fake_signer)
        with TestClient(app) as test_client:
            response = test_client.post(
                "/sign",
                json={"tokenID": "t" * 100, "price": "1", "size": "1"},
                headers=auth_headers,
            )

        assert response.status_code == 413
        assert response.json() == {"ok": False, "error": "Payload too large"}
        assert fake_signer.calls == []


class TestPlace:
    def test_place_not_configured_returns_signed_order(self, client, auth_headers, minimal_order):
        signed = client.post("/sign", json=minimal_order, headers=auth_headers).json()["signedOrder"]

        response = client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {
            "ok": False,
            "error": "WORKER_URL/WORKER_TOKEN not configured on signer",
            "signedOrder": signed,
        }

    def test_place_invalid_input(self, client, fake_signer, auth_headers):
        response = client.post("/place", json={"tokenID": "t1"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"
        assert fake_signer.calls == []

    def test_place_passes_worker_response_through(self, relay_app_client, auth_headers, minimal_order):
        def handler(request):
            return httpx.Response(503, content=b"down", headers={"Content-Type": "text/plain"})

        with relay_app_client(handler) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 503
        assert response.text == "down"
        assert response.headers["content-type"] == "text/plain"

    def test_place_success_json(self, relay_app_client, auth_headers, minimal_order):
        worker_body = b'{"success":true,"orderID":"0x1"}'

        def handler(request):
            assert request.headers["Authorization"] == "Bearer worker-secret"
            return httpx.Response(200, content=worker_body, headers={"Content-Type": "application/json"})

        with relay_app_client(handler) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 200
        assert response.content == worker_body
        assert response.headers["content-type"] == "application/json"

    def test_place_keeps_non_utf8_body_bytes(self, relay_app_client, auth_headers, minimal_order):
        content_type = "text/plain; charset=iso-8859-1"

        def handler(request):
            return httpx.Response(200, content=b"caf\xe9", headers={"Content-Type": content_type})

        with relay_app_client(handler) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 200
        assert response.content == b"caf\xe9"
        assert response.headers["content-type"] == content_type
        assert response.text == "caf\u00e9"

    def test_place_transport_failure(self, relay_app_client, auth_headers, minimal_order):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        with relay_app_client(handler) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "ok": False,
            "error": "Place failed",
            "details": "ConnectError: connection refused",
        }

    def test_place_unparseable_worker_url(self, settings, fake_signer, auth_headers, minimal_order):
        relay_client = RelayClient("http://exa mple.com:abc/relay", "worker-secret")
        app = create_app(settings, signer=fake_signer, relay_client=relay_client)

        with TestClient(app) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert body["error"] == "Place failed"
        assert body["details"]

    def test_place_signing_failure(self, relay_settings, failing_signer, auth_headers, minimal_order):
        with TestClient(create_app(relay_settings, signer=failing_signer)) as test_client:
            response = test_client.post("/place", json=minimal_order, headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Place failed"


class TestEnvelope:
    def test_unknown_route_with_auth(self, client, auth_headers):
        response = client.get("/nope", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Not Found"}

    def test_trace_id_echoed(self, client, auth_headers, minimal_order):
        response = client.post(
            "/sign",
            json=minimal_order,
            headers={**auth_headers, "X-Trace-ID": "trace-abc"},
        )

        assert response.headers["X-Trace-ID"] == "trace-abc"

    def test_health_with_non_ascii_trace_header(self, client):
        response = client.get("/health", headers={"X-Trace-ID": b"caf\xe9"})

        assert response.status_code == 200
        assert response.headers["X-Trace-ID"] != "caf\u00e9"

    def test_trace_id_generated_on_401(self, client):
        response = client.post("/sign", json={})

        assert response.status_code == 401
        assert response.headers.get("X-Trace-ID")

    def test_unexpected_fault_is_internal_error(self, settings, fake_signer, auth_headers, minimal_order):
        class BrokenPipeline:
            async def sign_only(self, raw_body):
                raise RuntimeError("pipeline exploded")

        app = create_app(settings, signer=fake_signer)
        app.dependency_overrides[get_pipeline] = BrokenPipeline
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post(
                "/sign",
                json=minimal_order,
                headers={**auth_headers, "X-Trace-ID": "trace-500"},
            )

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Internal error"}
        assert response.headers["X-Trace-ID"] == "trace-500"

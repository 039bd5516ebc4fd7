"""
Tests for the py-clob-client signing adapter.

The SDK client is mocked; these tests cover argument conversion and the
async wrapper, not the cryptography.
"""

from unittest.mock import MagicMock, patch

import pytest

from apps.order_signer.schemas import OrderRequest
from apps.order_signer.signing import ClobOrderSigner, build_order_args


class TestBuildOrderArgs:
    def test_minimal_order_uses_sdk_defaults(self):
        args = build_order_args(OrderRequest(token_id="t1", price="0.5", size="10"))

        assert args.token_id == "t1"
        assert args.price == 0.5
        assert args.size == 10.0
        assert args.side == "BUY"
        assert args.fee_rate_bps == 0
        assert args.nonce == 0
        assert args.expiration == 0

    def test_optional_fields_converted(self):
        order = OrderRequest(
            token_id="t1",
            price="0.25",
            size="4",
            side="SELL",
            fee_rate_bps="30",
            expiration=1735689600,
            nonce="9",
        )

        args = build_order_args(order)

        assert args.side == "SELL"
        assert args.fee_rate_bps == 30
        assert args.expiration == 1735689600
        assert args.nonce == 9

    def test_unparseable_price_raises(self):
        with pytest.raises(ValueError):
            build_order_args(OrderRequest(token_id="t1", price="abc", size="1"))


class TestClobOrderSigner:
    @pytest.mark.asyncio()
    async def test_sign_returns_sdk_dict(self):
        signed = MagicMock()
        signed.dict.return_value = {"salt": 1, "signature": "0xdeadbeef"}
        client = MagicMock()
        client.create_order.return_value = signed

        signer = ClobOrderSigner(client)
        result = await signer.sign(OrderRequest(token_id="t1", price="0.5", size="10"))

        assert result == {"salt": 1, "signature": "0xdeadbeef"}
        (order_args,), _ = client.create_order.call_args
        assert order_args.token_id == "t1"
        assert order_args.price == 0.5

    @pytest.mark.asyncio()
    async def test_sdk_errors_propagate(self):
        client = MagicMock()
        client.create_order.side_effect = RuntimeError("tick size lookup failed")

        signer = ClobOrderSigner(client)

        with pytest.raises(RuntimeError, match="tick size lookup failed"):
            await signer.sign(OrderRequest(token_id="t1", price="0.5", size="10"))

    def test_from_settings_builds_client(self, settings):
        with patch("apps.order_signer.signing.ClobClient") as mock_client_cls:
            signer = ClobOrderSigner.from_settings(settings)

        mock_client_cls.assert_called_once_with(
            settings.clob_host,
            chain_id=settings.chain_id,
            key=settings.private_key.get_secret_value(),
        )
        assert isinstance(signer, ClobOrderSigner)

"""
Gateway client tests: order creation and payment signature verification.

Run with:
    pytest tests/test_clients.py -v
"""

import base64
import json

import httpx
import pytest

from checkout_service.clients import RazorpayClient, sign_payment
from checkout_service.exceptions import GatewayError
from conftest import GATEWAY_ORDER_ID, KEY_ID, KEY_SECRET, signature_for


class TestPaymentSignature:
    """Signature scheme: hex(HMAC-SHA256(secret, order_id|payment_id))"""

    def test_sign_payment_matches_reference_hmac(self):
        assert sign_payment(KEY_SECRET, "order_A", "pay_B") == signature_for("order_A", "pay_B")

    def test_valid_signature_accepted(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        signature = signature_for("order_A", "pay_B")
        assert gateway.verify_payment_signature("order_A", "pay_B", signature)

    def test_every_single_character_mutation_rejected(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        signature = signature_for("order_A", "pay_B")

        for position in range(len(signature)):
            replacement = "0" if signature[position] != "0" else "1"
            tampered = signature[:position] + replacement + signature[position + 1:]
            assert not gateway.verify_payment_signature("order_A", "pay_B", tampered), position

    def test_signature_for_other_secret_rejected(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        signature = signature_for("order_A", "pay_B", secret="another_secret")
        assert not gateway.verify_payment_signature("order_A", "pay_B", signature)

    def test_swapped_ids_rejected(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        signature = signature_for("pay_B", "order_A")
        assert not gateway.verify_payment_signature("order_A", "pay_B", signature)

    def test_uppercase_hex_rejected(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        signature = signature_for("order_A", "pay_B").upper()
        assert not gateway.verify_payment_signature("order_A", "pay_B", signature)

    def test_non_ascii_signature_rejected(self):
        gateway = RazorpayClient(KEY_ID, KEY_SECRET)
        assert not gateway.verify_payment_signature("order_A", "pay_B", "ä" * 64)


class TestCreateOrder:

    async def test_posts_amount_and_currency_with_basic_auth(self, gateway, gateway_requests):
        order = await gateway.create_order(50000000, "INR")

        assert order["id"] == GATEWAY_ORDER_ID
        request = gateway_requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/orders"
        assert json.loads(request.content) == {"amount": 50000000, "currency": "INR"}
        expected_auth = base64.b64encode(f"{KEY_ID}:{KEY_SECRET}".encode()).decode()
        assert request.headers["Authorization"] == f"Basic {expected_auth}"

    async def test_error_status_raises_gateway_error(self, gateway, gateway_status):
        gateway_status["code"] = 502

        with pytest.raises(GatewayError) as exc_info:
            await gateway.create_order(100, "INR")
        assert exc_info.value.details == {"status_code": 502}

    async def test_connection_failure_raises_gateway_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = RazorpayClient(KEY_ID, KEY_SECRET, transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(GatewayError, match="unreachable"):
                await gateway.create_order(100, "INR")
        finally:
            await gateway.aclose()

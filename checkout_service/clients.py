"""
This module provides the client for the external payment gateway (Razorpay REST API)
used by the checkout service.

The client is constructed once by the app factory and injected into the handlers
that need it. It covers both halves of the gateway's two-phase protocol:
- creating a gateway order before the customer pays
- verifying the payment signature the customer's browser posts back afterwards
"""

import hashlib
import hmac
import logging

import httpx

from .exceptions import GatewayError

DEFAULT_BASE_URL = "https://api.razorpay.com/v1"

log = logging.getLogger(__name__)


def sign_payment(key_secret: str, razorpay_order_id: str, razorpay_payment_id: str) -> str:
    """
    Computes the gateway signature of a payment.

    The gateway signs the pair `<order_id>|<payment_id>` with HMAC-SHA256
    keyed by the merchant's key secret and sends the hex digest.
    """
    body = f"{razorpay_order_id}|{razorpay_payment_id}"
    return hmac.new(key_secret.encode(), body.encode(), hashlib.sha256).hexdigest()


class RazorpayClient:
    """
    Client for the payment gateway REST API.
    Authenticates with the key id/secret pair via HTTP basic auth.
    """
    def __init__(self, key_id: str, key_secret: str, base_url: str = DEFAULT_BASE_URL,
                 transport: httpx.AsyncBaseTransport = None):
        """
        Initializes the HTTP client with proper timeout configuration.

        Args:
            key_id (str): Public merchant key.
            key_secret (str): Merchant secret, also the HMAC key for payment signatures.
            base_url (str): Gateway API root.
            transport (httpx.AsyncBaseTransport, optional): Custom transport, e.g. for tests.
        """
        self.key_id = key_id
        self._key_secret = key_secret
        timeout_config = httpx.Timeout(5.0, read=8.0)
        self.client = httpx.AsyncClient(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout_config,
            transport=transport,
        )

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    async def create_order(self, amount: int, currency: str = "INR") -> dict:
        """
        Asks the gateway to mint a new order reference.

        Args:
            amount (int): Amount in minor currency units (paise).
            currency (str): ISO currency code.
        Returns:
            dict: The gateway order object (`id`, `amount`, `currency`, `status`, ...).
        Raises:
            GatewayError: If the gateway is unreachable or answers with an error status.
        """
        payload = {"amount": amount, "currency": currency}
        try:
            response = await self.client.post("/orders", json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            log.error(f"Gateway rejected order creation (HTTP {e.response.status_code}): {e.response.text}")
            raise GatewayError(
                "Payment gateway rejected the order",
                details={'status_code': e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            log.error(f"Gateway unreachable during order creation: {e}")
            raise GatewayError("Payment gateway unreachable") from e

    def verify_payment_signature(self, razorpay_order_id: str, razorpay_payment_id: str,
                                 razorpay_signature: str) -> bool:
        """
        Checks a client-submitted payment signature.

        Returns:
            bool: True only if the signature equals the recomputed hex digest exactly.
        """
        expected = sign_payment(self._key_secret, razorpay_order_id, razorpay_payment_id)
        return hmac.compare_digest(expected.encode(), razorpay_signature.encode())

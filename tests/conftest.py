"""
Pytest configuration and fixtures for tests.

The document store is an in-memory mongomock database initialised through
Beanie, and the payment gateway is served by an httpx MockTransport that
records every order creation request.
"""

import hashlib
import hmac
import json

import httpx
import jwt
import pytest
import pytest_asyncio
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from checkout_service.clients import RazorpayClient
from checkout_service.config import Settings
from checkout_service.db import DOCUMENT_MODELS
from checkout_service.main import create_app

KEY_ID = "rzp_test_key"
KEY_SECRET = "test_key_secret"
JWT_SECRET = "test-jwt-secret-for-the-checkout-service"
GATEWAY_ORDER_ID = "order_Test12345"


def signature_for(order_id: str, payment_id: str, secret: str = KEY_SECRET) -> str:
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


def bearer(role: str = None, secret: str = JWT_SECRET) -> dict:
    claims = {"id": "user-1", "email": "seller@example.com"}
    if role:
        claims["role"] = role
    return {"Authorization": f"Bearer {jwt.encode(claims, secret, algorithm='HS256')}"}


@pytest.fixture
def settings():
    return Settings(
        razorpay_key_id=KEY_ID,
        razorpay_key_secret=KEY_SECRET,
        razorpay_base_url="https://gateway.test/v1",
        jwt_secret=JWT_SECRET,
        environment="development",
    )


@pytest_asyncio.fixture
async def database():
    client = AsyncMongoMockClient()
    db = client["checkout_test"]
    await init_beanie(database=db, document_models=DOCUMENT_MODELS)
    yield db


@pytest.fixture
def gateway_requests():
    """Requests received by the mocked gateway, in order."""
    return []


@pytest.fixture
def gateway_status():
    """Mutable status code the mocked gateway answers with."""
    return {"code": 200}


@pytest_asyncio.fixture
async def gateway(settings, gateway_requests, gateway_status):
    def handler(request: httpx.Request) -> httpx.Response:
        gateway_requests.append(request)
        if gateway_status["code"] != 200:
            return httpx.Response(gateway_status["code"], json={"error": {"description": "failure"}})
        payload = json.loads(request.content)
        return httpx.Response(200, json={
            "id": GATEWAY_ORDER_ID,
            "entity": "order",
            "amount": payload["amount"],
            "currency": payload["currency"],
            "status": "created",
        })

    client = RazorpayClient(KEY_ID, KEY_SECRET, base_url=settings.razorpay_base_url,
                            transport=httpx.MockTransport(handler))
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(settings, gateway, database):
    app = create_app(settings=settings, gateway=gateway)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

"""
mock_razorpay.py — Mock Implementation of the Payment Gateway (REST API)

This module provides a simulated payment gateway for running the checkout
service end to end without gateway credentials. It exposes a small FastAPI
application mimicking the gateway's order API, plus an endpoint that plays
the part of the browser checkout widget and returns a signed payment.

Simulation Scenarios:
    • Successful order creation
    • Rejected order (HTTP 400) for amounts above the gateway limit
    • Wrong API credentials (HTTP 401)

Endpoints:
    POST /v1/orders                 — Creates a gateway order.
    POST /v1/orders/{id}/pay        — Simulates a customer payment, returns ids and signature.

Port:
    Default: 8002 (HTTP)
"""

import logging
import os
import secrets
import time

from fastapi import Depends, FastAPI, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from checkout_service.clients import sign_payment

KEY_ID = os.environ.get("RAZORPAY_API_KEY", "rzp_test_mock")
KEY_SECRET = os.environ.get("RAZORPAY_API_SECRET", "mock_secret")
MAX_ORDER_AMOUNT = 100_000_000

app = FastAPI(title="Mock Payment Gateway")
security = HTTPBasic()
logging.basicConfig(level=logging.INFO)

orders = {}


class OrderCreateRequest(BaseModel):
    """
    Attributes:
        amount (int): Amount in minor currency units (paise).
        currency (str): ISO 4217 currency code.
    """
    amount: int
    currency: str = "INR"


def check_credentials(credentials: HTTPBasicCredentials = Depends(security)):
    if credentials.username != KEY_ID or credentials.password != KEY_SECRET:
        raise HTTPException(
            status_code=401,
            detail={"error": {"code": "BAD_REQUEST_ERROR", "description": "Authentication failed"}}
        )


@app.post("/v1/orders", dependencies=[Depends(check_credentials)])
def create_order(request: OrderCreateRequest):
    """
    Creates a gateway order.

    Returns:
        dict: Gateway order object with `id`, `amount`, `currency`, `status`.

    Raises:
        HTTPException(400): If the amount is not positive or above the gateway limit.
    """
    if request.amount <= 0 or request.amount > MAX_ORDER_AMOUNT:
        logging.warning(f"[GW] Order rejected, amount {request.amount} out of range.")
        raise HTTPException(
            status_code=400,
            detail={"error": {"code": "BAD_REQUEST_ERROR", "description": "Order amount out of range"}}
        )

    order_id = f"order_{secrets.token_hex(7)}"
    order = {
        "id": order_id,
        "entity": "order",
        "amount": request.amount,
        "amount_paid": 0,
        "amount_due": request.amount,
        "currency": request.currency,
        "status": "created",
        "attempts": 0,
        "created_at": int(time.time()),
    }
    orders[order_id] = order
    logging.info(f"[GW] Order {order_id} created for {request.amount} {request.currency}.")
    return order


@app.post("/v1/orders/{order_id}/pay")
def pay_order(order_id: str):
    """
    Simulates the customer completing the payment in the checkout widget.

    Returns:
        dict: The fields the widget hands to the storefront:
            razorpay_order_id, razorpay_payment_id, razorpay_signature.
    """
    order = orders.get(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")

    payment_id = f"pay_{secrets.token_hex(7)}"
    order.update(status="paid", amount_paid=order["amount"], amount_due=0, attempts=order["attempts"] + 1)
    logging.info(f"[GW] Payment {payment_id} captured for {order_id}.")
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": sign_payment(KEY_SECRET, order_id, payment_id),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)

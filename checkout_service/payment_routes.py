"""
payment_routes.py — Payment API (/api/payment)

Endpoints:
    POST /checkout                 — mint a gateway order
    POST /paymentVerification      — verify a payment and place its orders
    POST /createOrderRequest       — create pending orders for admin approval
    PUT  /approveOrder/{orderId}   — admin: approve a pending order
    PUT  /rejectOrder/{orderId}    — admin: reject a pending order
    GET  /order/{orderId}          — look up an order by id
"""

import logging

from fastapi import APIRouter, Depends

from .auth import Principal, require_admin
from .clients import RazorpayClient
from .config import Settings
from .dependencies import get_gateway, get_settings, to_http_exception
from .documents import ApprovalStatus
from .exceptions import ValidationFailed
from .models import CheckoutRequest, OrderRequest, PaymentVerificationRequest
from .order_store import create_order_request, find_order, set_approval_status
from .workflow import start_checkout, to_minor_units, validate_amount, verify_payment

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment", tags=["payment"])


@router.post("/checkout")
async def checkout(
        body: CheckoutRequest,
        gateway: RazorpayClient = Depends(get_gateway),
        settings: Settings = Depends(get_settings),
):
    """
    Creates a gateway order for the requested amount.

    Returns:
        dict: `{success, order}` with the gateway order object.
    """
    try:
        order = await start_checkout(gateway, body.amount, body.order_id)
    except Exception as e:
        raise to_http_exception(e, settings, "[Checkout]")
    return {"success": True, "order": order}


@router.post("/paymentVerification")
async def payment_verification(
        body: PaymentVerificationRequest,
        gateway: RazorpayClient = Depends(get_gateway),
        settings: Settings = Depends(get_settings),
):
    """
    Verifies the gateway signature and, only if it matches, stores the payment
    and its orders.

    Returns:
        dict: `{success, message, payment_id, order_id}` echoing the gateway ids.
    """
    log_prefix = f"[Order: {body.razorpay_order_id}]"
    log.info(f"{log_prefix} Payment verification requested.")
    try:
        await verify_payment(gateway, body)
    except Exception as e:
        raise to_http_exception(e, settings, log_prefix)
    return {
        "success": True,
        "message": "Payment verified successfully",
        "payment_id": body.razorpay_payment_id,
        "order_id": body.razorpay_order_id,
    }


@router.post("/createOrderRequest", status_code=201)
async def order_request(body: OrderRequest, settings: Settings = Depends(get_settings)):
    """Creates one pending order per cart item, to be approved before payment."""
    try:
        validate_amount(body.amount)
        if not body.items:
            raise ValidationFailed("Items are required")
        if not body.address:
            raise ValidationFailed("Address is required")
        orders = await create_order_request(to_minor_units(body.amount), body.items, body.address, body.currency)
    except Exception as e:
        raise to_http_exception(e, settings, "[Order Request]")
    return {"success": True, "orders": [order.to_public() for order in orders]}


@router.put("/approveOrder/{order_id}")
async def approve_order(
        order_id: str,
        principal: Principal = Depends(require_admin),
        settings: Settings = Depends(get_settings),
):
    log.info(f"[Order: {order_id}] Approval by {principal.id}.")
    try:
        order = await set_approval_status(order_id, ApprovalStatus.APPROVED)
    except Exception as e:
        raise to_http_exception(e, settings, f"[Order: {order_id}]")
    return {"success": True, "message": "Order approved", "order": order.to_public()}


@router.put("/rejectOrder/{order_id}")
async def reject_order(
        order_id: str,
        principal: Principal = Depends(require_admin),
        settings: Settings = Depends(get_settings),
):
    log.info(f"[Order: {order_id}] Rejection by {principal.id}.")
    try:
        order = await set_approval_status(order_id, ApprovalStatus.REJECTED)
    except Exception as e:
        raise to_http_exception(e, settings, f"[Order: {order_id}]")
    return {"success": True, "message": "Order rejected", "order": order.to_public()}


@router.get("/order/{order_id}")
async def get_order_by_id(order_id: str, settings: Settings = Depends(get_settings)):
    try:
        order = await find_order(order_id)
    except Exception as e:
        raise to_http_exception(e, settings, f"[Order: {order_id}]")
    return {"success": True, "order": order.to_public()}

"""
workflow.py — Core Checkout Logic

This module contains the checkout → payment-verification → order-materialization
flow. It coordinates the payment gateway and the document store in the correct
sequence.

Workflow Overview:
1. Validate the requested amount and mint a gateway order (checkout)
2. Receive the client's payment confirmation and recompute its signature
3. Only on a matching signature: persist the Payment, then the Orders

Known gap:
    Orders for a cart are inserted one by one. A crash in the middle of the loop
    leaves a partial set of Orders next to the Payment; nothing cleans it up.
"""

import logging
import math
from typing import List, Optional

from .clients import RazorpayClient
from .documents import ApprovalStatus, DeliveryStatus, Order, Payment
from .exceptions import OrderNotApproved, SignatureMismatch, ValidationFailed
from .models import LineItem, PaymentVerificationRequest
from .order_store import find_order

MAX_AMOUNT = 1_000_000
DEFAULT_CURRENCY = "INR"

log = logging.getLogger(__name__)


def to_minor_units(amount: float) -> int:
    """Converts major units to paise, rounding halves up (0.125 -> 13)."""
    return int(math.floor(amount * 100 + 0.5))


def validate_amount(amount: Optional[float]):
    """
    Raises:
        ValidationFailed: If the amount is missing, not positive, or above MAX_AMOUNT.
    """
    if not amount:
        raise ValidationFailed("Amount is required")
    if amount < 0:
        raise ValidationFailed("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationFailed("Amount exceeds the maximum allowed value of ₹10,00,000")


def complete_items(items: List[LineItem]) -> List[LineItem]:
    """Returns the line items carrying every required product descriptor."""
    return [item for item in items if item.is_complete()]


async def start_checkout(gateway: RazorpayClient, amount: Optional[float],
                         order_id: Optional[str] = None) -> dict:
    """
    Mints a gateway order for the requested amount.

    When `order_id` is given, the referenced Order must be approved and the
    amount must equal its stored amount. The gateway order id is stored on it
    so the later verification can be matched.

    Args:
        gateway (RazorpayClient): Gateway client.
        amount (float): Amount in major units.
        order_id (str, optional): Approved Order to pay for.

    Returns:
        dict: The gateway order object.

    Raises:
        ValidationFailed: Invalid amount, or one that differs from the Order's.
        OrderNotFound: `order_id` does not resolve.
        OrderNotApproved: The Order is still pending or was rejected.
        GatewayError: The gateway call failed.
    """
    validate_amount(amount)

    order = None
    if order_id:
        order = await find_order(order_id)
        if order.approval_status != ApprovalStatus.APPROVED:
            log.warning(f"[Order: {order_id}] Checkout refused, approval status is {order.approval_status.value}.")
            raise OrderNotApproved(order_id, order.approval_status.value)

    minor_units = to_minor_units(amount)
    if order is not None and minor_units != order.amount:
        log.warning(f"[Order: {order_id}] Checkout refused, {minor_units} does not match order amount {order.amount}.")
        raise ValidationFailed(
            "Amount does not match the approved order",
            details={'order_id': order_id, 'amount': minor_units, 'order_amount': order.amount}
        )

    gateway_order = await gateway.create_order(minor_units, DEFAULT_CURRENCY)
    log.info(f"[Order: {gateway_order.get('id')}] Gateway order created for {minor_units} {DEFAULT_CURRENCY} minor units.")

    if order is not None:
        order.razorpay_order_id = gateway_order.get("id")
        await order.save()
        log.info(f"[Order: {order_id}] Linked to gateway order {order.razorpay_order_id}.")

    return gateway_order


def _check_required_fields(data: PaymentVerificationRequest):
    ids_present = data.razorpay_order_id and data.razorpay_payment_id and data.razorpay_signature
    if data.items is None and data.order_id:
        complete = ids_present
    else:
        complete = ids_present and data.amount and data.currency and data.items is not None
    if not complete:
        raise ValidationFailed("Invalid payment data")


async def verify_payment(gateway: RazorpayClient, data: PaymentVerificationRequest) -> dict:
    """
    Verifies a payment confirmation and materializes its Orders.

    The signature check gates every write: on a mismatch neither the Payment
    nor any Order is persisted.

    Args:
        gateway (RazorpayClient): Gateway client holding the signing secret.
        data (PaymentVerificationRequest): Confirmation posted by the client.

    Returns:
        dict: `payment` (Payment) and `orders` (list of Orders written or updated).

    Raises:
        ValidationFailed: A required field is missing, or the referenced Order
            belongs to another gateway order.
        SignatureMismatch: The signature does not verify.
        OrderNotFound: `order_id` does not resolve.
        OrderNotApproved: The referenced Order is no longer approved.
    """
    _check_required_fields(data)
    log_prefix = f"[Order: {data.razorpay_order_id}]"

    if not gateway.verify_payment_signature(data.razorpay_order_id, data.razorpay_payment_id,
                                            data.razorpay_signature):
        log.warning(f"{log_prefix} Signature mismatch for payment {data.razorpay_payment_id}.")
        raise SignatureMismatch(data.razorpay_order_id, data.razorpay_payment_id)

    if data.items is None:
        return await _settle_approved_order(data, log_prefix)

    payment = Payment(
        razorpay_order_id=data.razorpay_order_id,
        razorpay_payment_id=data.razorpay_payment_id,
        razorpay_signature=data.razorpay_signature,
        amount=to_minor_units(data.amount),
        currency=data.currency,
    )
    await payment.insert()
    log.info(f"{log_prefix} Payment {data.razorpay_payment_id} verified and stored.")

    orders = []
    for item in complete_items(data.items):
        order = Order(
            razorpay_order_id=data.razorpay_order_id,
            razorpay_payment_id=data.razorpay_payment_id,
            razorpay_signature=data.razorpay_signature,
            status=DeliveryStatus.ORDER_PLACED,
            amount=payment.amount,
            discounted_price=item.discountedPrice,
            currency=data.currency,
            title=item.title,
            brand=item.brand,
            category=item.category,
            subcategory=item.subcategory,
            address=data.address,
            payment=payment.id,
        )
        await order.insert()
        orders.append(order)

    skipped = len(data.items) - len(orders)
    if skipped:
        log.warning(f"{log_prefix} Skipped {skipped} line item(s) with missing product fields.")
    log.info(f"{log_prefix} {len(orders)} order(s) placed.")
    return {"payment": payment, "orders": orders}


async def _settle_approved_order(data: PaymentVerificationRequest, log_prefix: str) -> dict:
    order = await find_order(data.order_id)
    # Approval can be revoked between checkout and verification.
    if order.approval_status != ApprovalStatus.APPROVED:
        log.warning(f"{log_prefix} Payment refused for order {data.order_id}, approval status is {order.approval_status.value}.")
        raise OrderNotApproved(data.order_id, order.approval_status.value)
    if order.razorpay_order_id != data.razorpay_order_id:
        log.warning(f"{log_prefix} Payment submitted for order {data.order_id} linked to {order.razorpay_order_id}.")
        raise ValidationFailed(
            "Payment does not belong to this order",
            details={'order_id': data.order_id}
        )

    payment = Payment(
        razorpay_order_id=data.razorpay_order_id,
        razorpay_payment_id=data.razorpay_payment_id,
        razorpay_signature=data.razorpay_signature,
        amount=order.amount,
        currency=order.currency,
    )
    await payment.insert()

    order.razorpay_payment_id = data.razorpay_payment_id
    order.razorpay_signature = data.razorpay_signature
    order.payment = payment.id
    await order.save()
    log.info(f"{log_prefix} Payment {data.razorpay_payment_id} attached to order {data.order_id}.")
    return {"payment": payment, "orders": [order]}

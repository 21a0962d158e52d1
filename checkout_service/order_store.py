"""
order_store.py — Order lifecycle operations

Lookup, approval, and delivery-status updates on the `orders` collection.
Delivery-status writes are not ordered: any member of the status enum may be
written at any time.
"""

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from bson import ObjectId

from .documents import ApprovalStatus, DeliveryStatus, Order
from .exceptions import OrderNotFound, ValidationFailed
from .models import LineItem

log = logging.getLogger(__name__)


async def find_order(order_id: str) -> Order:
    """
    Raises:
        OrderNotFound: If the id is malformed or no Order has it.
    """
    if not order_id or not ObjectId.is_valid(order_id):
        raise OrderNotFound(order_id)
    order = await Order.get(PydanticObjectId(order_id))
    if order is None:
        raise OrderNotFound(order_id)
    return order


async def create_order_request(amount_minor: int, items: List[LineItem], address: str,
                               currency: str = "INR") -> List[Order]:
    """
    Creates one pending Order per complete line item, without payment fields.

    Raises:
        ValidationFailed: If no item carries the required product fields.
    """
    orders = []
    for item in items:
        if not item.is_complete():
            continue
        orders.append(Order(
            amount=amount_minor,
            discounted_price=item.discountedPrice,
            currency=currency,
            title=item.title,
            brand=item.brand,
            category=item.category,
            subcategory=item.subcategory,
            approval_status=ApprovalStatus.PENDING,
            address=address,
        ))
    if not orders:
        raise ValidationFailed("At least one item with title, brand, category and subcategory is required")

    for order in orders:
        await order.insert()
    log.info(f"Order request created with {len(orders)} pending order(s).")
    return orders


async def set_approval_status(order_id: str, approval_status: ApprovalStatus) -> Order:
    """Sets the approval status; repeating the call leaves the same value."""
    order = await find_order(order_id)
    order.approval_status = approval_status
    await order.save()
    log.info(f"[Order: {order_id}] Approval status set to {approval_status.value}.")
    return order


async def find_by_gateway_order(razorpay_order_id: str) -> List[Order]:
    """
    Returns every line-item Order sharing the gateway order id.

    Raises:
        OrderNotFound: If none exists.
    """
    orders = await Order.find(Order.razorpay_order_id == razorpay_order_id).to_list()
    if not orders:
        raise OrderNotFound(razorpay_order_id)
    return orders


def parse_delivery_status(value: Optional[str]) -> DeliveryStatus:
    """
    Raises:
        ValidationFailed: If the value is not a delivery status.
    """
    try:
        return DeliveryStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in DeliveryStatus)
        raise ValidationFailed(f"Invalid status. Allowed values are: {allowed}") from None


async def update_delivery_status(razorpay_order_id: str, status: DeliveryStatus) -> List[Order]:
    """
    Writes the delivery status onto every Order of a gateway order.

    Raises:
        OrderNotFound: If no Order matched.
    """
    await find_by_gateway_order(razorpay_order_id)
    await Order.find(Order.razorpay_order_id == razorpay_order_id).update({"$set": {"status": status.value}})
    log.info(f"[Order: {razorpay_order_id}] Delivery status set to {status.value}.")
    return await find_by_gateway_order(razorpay_order_id)


async def list_orders() -> List[Order]:
    return await Order.find_all().to_list()

"""
documents.py — Persisted documents of the Checkout Service

This module defines the two MongoDB collections written by the payment flow,
modelled as Beanie documents.

Documents:
    - Payment: A verified gateway payment. Written once, never updated.
    - Order: One purchased line item, tracked through delivery and approval.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


class DeliveryStatus(str, Enum):
    """Delivery progress of an Order. Any value may be written at any time."""
    ORDER_PLACED = "Order Placed"
    ORDER_TRANSIT = "Order Transit"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"


class ApprovalStatus(str, Enum):
    """Admin-side gate of the request-then-pay checkout."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Payment(Document):
    """
    A payment whose gateway signature has been verified.

    Attributes:
        razorpay_order_id (str): Gateway order reference minted at checkout.
        razorpay_payment_id (str): Gateway payment reference.
        razorpay_signature (str): Signature submitted by the client.
        amount (int): Amount in minor currency units (paise).
        currency (str): ISO 4217 currency code.
        status (PaymentStatus): Defaults to Success.
        created_at (datetime): Stored as `createdAt`.
    """
    model_config = ConfigDict(populate_by_name=True)

    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    amount: int
    currency: str
    status: PaymentStatus = PaymentStatus.SUCCESS
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    class Settings:
        name = "payments"


class Order(Document):
    """
    A single purchased line item.

    The gateway fields stay empty for orders created through the approval
    workflow until the payment for them has been verified.
    """
    model_config = ConfigDict(populate_by_name=True)

    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    amount: int
    discounted_price: Optional[float] = Field(default=None, alias="discountedPrice")
    currency: str = "INR"
    title: str
    brand: str
    category: str
    subcategory: str
    status: DeliveryStatus = DeliveryStatus.ORDER_PLACED
    approval_status: ApprovalStatus = Field(default=ApprovalStatus.PENDING, alias="approvalStatus")
    address: Optional[str] = None
    payment: Optional[PydanticObjectId] = None
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    class Settings:
        name = "orders"

    def to_public(self) -> dict:
        """Serializes the order for API responses, without the gateway signature."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"id", "razorpay_signature"})
        data["_id"] = str(self.id) if self.id else None
        return data

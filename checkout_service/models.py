"""
models.py — Request Models of the Checkout API

This module defines the request payloads accepted by the payment and order
endpoints. Fields the handlers must check themselves are declared optional,
so a missing value surfaces as a descriptive 400 instead of a generic
validation error.

Models:
    - LineItem: A single cart entry.
    - CheckoutRequest: Payload of POST /api/payment/checkout.
    - PaymentVerificationRequest: Payload of POST /api/payment/paymentVerification.
    - OrderRequest: Payload of POST /api/payment/createOrderRequest.
    - StatusUpdateRequest: Payload of PUT /api/orders/update/{orderId}.
"""

from pydantic import BaseModel, ConfigDict
from typing import List, Optional

REQUIRED_ITEM_FIELDS = ("title", "brand", "category", "subcategory")


class LineItem(BaseModel):
    """
    Represents one cart entry as submitted by the storefront.

    Attributes:
        title, brand, category, subcategory (str): Product descriptors; all four
            are required for the item to be turned into an Order.
        price (float, optional): Listed price in major units.
        discountedPrice (float, optional): Price after discount in major units.
    """
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    price: Optional[float] = None
    discountedPrice: Optional[float] = None

    def is_complete(self) -> bool:
        return all(getattr(self, name) for name in REQUIRED_ITEM_FIELDS)


class CheckoutRequest(BaseModel):
    """
    Attributes:
        amount (float): Amount in major currency units.
        order_id (str, optional): Approved Order to pay for (request-then-pay flow).
    """
    amount: Optional[float] = None
    order_id: Optional[str] = None


class PaymentVerificationRequest(BaseModel):
    """
    Payment confirmation posted by the client after the gateway checkout.

    Either `items` (cart checkout) or `order_id` (approved order) selects
    which Orders are written once the signature has been verified.
    """
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    items: Optional[List[LineItem]] = None
    order_id: Optional[str] = None
    address: Optional[str] = None


class OrderRequest(BaseModel):
    amount: Optional[float] = None
    items: Optional[List[LineItem]] = None
    address: Optional[str] = None
    currency: str = "INR"


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = None

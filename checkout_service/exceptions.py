"""
exceptions.py — Domain errors raised by the checkout workflow.

Every error carries the HTTP status it maps to, so the route layer can
translate it without knowing about individual failure cases.
"""


class CheckoutServiceException(Exception):
    """
    Base exception for all checkout service errors.

    Attributes:
        message: Human-readable error message, returned to the caller.
        details: Optional dict with additional context (order ids, states, ...).
    """

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationFailed(CheckoutServiceException):
    """Raised when a request is missing data or carries invalid values."""
    status_code = 400


class SignatureMismatch(CheckoutServiceException):
    """Raised when the gateway signature does not match the recomputed HMAC."""
    status_code = 400

    def __init__(self, razorpay_order_id: str, razorpay_payment_id: str):
        super().__init__(
            "Payment verification failed",
            details={'razorpay_order_id': razorpay_order_id, 'razorpay_payment_id': razorpay_payment_id}
        )


class OrderNotFound(CheckoutServiceException):
    """Raised when an order id does not resolve to a stored Order."""
    status_code = 404

    def __init__(self, order_id: str):
        super().__init__("Order not found", details={'order_id': order_id})
        self.order_id = order_id


class OrderNotApproved(CheckoutServiceException):
    """Raised when an Order that is not approved is checked out or paid for."""
    status_code = 400

    def __init__(self, order_id: str, approval_status: str):
        super().__init__(
            "Order has not been approved",
            details={'order_id': order_id, 'approval_status': approval_status}
        )
        self.order_id = order_id
        self.approval_status = approval_status


class GatewayError(CheckoutServiceException):
    """Raised when the payment gateway cannot be reached or rejects a call."""
    status_code = 500

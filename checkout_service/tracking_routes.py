"""
tracking_routes.py — Order tracking API (/api/orders)

Orders are addressed by their gateway order id here. A cart paid in one go
shares one gateway order id across all of its line-item orders, so reads and
writes act on that whole group.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from .auth import Principal, get_current_principal
from .config import Settings
from .dependencies import get_settings, to_http_exception
from .models import StatusUpdateRequest
from .order_store import find_by_gateway_order, list_orders, parse_delivery_status, update_delivery_status

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("/track/{order_id}")
async def track_order(order_id: str, settings: Settings = Depends(get_settings)):
    log.info(f"[Order: {order_id}] Tracking request.")
    try:
        orders = await find_by_gateway_order(order_id)
    except Exception as e:
        raise to_http_exception(e, settings, f"[Order: {order_id}]")
    return {"success": True, "orders": [order.to_public() for order in orders]}


@router.put("/update/{order_id}")
async def update_order_status(
        order_id: str,
        body: StatusUpdateRequest,
        principal: Principal = Depends(get_current_principal),
        settings: Settings = Depends(get_settings),
):
    """Sets the delivery status of every order sharing the gateway order id."""
    log.info(f"[Order: {order_id}] Status update to '{body.status}' by {principal.id}.")
    try:
        status = parse_delivery_status(body.status)
        orders = await update_delivery_status(order_id, status)
    except Exception as e:
        raise to_http_exception(e, settings, f"[Order: {order_id}]")
    return {"success": True, "orders": [order.to_public() for order in orders]}


@router.get("/")
async def get_all_orders(settings: Settings = Depends(get_settings)):
    try:
        orders = await list_orders()
    except Exception as e:
        raise to_http_exception(e, settings, "[Order Fetch]")
    if not orders:
        raise HTTPException(status_code=404, detail="No orders found")
    return {"success": True, "orders": [order.to_public() for order in orders]}

"""
Order tracking tests: lookup and delivery-status updates by gateway order id.

Run with:
    pytest tests/test_order_tracking.py -v
"""

import pytest

from checkout_service.documents import DeliveryStatus, Order
from conftest import bearer

GATEWAY_ORDER = "order_Track0001"


async def _place_orders(razorpay_order_id=GATEWAY_ORDER, count=2):
    for index in range(count):
        await Order(
            razorpay_order_id=razorpay_order_id,
            razorpay_payment_id="pay_Track0001",
            razorpay_signature="deadbeef",
            amount=150000,
            title=f"Item {index}",
            brand="Acme",
            category="Gadgets",
            subcategory="Audio",
        ).insert()


class TestTrackOrder:

    async def test_returns_orders_without_signature(self, client):
        await _place_orders()

        response = await client.get(f"/api/orders/track/{GATEWAY_ORDER}")

        assert response.status_code == 200
        orders = response.json()["orders"]
        assert len(orders) == 2
        for order in orders:
            assert "razorpay_signature" not in order
            assert order["razorpay_order_id"] == GATEWAY_ORDER
            assert order["status"] == "Order Placed"

    async def test_unknown_order_is_404(self, client):
        response = await client.get("/api/orders/track/order_Missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Order not found"}


class TestUpdateOrderStatus:

    async def test_updates_every_line_item(self, client):
        await _place_orders()
        await _place_orders(razorpay_order_id="order_Unrelated", count=1)

        response = await client.put(f"/api/orders/update/{GATEWAY_ORDER}",
                                    json={"status": "Out for Delivery"}, headers=bearer())

        assert response.status_code == 200
        assert [o["status"] for o in response.json()["orders"]] == ["Out for Delivery"] * 2
        updated = await Order.find(Order.razorpay_order_id == GATEWAY_ORDER).to_list()
        assert {o.status for o in updated} == {DeliveryStatus.OUT_FOR_DELIVERY}
        untouched = await Order.find_one(Order.razorpay_order_id == "order_Unrelated")
        assert untouched.status == DeliveryStatus.ORDER_PLACED

    async def test_any_status_may_follow_any_other(self, client):
        await _place_orders()

        for status in ("Delivered", "Order Placed", "Order Transit"):
            response = await client.put(f"/api/orders/update/{GATEWAY_ORDER}",
                                        json={"status": status}, headers=bearer())
            assert response.status_code == 200

        stored = await Order.find_one(Order.razorpay_order_id == GATEWAY_ORDER)
        assert stored.status == DeliveryStatus.ORDER_TRANSIT

    @pytest.mark.parametrize("body", [{"status": "Shipped"}, {"status": "delivered"}, {}])
    async def test_invalid_status_rejected_without_write(self, client, body):
        await _place_orders()

        response = await client.put(f"/api/orders/update/{GATEWAY_ORDER}", json=body, headers=bearer())

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid status. Allowed values are: Order Placed, Order Transit, Out for Delivery, Delivered"
        )
        stored = await Order.find(Order.razorpay_order_id == GATEWAY_ORDER).to_list()
        assert {o.status for o in stored} == {DeliveryStatus.ORDER_PLACED}

    async def test_unknown_order_is_404(self, client):
        response = await client.put("/api/orders/update/order_Missing",
                                    json={"status": "Delivered"}, headers=bearer())

        assert response.status_code == 404

    async def test_requires_token(self, client):
        await _place_orders()

        response = await client.put(f"/api/orders/update/{GATEWAY_ORDER}", json={"status": "Delivered"})

        assert response.status_code == 401


class TestListOrders:

    async def test_empty_collection_is_404(self, client):
        response = await client.get("/api/orders/")

        assert response.status_code == 404
        assert response.json()["message"] == "No orders found"

    async def test_lists_all_orders(self, client):
        await _place_orders(count=3)

        response = await client.get("/api/orders/")

        assert response.status_code == 200
        assert len(response.json()["orders"]) == 3

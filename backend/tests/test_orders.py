"""Tests for the partner order payload."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.item import Item, UniqueItemMap
from app.models.order import Order, OrderCheckout, OrderDetail
from app.models.shared import ACTIVE_STATUS, OrderLineStatus, OrderStatus
from app.services.order_payload_service import effective_quantity, format_created_at


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def order(db_session, location, customer):
    filter_item = Item(name="Oil Filter", price=45.0, status_id=ACTIVE_STATUS)
    pads = Item(name="Brake Pads", price=200.0, status_id=ACTIVE_STATUS)
    db_session.add_all([filter_item, pads])
    db_session.flush()
    db_session.add(
        UniqueItemMap(
            item_id=filter_item.id,
            location_id=location.id,
            unique_item_id=501,
            product_name="Oil Filter",
        )
    )

    order = Order(
        location_id=location.id,
        customer_id=customer.id,
        status_id=OrderStatus.COMPLETED,
        order_created_at=datetime(2024, 5, 1, 10, 20, 30, 123456),
    )
    db_session.add(order)
    db_session.flush()
    db_session.add(
        OrderCheckout(
            order_id=order.id, amount_total=290.0, amount_discount=10.0, grand_total=280.0
        )
    )
    db_session.add_all(
        [
            OrderDetail(
                order_id=order.id,
                item_id=filter_item.id,
                quantity=2,
                price=45.0,
                status_id=OrderLineStatus.FULFILLED,
            ),
            OrderDetail(
                order_id=order.id,
                item_id=pads.id,
                quantity=3,
                refund_qty=1,
                price=200.0,
                status_id=OrderLineStatus.PARTIALLY_REFUNDED,
            ),
            OrderDetail(order_id=order.id, item_id=9999, quantity=1, price=5.0, status_id=1),
        ]
    )
    db_session.commit()
    db_session.refresh(order)
    return order


class TestEffectiveQuantity:
    def test_fulfilled(self):
        detail = OrderDetail(quantity=4, status_id=OrderLineStatus.FULFILLED)
        assert effective_quantity(detail) == 4

    def test_partially_refunded(self):
        detail = OrderDetail(quantity=4, refund_qty=3, status_id=OrderLineStatus.PARTIALLY_REFUNDED)
        assert effective_quantity(detail) == 1

    def test_other_status(self):
        detail = OrderDetail(quantity=4, status_id=205)
        assert effective_quantity(detail) == 0


def test_format_created_at_truncates_to_milliseconds():
    assert format_created_at(datetime(2024, 5, 1, 10, 20, 30, 123999)) == "2024-05-01 10:20:30.123"
    assert format_created_at(None) == ""


class TestOrderPayload:
    def test_payload(self, client, api_headers, order, location, customer):
        response = client.get(f"/v1/orders/payload?orderId={order.id}", headers=api_headers)
        assert response.status_code == 200
        data = response.json()

        assert data["POSBusinessReference"] == "POS-KARAGE"
        assert data["LocationID"] == location.id
        assert data["Customer"] == {"Id": customer.id, "Phone": "+966501234567"}
        assert data["AmountTotal"] == 290.0
        assert data["DiscountedAmount"] == 10.0
        assert data["Order"] == {"OrderID": order.id, "OrderCreatedDT": "2024-05-01 10:20:30.123"}
        assert data["OriginalOrderId"] is None
        assert data["Event"]["ID"]

        first, second, third = data["OrderItems"]
        assert first == {
            "ItemID": 501,
            "Name": "Oil Filter",
            "Price": 45.0,
            "Quantity": 2,
            "TotalPrice": 90.0,
        }
        assert second["ItemID"] is None
        assert second["Quantity"] == 2
        assert second["TotalPrice"] == 400.0
        assert third["Name"] == "Unknown Item"
        assert third["Quantity"] == 0
        assert third["TotalPrice"] == 0

    def test_event_id_unique_per_call(self, client, api_headers, order):
        first = client.get(f"/v1/orders/payload?orderId={order.id}", headers=api_headers).json()
        second = client.get(f"/v1/orders/payload?orderId={order.id}", headers=api_headers).json()
        assert first["Event"]["ID"] != second["Event"]["ID"]

    @pytest.mark.parametrize("status", [OrderStatus.APPROVED, OrderStatus.REFUNDED])
    def test_reversal_sets_original_order_id(self, client, api_headers, db_session, order, status):
        order.status_id = status
        db_session.commit()
        response = client.get(f"/v1/orders/payload?orderId={order.id}", headers=api_headers)
        assert response.json()["OriginalOrderId"] == order.id

    def test_order_without_customer(self, client, api_headers, db_session, location):
        order = Order(location_id=location.id, status_id=OrderStatus.COMPLETED)
        db_session.add(order)
        db_session.commit()

        data = client.get(f"/v1/orders/payload?orderId={order.id}", headers=api_headers).json()
        assert data["Customer"] == {"Id": 0, "Phone": ""}
        assert data["AmountTotal"] is None
        assert data["OrderItems"] == []
        assert data["Order"]["OrderCreatedDT"] == ""

    def test_missing_order_id(self, client, api_headers):
        response = client.get("/v1/orders/payload", headers=api_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Valid order ID is required"

    def test_non_numeric_order_id(self, client, api_headers):
        response = client.get("/v1/orders/payload?orderId=abc", headers=api_headers)
        assert response.status_code == 400

    def test_not_found(self, client, api_headers):
        response = client.get("/v1/orders/payload?orderId=424242", headers=api_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Order not found"

    def test_requires_api_key(self, client, order):
        response = client.get(f"/v1/orders/payload?orderId={order.id}")
        assert response.status_code == 401

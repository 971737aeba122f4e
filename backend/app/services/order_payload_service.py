"""Build the order payload consumed by loyalty partners."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.models.order import OrderDetail
from app.models.shared import OrderLineStatus, OrderStatus
from app.models.user import User
from app.repositories.customer_repository import CustomerRepository
from app.repositories.item_repository import ItemRepository
from app.repositories.order_repository import OrderRepository

UNKNOWN_ITEM_NAME = "Unknown Item"
REVERSAL_STATUSES = (OrderStatus.APPROVED, OrderStatus.REFUNDED)


def effective_quantity(detail: OrderDetail) -> float:
    """Quantity net of refunds; zero for lines in any other state."""
    quantity = detail.quantity or 0
    if detail.status_id == OrderLineStatus.PARTIALLY_REFUNDED:
        return quantity - (detail.refund_qty or 0)  # type: ignore[operator]
    if detail.status_id == OrderLineStatus.FULFILLED:
        return quantity  # type: ignore[return-value]
    return 0


def format_created_at(value: datetime | None) -> str:
    """``2024-05-01 10:20:30.123``; milliseconds are truncated."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M:%S.") + f"{value.microsecond // 1000:03d}"


class OrderPayloadService:
    def __init__(self, db: Session):
        self.db = db
        self.order_repo = OrderRepository(db)
        self.item_repo = ItemRepository(db)
        self.customer_repo = CustomerRepository(db)

    def build(self, order_id: int, user: User) -> dict[str, Any]:
        """Return the partner payload for *order_id*.

        Raises:
            LookupError: The order does not exist.
        """
        order = self.order_repo.get_by_id(order_id)
        if order is None:
            raise LookupError("Order not found")

        checkout = self.order_repo.get_checkout(order_id)
        details = self.order_repo.get_details(order_id)
        item_ids = [
            int(d.item_id) for d in details if d.item_id is not None  # type: ignore[arg-type]
        ]
        location_id = int(order.location_id)  # type: ignore[arg-type]
        unique_ids = self.item_repo.get_unique_ids(item_ids, location_id)
        names = self.item_repo.get_names(item_ids)

        customer = (
            self.customer_repo.get_by_id(order.customer_id)  # type: ignore[arg-type]
            if order.customer_id is not None
            else None
        )

        items = []
        for detail in details:
            quantity = effective_quantity(detail)
            item_id = detail.item_id
            items.append(
                {
                    "ItemID": unique_ids.get(item_id),  # type: ignore[call-overload]
                    "Name": names.get(item_id) or UNKNOWN_ITEM_NAME,  # type: ignore[call-overload]
                    "Price": detail.price,
                    "Quantity": quantity,
                    "TotalPrice": quantity * (detail.price or 0),
                }
            )

        return {
            "Event": {"ID": str(uuid.uuid4())},
            "POSBusinessReference": user.company_code or "",
            "LocationID": order.location_id,
            "Customer": {
                "Id": order.customer_id or 0,
                "Phone": (customer.mobile if customer else None) or "",
            },
            "AmountTotal": checkout.amount_total if checkout else None,
            "DiscountedAmount": checkout.amount_discount if checkout else None,
            "Order": {
                "OrderID": order.id,
                "OrderCreatedDT": format_created_at(
                    order.order_created_at  # type: ignore[arg-type]
                ),
            },
            "OrderItems": items,
            "OriginalOrderId": order.id if order.status_id in REVERSAL_STATUSES else None,
        }

from sqlalchemy.orm import Session

from app.models.order import Order, OrderCheckout, OrderDetail


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: int) -> Order | None:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_checkout(self, order_id: int) -> OrderCheckout | None:
        return self.db.query(OrderCheckout).filter(OrderCheckout.order_id == order_id).first()

    def get_details(self, order_id: int) -> list[OrderDetail]:
        return (
            self.db.query(OrderDetail)
            .filter(OrderDetail.order_id == order_id)
            .order_by(OrderDetail.id)
            .all()
        )

    def set_status(self, order: Order, status_id: int) -> None:
        """Stage a status change; the caller owns the transaction."""
        order.status_id = status_id  # type: ignore[assignment]
        self.db.flush()

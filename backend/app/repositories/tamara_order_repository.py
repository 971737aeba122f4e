from sqlalchemy.orm import Session

from app.models.shared import utc_now
from app.models.tamara_order import TamaraOrder


class TamaraOrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_tamara_order_id(self, tamara_order_id: str) -> TamaraOrder | None:
        return (
            self.db.query(TamaraOrder)
            .filter(TamaraOrder.tamara_order_id == tamara_order_id)
            .first()
        )

    def create(self, order_id: int, tamara_order_id: str, tamara_checkout_id: str) -> TamaraOrder:
        link = TamaraOrder(
            order_id=order_id,
            tamara_order_id=tamara_order_id,
            tamara_checkout_id=tamara_checkout_id,
        )
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        return link

    def record_event(self, link: TamaraOrder, event_type: str, status_id: int) -> None:
        """Stage the latest event on *link*; the caller owns the transaction."""
        link.last_event_type = event_type  # type: ignore[assignment]
        link.last_status_id = status_id  # type: ignore[assignment]
        link.updated_at = utc_now()  # type: ignore[assignment]
        self.db.flush()

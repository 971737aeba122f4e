from sqlalchemy.orm import Session

from app.models.discount import Discount
from app.models.shared import ACTIVE_STATUS


class DiscountRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active_for_location(self, location_id: int) -> list[Discount]:
        return (
            self.db.query(Discount)
            .filter(Discount.location_id == location_id, Discount.status_id == ACTIVE_STATUS)
            .order_by(Discount.id)
            .all()
        )

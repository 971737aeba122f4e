"""Read access to the POS catalog records that are synced to VOM."""

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from app.models.bill import Bill
from app.models.category import Category
from app.models.shared import ACTIVE_STATUS, OrderStatus
from app.models.supplier import Supplier
from app.models.unit import Unit

SYNCABLE_BILL_STATUSES = (ACTIVE_STATUS, OrderStatus.COMPLETED.value)


class CatalogRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active_units(self) -> list[Unit]:
        return self.db.query(Unit).filter(Unit.status_id == ACTIVE_STATUS).order_by(Unit.id).all()

    def get_active_suppliers(self, user_id: int) -> list[Supplier]:
        return (
            self.db.query(Supplier)
            .filter(Supplier.user_id == user_id, Supplier.status_id == ACTIVE_STATUS)
            .order_by(Supplier.id)
            .all()
        )

    def get_active_categories(self, location_id: int) -> list[Category]:
        return (
            self.db.query(Category)
            .filter(Category.location_id == location_id, Category.status_id == ACTIVE_STATUS)
            .order_by(Category.id)
            .all()
        )

    def get_syncable_bills(self, location_id: int) -> list[Bill]:
        return (
            self.db.query(Bill)
            .options(selectinload(Bill.details))
            .filter(
                Bill.location_id == location_id,
                or_(*(Bill.status_id == status for status in SYNCABLE_BILL_STATUSES)),
            )
            .order_by(Bill.id)
            .all()
        )

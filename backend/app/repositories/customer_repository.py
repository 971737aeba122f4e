from sqlalchemy.orm import Session

from app.models.customer import Customer
from app.models.shared import ACTIVE_STATUS, utc_now


class CustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, customer_id: int) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_active_by_id(self, customer_id: int) -> Customer | None:
        return (
            self.db.query(Customer)
            .filter(Customer.id == customer_id, Customer.status_id == ACTIVE_STATUS)
            .first()
        )

    def get_active_by_mobile(self, mobile: str) -> Customer | None:
        return (
            self.db.query(Customer)
            .filter(Customer.mobile == mobile, Customer.status_id == ACTIVE_STATUS)
            .first()
        )

    def mobile_exists(self, mobile: str) -> bool:
        return self.db.query(Customer.id).filter(Customer.mobile == mobile).first() is not None

    def get_first_active(self, limit: int) -> list[Customer]:
        return (
            self.db.query(Customer)
            .filter(Customer.status_id == ACTIVE_STATUS)
            .order_by(Customer.id)
            .limit(limit)
            .all()
        )

    def create(self, mobile: str, full_name: str | None, email: str | None) -> Customer:
        customer = Customer(
            mobile=mobile,
            full_name=full_name,
            email=email,
            status_id=ACTIVE_STATUS,
        )
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def update(self, customer: Customer, **fields: object) -> Customer:
        for key, value in fields.items():
            setattr(customer, key, value)
        customer.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(customer)
        return customer

"""POS order tables: orders, their checkout totals and their line items."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from app.core.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    status_id = Column(Integer, nullable=True)
    order_created_at = Column(DateTime(timezone=True), nullable=True)


class OrderCheckout(Base):
    __tablename__ = "order_checkouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    checkout_date = Column(String(50), nullable=True)
    amount_total = Column(Float, nullable=True)
    amount_discount = Column(Float, nullable=True)
    amount_paid = Column(Float, nullable=True)
    grand_total = Column(Float, nullable=True)


class OrderDetail(Base):
    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    item_id = Column(Integer, nullable=True)
    quantity = Column(Float, nullable=True)
    price = Column(Float, nullable=True)
    cost = Column(Float, nullable=True)
    discount_amount = Column(Float, nullable=True)
    refund_qty = Column(Float, nullable=True)
    refund_amount = Column(Float, nullable=True)
    status_id = Column(Integer, nullable=True)

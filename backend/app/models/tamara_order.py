from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from app.core.database import Base


class TamaraOrder(Base):
    """Links a POS order to the Tamara checkout created for it."""

    __tablename__ = "tamara_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    tamara_order_id = Column(String(100), nullable=False, unique=True, index=True)
    tamara_checkout_id = Column(String(100), nullable=False)
    last_event_type = Column(String(50), nullable=True)
    last_status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

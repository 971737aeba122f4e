"""Moyasar payment notifications, one row per payment."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text, func

from app.core.database import Base


class MoyasarPaymentWebhook(Base):
    __tablename__ = "moyasar_payment_webhooks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    payment_id = Column(String(100), nullable=False, unique=True, index=True)
    status = Column(String(50), nullable=True)
    amount = Column(Integer, nullable=True)
    currency = Column(String(10), nullable=True)
    payment_method = Column(String(50), nullable=True)
    customer_id = Column(Integer, nullable=True)
    customer_phone_number = Column(String(30), nullable=True)
    offer_id = Column(Integer, nullable=True)
    payment_value = Column(Numeric(18, 2), nullable=True)
    webhook_payload = Column(Text, nullable=True)
    event_type = Column(String(100), nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_processed = Column(Boolean, nullable=False, default=False)
    processed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

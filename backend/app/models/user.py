"""Merchant account. ``password`` doubles as the merchant's API key."""

from sqlalchemy import Column, DateTime, Float, Integer, String, func

from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(255), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    password = Column(String(255), nullable=True, index=True)
    company = Column(String(255), nullable=True)
    company_code = Column(String(50), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    contact_no = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    country_id = Column(String(10), nullable=True)
    vat_no = Column(String(50), nullable=True)
    tax = Column(Float, nullable=True)
    status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

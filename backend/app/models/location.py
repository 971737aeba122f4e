from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, func

from app.core.database import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    company_code = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    contact_no = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    country_id = Column(String(10), nullable=True)
    currency = Column(String(10), nullable=True)
    vat_no = Column(String(50), nullable=True)
    tax = Column(Float, nullable=True)
    status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

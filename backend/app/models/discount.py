from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Time

from app.core.database import Base


class Discount(Base):
    __tablename__ = "discounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    discount_type = Column(String(50), nullable=True)
    value = Column(Float, nullable=True)
    from_date = Column(DateTime, nullable=True)
    to_date = Column(DateTime, nullable=True)
    from_time = Column(Time, nullable=True)
    to_time = Column(Time, nullable=True)
    discount_by = Column(String(50), nullable=True)
    is_coupon_code = Column(Boolean, nullable=True)
    code = Column(String(100), nullable=True)
    no_of_redemption = Column(Integer, nullable=True)
    status_id = Column(Integer, nullable=True)
    last_updated_at = Column(DateTime, nullable=True)
    last_updated_by = Column(String(255), nullable=True)

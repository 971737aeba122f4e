"""Purchase bills recorded at a location, synced to VOM."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class Bill(Base):
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    bill_no = Column(String(100), nullable=True)
    date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    remarks = Column(String(500), nullable=True)
    sub_total = Column(Float, nullable=True)
    discount = Column(Float, nullable=True)
    tax = Column(Float, nullable=True)
    total = Column(Float, nullable=True)
    status_id = Column(Integer, nullable=True)

    details = relationship("BillDetail", back_populates="bill", order_by="BillDetail.id")


class BillDetail(Base):
    __tablename__ = "bill_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bill_id = Column(Integer, ForeignKey("bills.id"), nullable=False, index=True)
    item_id = Column(Integer, nullable=True)
    quantity = Column(Integer, nullable=True)
    cost = Column(Float, nullable=True)
    price = Column(Float, nullable=True)
    total = Column(Float, nullable=True)
    remarks = Column(String(500), nullable=True)
    status_id = Column(Integer, nullable=True)

    bill = relationship("Bill", back_populates="details")

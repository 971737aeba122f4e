from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func

from app.core.database import Base


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sub_category_id = Column(Integer, ForeignKey("sub_categories.id"), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    barcode = Column(String(100), nullable=True)
    cost = Column(Float, nullable=True)
    price = Column(Float, nullable=True)
    unit_id = Column(Integer, nullable=True)
    status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class UniqueItemMap(Base):
    """Maps a per-location item to the product id shared across locations."""

    __tablename__ = "unique_item_map"
    __table_args__ = (
        UniqueConstraint("item_id", "location_id", name="uq_unique_item_map_item_location"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    location_id = Column(Integer, nullable=False, index=True)
    unique_item_id = Column(Integer, nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    location_name = Column(String(255), nullable=True)

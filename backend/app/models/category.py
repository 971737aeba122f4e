from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from app.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, nullable=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    image = Column(String(500), nullable=True)
    display_order = Column(Integer, nullable=True)
    status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class SubCategory(Base):
    __tablename__ = "sub_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    status_id = Column(Integer, nullable=True)

from sqlalchemy import Column, DateTime, Integer, String, func

from app.core.database import Base


class Unit(Base):
    """Unit of measure. The unit name doubles as its symbol."""

    __tablename__ = "units"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    status_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

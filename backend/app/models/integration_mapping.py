"""IntegrationMapping model linking local POS records to external system IDs."""

from enum import Enum

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint, func

from app.core.database import Base


class IntegrationProvider(str, Enum):
    BOUKAK = "boukak"
    VOM = "vom"


class MappableType(str, Enum):
    CUSTOMER = "customer"
    UNIT = "unit"
    SUPPLIER = "supplier"
    CATEGORY = "category"
    PRODUCT = "product"
    BILL = "bill"


class IntegrationMapping(Base):
    """One row per (provider, type, local record, location)."""

    __tablename__ = "integration_mappings"
    __table_args__ = (
        UniqueConstraint(
            "provider",
            "mappable_type",
            "local_id",
            "location_id",
            name="uq_integration_mappings_provider_type_local_location",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider = Column(String(50), nullable=False, index=True)
    mappable_type = Column(String(50), nullable=False)
    local_id = Column(Integer, nullable=False)
    location_id = Column(Integer, nullable=False, default=0)
    external_id = Column(String(255), nullable=False, index=True)
    external_data = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

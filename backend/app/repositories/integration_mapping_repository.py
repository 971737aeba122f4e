"""IntegrationMapping repository for data access."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.integration_mapping import IntegrationMapping
from app.models.shared import utc_now


@dataclass(frozen=True)
class MappingKey:
    """Natural key of a mapping row."""

    provider: str
    mappable_type: str
    local_id: int
    location_id: int


class IntegrationMappingRepository:
    """Repository for IntegrationMapping model."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: MappingKey) -> IntegrationMapping | None:
        return (
            self.db.query(IntegrationMapping)
            .filter(
                IntegrationMapping.provider == key.provider,
                IntegrationMapping.mappable_type == key.mappable_type,
                IntegrationMapping.local_id == key.local_id,
                IntegrationMapping.location_id == key.location_id,
            )
            .first()
        )

    def get_by_external_id(
        self,
        provider: str,
        mappable_type: str,
        external_id: str,
    ) -> IntegrationMapping | None:
        return (
            self.db.query(IntegrationMapping)
            .filter(
                IntegrationMapping.provider == provider,
                IntegrationMapping.mappable_type == mappable_type,
                IntegrationMapping.external_id == external_id,
            )
            .first()
        )

    def count(self, provider: str, mappable_type: str, location_id: int | None = None) -> int:
        query = self.db.query(IntegrationMapping).filter(
            IntegrationMapping.provider == provider,
            IntegrationMapping.mappable_type == mappable_type,
        )
        if location_id is not None:
            query = query.filter(IntegrationMapping.location_id == location_id)
        return query.count()

    def insert_if_absent(
        self,
        key: MappingKey,
        external_id: str,
        external_data: dict[str, Any] | None = None,
    ) -> tuple[IntegrationMapping, bool]:
        """Insert a mapping unless one already exists for *key*.

        Returns ``(mapping, created)``. When a concurrent writer wins the race
        the unique constraint rejects this insert and the stored row is
        returned with ``created=False``.
        """
        mapping = IntegrationMapping(
            provider=key.provider,
            mappable_type=key.mappable_type,
            local_id=key.local_id,
            location_id=key.location_id,
            external_id=external_id,
            external_data=external_data,
        )
        self.db.add(mapping)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get(key)
            if existing is None:
                raise
            return existing, False
        self.db.refresh(mapping)
        return mapping, True

    def upsert(
        self,
        key: MappingKey,
        external_id: str,
        external_data: dict[str, Any] | None = None,
    ) -> IntegrationMapping:
        """Insert a mapping, or point the existing one at *external_id*."""
        mapping = self.get(key)
        if mapping is None:
            mapping, created = self.insert_if_absent(key, external_id, external_data)
            if created:
                return mapping
        if mapping.external_id == external_id and external_data in (None, mapping.external_data):
            return mapping
        mapping.external_id = external_id  # type: ignore[assignment]
        if external_data is not None:
            mapping.external_data = external_data  # type: ignore[assignment]
        mapping.updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(mapping)
        return mapping

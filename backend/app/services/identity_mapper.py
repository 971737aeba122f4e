"""Idempotent mapping of local records to their external counterparts."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from app.models.integration_mapping import IntegrationMapping
from app.repositories.integration_mapping_repository import (
    IntegrationMappingRepository,
    MappingKey,
)
from app.services.integrations.base import IntegrationSyncResult

logger = logging.getLogger(__name__)


def _mapping_result(mapping: IntegrationMapping, status: str) -> IntegrationSyncResult:
    return IntegrationSyncResult(
        success=True,
        external_id=str(mapping.external_id),
        external_data=mapping.external_data,  # type: ignore[arg-type]
        details={"status": status},
    )


class ExternalIdentityMapper:
    """Resolves a local record's external id, creating it at most once.

    Existing mappings short-circuit without calling the external system.
    Inserts rely on the table's unique constraint, so two concurrent creators
    for the same key end up sharing the first stored external id.
    """

    def __init__(self, db: Session):
        self.repo = IntegrationMappingRepository(db)

    def get(self, key: MappingKey) -> IntegrationMapping | None:
        return self.repo.get(key)

    def resolve_or_create(
        self,
        key: MappingKey,
        creator: Callable[[], IntegrationSyncResult],
    ) -> IntegrationSyncResult:
        existing = self.repo.get(key)
        if existing is not None:
            return _mapping_result(existing, "existing")

        result = creator()
        if not result.success:
            return result
        if not result.external_id:
            return IntegrationSyncResult(
                success=False,
                error="External system did not return an id",
                details=result.details,
            )

        mapping, created = self.repo.insert_if_absent(
            key, result.external_id, result.external_data
        )
        if not created:
            logger.warning(
                "Concurrent mapping insert for %s/%s local_id=%s; keeping external_id=%s",
                key.provider,
                key.mappable_type,
                key.local_id,
                mapping.external_id,
            )
            return _mapping_result(mapping, "existing")

        result.details = {**result.details, "status": "created"}
        return result

    def upsert(
        self,
        key: MappingKey,
        external_id: str,
        external_data: dict[str, Any] | None = None,
    ) -> IntegrationMapping:
        return self.repo.upsert(key, external_id, external_data)

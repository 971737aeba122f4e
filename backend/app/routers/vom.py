"""VOM accounting catalog sync endpoints.

Each sync pushes one kind of record for the caller's session location.
Suppliers and categories should be synced before products, and products
before bills, because later syncs resolve earlier VOM ids from the mapping
table.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.auth import SessionPrincipal, get_session_principal
from app.core.database import get_db
from app.schemas.vom import VomSyncResponse
from app.services.integrations.vom import VomClient
from app.services.vom_sync_service import VomSyncError, VomSyncService

router = APIRouter()

SYNC_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Nothing to sync locally, or VOM could not be read"},
    401: {"description": "Invalid session"},
}


def get_vom_client() -> VomClient:
    return VomClient()


def _run(sync: Callable[[], dict[str, Any]]) -> VomSyncResponse:
    try:
        result = sync()
    except VomSyncError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return VomSyncResponse.model_validate(result)


@router.post(
    "/units/sync", response_model=VomSyncResponse, summary="Sync units", responses=SYNC_RESPONSES
)
async def sync_units(
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    vom: VomClient = Depends(get_vom_client),
) -> VomSyncResponse:
    service = VomSyncService(db, vom)
    return _run(lambda: service.sync_units(principal.location_id))


@router.post(
    "/suppliers/sync",
    response_model=VomSyncResponse,
    summary="Sync suppliers",
    responses=SYNC_RESPONSES,
)
async def sync_suppliers(
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    vom: VomClient = Depends(get_vom_client),
) -> VomSyncResponse:
    service = VomSyncService(db, vom)
    return _run(lambda: service.sync_suppliers(principal.user_id, principal.location_id))


@router.post(
    "/categories/sync",
    response_model=VomSyncResponse,
    summary="Sync categories",
    responses=SYNC_RESPONSES,
)
async def sync_categories(
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    vom: VomClient = Depends(get_vom_client),
) -> VomSyncResponse:
    service = VomSyncService(db, vom)
    return _run(lambda: service.sync_categories(principal.location_id))


@router.post(
    "/products/sync",
    response_model=VomSyncResponse,
    summary="Sync products",
    responses=SYNC_RESPONSES,
)
async def sync_products(
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    vom: VomClient = Depends(get_vom_client),
) -> VomSyncResponse:
    """Match products by barcode or name, creating the rest with mapped category and unit."""
    service = VomSyncService(db, vom)
    return _run(lambda: service.sync_products(principal.location_id))


@router.post(
    "/bills/sync", response_model=VomSyncResponse, summary="Sync bills", responses=SYNC_RESPONSES
)
async def sync_bills(
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    vom: VomClient = Depends(get_vom_client),
) -> VomSyncResponse:
    """Push purchase bills; suppliers and products must already be mapped."""
    service = VomSyncService(db, vom)
    return _run(lambda: service.sync_bills(principal.location_id))

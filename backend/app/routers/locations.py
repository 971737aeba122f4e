from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import get_api_key_user
from app.core.database import get_db
from app.models.user import User
from app.repositories.location_repository import LocationRepository
from app.schemas.merchant import LocationResponse

router = APIRouter()


@router.get(
    "",
    response_model=list[LocationResponse],
    summary="List locations",
    responses={401: {"description": "Invalid or missing API key"}},
)
async def list_locations(
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> list[LocationResponse]:
    """List the merchant's active locations."""
    locations = LocationRepository(db).get_active_for_user(user.id)  # type: ignore[arg-type]
    return [
        LocationResponse(locationId=loc.id, name=loc.name)  # type: ignore[arg-type]
        for loc in locations
    ]

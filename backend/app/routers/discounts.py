from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.auth import get_customer_id
from app.core.database import get_db
from app.models.discount import Discount
from app.repositories.discount_repository import DiscountRepository
from app.schemas.discount import DiscountListResponse, DiscountResponse

router = APIRouter()


def _to_response(discount: Discount) -> DiscountResponse:
    return DiscountResponse(
        DiscountID=discount.id,  # type: ignore[arg-type]
        Name=discount.name,  # type: ignore[arg-type]
        DiscountType=discount.discount_type,  # type: ignore[arg-type]
        Value=discount.value,  # type: ignore[arg-type]
        FromDate=discount.from_date,  # type: ignore[arg-type]
        ToDate=discount.to_date,  # type: ignore[arg-type]
        FromTime=discount.from_time,  # type: ignore[arg-type]
        ToTime=discount.to_time,  # type: ignore[arg-type]
        LocationID=discount.location_id,  # type: ignore[arg-type]
        LastUpdatedDate=discount.last_updated_at,  # type: ignore[arg-type]
        LastUpdatedBy=discount.last_updated_by,  # type: ignore[arg-type]
        StatusID=discount.status_id,  # type: ignore[arg-type]
        DiscountBy=discount.discount_by,  # type: ignore[arg-type]
        IsCouponCode=discount.is_coupon_code,  # type: ignore[arg-type]
        Code=discount.code,  # type: ignore[arg-type]
        NoOfRedemption=discount.no_of_redemption,  # type: ignore[arg-type]
    )


@router.get(
    "",
    response_model=DiscountListResponse,
    summary="List active discounts",
    responses={
        400: {"description": "Missing or non-numeric LocationID"},
        401: {"description": "Invalid or missing customer token"},
    },
)
async def list_discounts(
    location_id: str | None = Query(default=None, alias="LocationID"),
    db: Session = Depends(get_db),
    customer_id: str = Depends(get_customer_id),
) -> DiscountListResponse:
    """Active discounts at a location, for an authenticated customer."""
    try:
        parsed_location = int(location_id)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=400,
            detail="LocationID parameter is required and must be a valid integer",
        ) from None

    discounts = DiscountRepository(db).get_active_for_location(parsed_location)
    return DiscountListResponse(
        message="Discounts retrieved successfully",
        customer_id=customer_id,
        LocationID=parsed_location,
        total_discounts=len(discounts),
        discounts=[_to_response(d) for d in discounts],
    )

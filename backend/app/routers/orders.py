from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.auth import get_api_key_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.order import OrderPayloadResponse
from app.services.order_payload_service import OrderPayloadService

router = APIRouter()


@router.get(
    "/payload",
    response_model=OrderPayloadResponse,
    summary="Get order payload",
    responses={
        400: {"description": "Missing or non-numeric orderId"},
        401: {"description": "Invalid or missing API key"},
        404: {"description": "Order not found"},
    },
)
async def get_order_payload(
    order_id: str | None = Query(default=None, alias="orderId"),
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> OrderPayloadResponse:
    """Order totals and line items in the shape loyalty partners consume."""
    try:
        parsed_id = int(order_id)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Valid order ID is required") from None

    try:
        payload = OrderPayloadService(db).build(parsed_id, user)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return OrderPayloadResponse.model_validate(payload)

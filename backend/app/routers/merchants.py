"""Merchant API endpoints."""

from fastapi import APIRouter, Depends

from app.core.auth import get_api_key_user
from app.models.user import User
from app.schemas.merchant import MerchantVerifyResponse

router = APIRouter()


@router.get(
    "/verify",
    response_model=MerchantVerifyResponse,
    summary="Verify merchant API key",
    responses={401: {"description": "Invalid or missing API key"}},
)
async def verify_merchant(user: User = Depends(get_api_key_user)) -> MerchantVerifyResponse:
    """Return the company the API key belongs to."""
    return MerchantVerifyResponse(
        Company=user.company,  # type: ignore[arg-type]
        CompanyCode=user.company_code,  # type: ignore[arg-type]
    )

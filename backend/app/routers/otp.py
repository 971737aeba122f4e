import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.auth import verify_otp_token
from app.core.phone import is_valid_sms_recipient
from app.core.request_body import parse_json_body
from app.schemas.otp import OtpSendRequest, OtpSendResponse
from app.services.integrations.unifonic import UnifonicClient
from app.services.otp_service import OtpDeliveryError, OtpService, otp_rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter()


def get_sms_client() -> UnifonicClient:
    return UnifonicClient()


@router.post(
    "/send",
    response_model=OtpSendResponse,
    summary="Send OTP",
    dependencies=[Depends(verify_otp_token)],
    responses={
        400: {"description": "Invalid recipient or SMS delivery failed"},
        401: {"description": "Invalid or missing X-Auth-Token"},
        429: {"description": "Too many OTP requests for this recipient"},
    },
)
async def send_otp(
    request: Request,
    sms: UnifonicClient = Depends(get_sms_client),
) -> OtpSendResponse:
    """Text a 6-digit one-time password to a phone number (10 to 15 digits)."""
    data = await parse_json_body(request, OtpSendRequest)
    recipient = data.recipient.strip()
    if not is_valid_sms_recipient(recipient):
        raise HTTPException(
            status_code=400,
            detail="Invalid recipient phone number. Must be 10-15 digits.",
        )

    if not otp_rate_limiter.is_allowed(recipient):
        retry_after = otp_rate_limiter.retry_after(recipient)
        logger.warning("OTP rate limit exceeded for %s", recipient)
        raise HTTPException(
            status_code=429,
            detail="Too many OTP requests. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )

    try:
        otp = OtpService(sms).send(recipient)
    except OtpDeliveryError as e:
        raise HTTPException(status_code=400, detail={"success": False, "error": str(e)}) from None
    return OtpSendResponse(success=True, otp=otp)

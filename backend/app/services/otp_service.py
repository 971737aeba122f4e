import logging
import secrets

from app.core.config import settings
from app.core.rate_limiter import RateLimiter
from app.services.integrations.unifonic import UnifonicClient

logger = logging.getLogger(__name__)

otp_rate_limiter = RateLimiter(max_requests=settings.OTP_RATE_LIMIT_PER_MINUTE, window_seconds=60)


class OtpDeliveryError(Exception):
    pass


def generate_otp() -> str:
    """Six random digits, zero-padded."""
    return f"{secrets.randbelow(1_000_000):06d}"


class OtpService:
    def __init__(self, sms: UnifonicClient | None = None):
        self.sms = sms or UnifonicClient()

    def send(self, recipient: str) -> str:
        """Text a fresh OTP to *recipient* and return it.

        Raises:
            OtpDeliveryError: Unifonic did not accept the message.
        """
        otp = generate_otp()
        result = self.sms.send_sms(recipient, f"Karage OTP is: {otp}")
        if not result.success:
            raise OtpDeliveryError(result.error or "Unknown error")
        logger.info("OTP sent to %s", recipient)
        return otp

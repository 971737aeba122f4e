"""Client for the POS identity API that validates session tokens."""

import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class IdentityClient:
    """Validates a POS session against the upstream identity service.

    Unlike the other provider clients, transport errors are not swallowed:
    they propagate so the caller can answer with a 500.
    """

    def __init__(self, api_url: str | None = None, timeout: float | None = None) -> None:
        self.api_url = api_url or settings.IDENTITY_API_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    def validate_session(self, user_id: int, session_token: str) -> dict[str, Any] | None:
        """Return the identity ``User`` payload, or None when the session is rejected."""
        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(
                self.api_url,
                json={"UserID": user_id, "Session": session_token},
                headers={"Accept": "application/json"},
            )

        if not response.is_success:
            logger.warning("Identity API rejected session (status=%s)", response.status_code)
            return None
        try:
            body = response.json()
        except ValueError:
            logger.warning("Identity API returned a non-JSON body")
            return None
        if not isinstance(body, dict) or body.get("Status") != 1:
            logger.warning("Identity API returned an invalid status for user %s", user_id)
            return None
        user = body.get("User")
        if not isinstance(user, dict):
            return None
        sessions = user.get("LoginSessions")
        if not isinstance(sessions, list) or not sessions:
            logger.warning("Identity API returned no login sessions for user %s", user_id)
            return None
        return user

"""LoyalPro rewards client."""

import logging
from typing import Any

from app.core.config import settings
from app.services.integrations.base import IntegrationSyncResult, ProviderClient, response_json

logger = logging.getLogger(__name__)


class LoyalProClient(ProviderClient):
    provider_name = "LoyalPro"

    def __init__(
        self,
        auth_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(base_url or settings.LOYALPRO_API_URL, timeout)
        self.auth_token = auth_token if auth_token is not None else settings.LOYALPRO_AUTH_TOKEN

    def _post(self, action: str, payload: dict[str, Any]) -> IntegrationSyncResult:
        logger.info(
            "Calling LoyalPro %s: business_reference=%s reward_code=%s",
            action,
            payload.get("business_reference"),
            payload.get("reward_code"),
        )
        response = self._send(
            "POST",
            self._url(action),
            json=payload,
            headers={"Authorization": f"Bearer {self.auth_token}"},
        )
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to LoyalPro")
        if not response.is_success:
            result = self._failure(
                f"LoyalPro API request failed with status {response.status_code}", response
            )
            result.details["response"] = response.text
            return result
        return IntegrationSyncResult(success=True, details={"data": response_json(response)})

    def reward(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._post("reward", payload)

    def redeem(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._post("redeem", payload)

"""Tamara buy-now-pay-later in-store checkout client."""

import logging
from typing import Any

from app.core.config import settings
from app.services.integrations.base import IntegrationSyncResult, ProviderClient, response_json

logger = logging.getLogger(__name__)


class TamaraClient(ProviderClient):
    provider_name = "Tamara"

    def __init__(
        self,
        auth_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(base_url or settings.TAMARA_API_URL, timeout)
        self.auth_token = auth_token if auth_token is not None else settings.TAMARA_AUTH_TOKEN

    def create_in_store_session(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        """Open an in-store checkout session.

        On success ``external_id`` is Tamara's order id and ``external_data``
        carries the full response (``checkout_id``, ``checkout_deeplink``, ...).
        """
        response = self._send(
            "POST",
            self._url("checkout/in-store-session"),
            json=payload,
            headers={
                "accept": "application/json",
                "Authorization": f"Bearer {self.auth_token}",
            },
        )
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to Tamara")
        logger.info("Tamara session response status=%s", response.status_code)
        if not response.is_success:
            return self._failure(
                f"Tamara API request failed with status {response.status_code}", response
            )

        body = response_json(response)
        if not isinstance(body, dict):
            return self._failure("Failed to parse Tamara API response", response)
        order_id = body.get("order_id")
        return IntegrationSyncResult(
            success=True,
            external_id=str(order_id) if order_id is not None else None,
            external_data=body,
        )

"""Boukak digital loyalty card client."""

import logging
from typing import Any

from app.core.config import settings
from app.services.integrations.base import (
    ExternalEntityGateway,
    IntegrationSyncResult,
    ProviderClient,
    response_json,
)

logger = logging.getLogger(__name__)


class BoukakClient(ProviderClient, ExternalEntityGateway):
    """Creates customer cards and adds stamps through the Boukak partners API.

    Authentication is a static ``api-key`` header.
    """

    provider_name = "Boukak"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(base_url or settings.BOUKAK_API_URL, timeout)
        self.api_key = api_key if api_key is not None else settings.BOUKAK_API_KEY

    def _headers(self) -> dict[str, str]:
        return {
            "api-key": self.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def create_customer_card(self, card_request: dict[str, Any]) -> IntegrationSyncResult:
        """Create a wallet card.

        The Boukak customer and card ids arrive in the ``x-customer-id`` and
        ``x-card-id`` response headers rather than the body.
        """
        response = self._send(
            "POST",
            self._url("/v1/create-customer-card"),
            json=card_request,
            headers=self._headers(),
        )
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to Boukak")
        if not response.is_success:
            return self._failure("Failed to create Boukak customer card", response)

        body = response_json(response)
        body = body if isinstance(body, dict) else {}
        if body.get("success") is False:
            return IntegrationSyncResult(
                success=False, error=body.get("message") or "Boukak rejected the card request"
            )
        customer_id = response.headers.get("x-customer-id")
        card_id = response.headers.get("x-card-id")
        logger.info("Boukak card created: customer_id=%s card_id=%s", customer_id, card_id)
        if not customer_id or not card_id:
            return IntegrationSyncResult(
                success=False,
                error="Boukak response did not include customer or card id",
                details={"response": body},
            )
        return IntegrationSyncResult(
            success=True,
            external_id=card_id,
            external_data={"customer_id": customer_id},
            details={
                "applePassUrl": body.get("applePassUrl"),
                "passWalletUrl": body.get("passWalletUrl"),
                "message": body.get("message"),
            },
        )

    def create_or_fetch(self, entity: dict[str, Any]) -> IntegrationSyncResult:
        return self.create_customer_card(entity)

    def add_stamps(
        self,
        card_id: str,
        stamps: int,
        products: dict[str, Any] | None = None,
    ) -> IntegrationSyncResult:
        payload: dict[str, Any] = {"cardId": card_id, "stamps": stamps, "products": products}
        response = self._send(
            "POST", self._url("/v1/add-stamps"), json=payload, headers=self._headers()
        )
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to Boukak")
        if not response.is_success:
            return self._failure("Failed to add stamps to Boukak card", response)

        body = response_json(response)
        body = body if isinstance(body, dict) else {}
        if body.get("success") is False:
            return IntegrationSyncResult(
                success=False, error=body.get("message") or "Boukak rejected the stamp request"
            )
        return IntegrationSyncResult(
            success=True,
            external_id=card_id,
            details={
                "activeStamps": body.get("activeStamps", 0),
                "rewards": body.get("rewards", 0),
                "message": body.get("message"),
            },
        )

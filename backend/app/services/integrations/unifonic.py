"""Unifonic SMS client."""

import logging

from app.core.config import settings
from app.services.integrations.base import IntegrationSyncResult, ProviderClient, response_json

logger = logging.getLogger(__name__)


class UnifonicClient(ProviderClient):
    """Sends SMS through Unifonic's form-encoded REST API with Basic auth."""

    provider_name = "Unifonic"

    def __init__(
        self,
        app_sid: str | None = None,
        username: str | None = None,
        password: str | None = None,
        api_url: str | None = None,
        sender_id: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_url or settings.UNIFONIC_API_URL, timeout)
        self.app_sid = app_sid if app_sid is not None else settings.APP_SID
        self.username = username if username is not None else settings.UNIFONIC_USERNAME
        self.password = password if password is not None else settings.UNIFONIC_PASSWORD
        self.sender_id = sender_id or settings.SMS_SENDER_ID

    def send_sms(
        self,
        recipient: str,
        body: str,
        message_type: int | None = None,
    ) -> IntegrationSyncResult:
        form = {
            "AppSid": self.app_sid,
            "Body": body,
            "Recipient": recipient,
            "SenderID": self.sender_id,
            "responseType": "json",
        }
        if message_type is not None:
            form["MessageType"] = str(message_type)

        logger.info("Sending SMS via Unifonic to %s", recipient)
        response = self._send(
            "POST", self.base_url, data=form, auth=(self.username, self.password)
        )
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to SMS service")

        payload = response_json(response)
        if not isinstance(payload, dict):
            return self._failure("Unexpected response from SMS service", response)
        if not response.is_success or not payload.get("success"):
            logger.error(
                "Unifonic error: code=%s message=%s recipient=%s",
                payload.get("errorCode"),
                payload.get("message"),
                recipient,
            )
            return IntegrationSyncResult(
                success=False,
                error=payload.get("message") or "Unknown error",
                details={"status_code": response.status_code, "response": payload},
            )
        data = payload.get("data")
        message_id = data.get("MessageID") if isinstance(data, dict) else None
        return IntegrationSyncResult(
            success=True,
            external_id=str(message_id) if message_id is not None else None,
            external_data=payload,
        )

"""Sadeq e-signature client."""

import logging
from typing import Any

from app.core.config import settings
from app.services.integrations.base import IntegrationSyncResult, ProviderClient, response_json

logger = logging.getLogger(__name__)


def _data_field(body: Any, key: str) -> str | None:
    data = body.get("data") if isinstance(body, dict) else None
    value = data.get(key) if isinstance(data, dict) else None
    return str(value) if value is not None else None


class SadeqClient(ProviderClient):
    """Issues access tokens, initiates envelopes and sends signing invitations."""

    provider_name = "Sadeq"

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        super().__init__(base_url or settings.SADQ_URL, timeout)
        self.username = settings.SADQ_USERNAME
        self.password = settings.SADQ_PASSWORD
        self.account_id = settings.SADQ_ACCOUNT_ID
        self.account_secret = settings.SADQ_ACCOUNT_SECRET
        self.request_username = settings.SADQ_REQUEST_USERNAME
        self.request_password = settings.SADQ_REQUEST_PASSWORD

    def get_access_token(self) -> str | None:
        if not self.request_username or not self.request_password:
            logger.error(
                "Sadeq request credentials are not configured (username=%s, password=%s)",
                self.request_username or "None",
                "set" if self.request_password else "None",
            )
            return None
        response = self._send(
            "POST",
            self._url("/Authentication/Authority/Token"),
            data={
                "grant_type": "integration",
                "password": self.request_password,
                "username": self.request_username,
                "accountId": self.account_id,
                "accountSecret": self.account_secret,
            },
            auth=(self.username, self.password),
            headers={"accept": "application/json"},
        )
        if response is None:
            return None
        body = response_json(response)
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            logger.error("Sadeq token request failed (status=%s)", response.status_code)
            return None
        return str(token)

    def initiate_envelope_by_template(self, access_token: str, template_id: str) -> str | None:
        """Create an envelope from a stored template and return its document id."""
        response = self._send(
            "POST",
            self._url("/IntegrationService/Document/Initiate-envelope-by-template"),
            files={"TemplateId": (None, template_id), "UserOnlySigner": (None, "false")},
            headers={"accept": "text/plain", "Authorization": f"Bearer {access_token}"},
        )
        if response is None:
            return None
        document_id = _data_field(response_json(response), "documentId")
        if document_id is None:
            logger.error(
                "Sadeq envelope response had no documentId (status=%s)", response.status_code
            )
        return document_id

    def send_invitation(self, access_token: str, payload: dict[str, Any]) -> IntegrationSyncResult:
        response = self._send(
            "POST",
            self._url("/IntegrationService/Invitation/Send-Invitation"),
            json=payload,
            headers={"accept": "application/json", "Authorization": f"Bearer {access_token}"},
        )
        return self._envelope_result(response)

    def initiate_envelope_base64(
        self, access_token: str, file_name: str, content_b64: str
    ) -> IntegrationSyncResult:
        response = self._send(
            "POST",
            self._url("/IntegrationService/Document/Initiate-envelope-Base64"),
            json={"UserOnlySigner": False, "File": {"FileName": file_name, "File": content_b64}},
            headers={"accept": "application/json", "Authorization": f"Bearer {access_token}"},
        )
        return self._envelope_result(response)

    def _envelope_result(self, response: Any) -> IntegrationSyncResult:
        """Wrap an envelope reply, keeping the upstream status and body."""
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to Sadeq")
        body = response_json(response)
        if not response.is_success:
            logger.error("Sadeq API returned %s: %s", response.status_code, response.text[:500])
        return IntegrationSyncResult(
            success=response.is_success,
            external_id=_data_field(body, "envelopId"),
            external_data={"documentId": _data_field(body, "documentId")},
            error=None if response.is_success else f"API returned {response.status_code}",
            details={"status_code": response.status_code, "response": body},
        )

"""Gateway base classes shared by the external provider clients.

Every provider client talks HTTP through ``httpx`` and reports failures as an
``IntegrationSyncResult`` with ``success=False`` instead of raising, so request
handlers can decide how to surface them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class IntegrationSyncResult:
    """Result of a call to an external system."""

    success: bool
    external_id: str | None = None
    external_data: dict[str, Any] | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class ExternalEntityGateway(ABC):
    """Creates an entity in an external system, or finds the one already there."""

    @abstractmethod
    def create_or_fetch(self, entity: dict[str, Any]) -> IntegrationSyncResult:
        """Return the external identity for *entity*."""
        ...  # pragma: no cover


class ProviderClient:
    """Thin ``httpx`` wrapper with a base URL and a timeout."""

    provider_name = "provider"

    def __init__(self, base_url: str, timeout: float | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response | None:
        """Send a request, returning None on transport errors."""
        try:
            with httpx.Client(timeout=self.timeout) as client:
                return client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s request to %s failed: %s", self.provider_name, url, exc)
            return None

    def _failure(self, message: str, response: httpx.Response | None) -> IntegrationSyncResult:
        details: dict[str, Any] = {}
        if response is not None:
            details = {"status_code": response.status_code, "response": response.text[:1000]}
            logger.error(
                "%s API error: %s (status=%s)", self.provider_name, message, response.status_code
            )
        return IntegrationSyncResult(success=False, error=message, details=details)


def response_json(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text

"""VOM accounting API client.

VOM authenticates with an email/password login that yields a bearer token.
Tokens are kept in a ``TokenCache`` keyed by the login email and refreshed
once when a request comes back 401.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from app.core.config import settings
from app.core.token_cache import TokenCache
from app.services.integrations.base import (
    ExternalEntityGateway,
    IntegrationSyncResult,
    ProviderClient,
    response_json,
)

logger = logging.getLogger(__name__)

VOM_HEADERS = {
    "Api-Agent": "ios",
    "Accept": "application/json",
    "Accept-Language": "en",
}

UNITS_PATH = "/api/products/units"
SUPPLIERS_PATH = "/api/purchases/suppliers"
CATEGORIES_PATH = "/api/products/categories"
PRODUCTS_PATH = "/api/products/products"
PURCHASE_BILLS_PATH = "/api/purchases/purchase-bills"

vom_token_cache = TokenCache(ttl_seconds=settings.VOM_TOKEN_TTL_SECONDS)


def _unwrap_list(data: Any, key: str) -> list[dict[str, Any]]:
    """VOM nests lists under ``data``, sometimes under ``data.<key>``."""
    if isinstance(data, dict) and key in data:
        data = data[key]
    if isinstance(data, list):
        return [entry for entry in data if isinstance(entry, dict)]
    if isinstance(data, dict) and data:
        return [data]
    return []


class VomClient(ProviderClient):
    provider_name = "VOM"

    def __init__(
        self,
        email: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        token_cache: TokenCache | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(base_url or settings.VOM_API_URL, timeout)
        self.email = email if email is not None else settings.VOM_EMAIL
        self.password = password if password is not None else settings.VOM_PASSWORD
        self.token_cache = token_cache if token_cache is not None else vom_token_cache

    # -- authentication ---------------------------------------------------

    def login(self) -> str | None:
        """Log in and cache a fresh token. Returns None when login fails."""
        response = self._send(
            "POST",
            self._url("/api/companyuser/login"),
            json={"email": self.email, "password": self.password},
            headers=VOM_HEADERS,
        )
        if response is None or not response.is_success:
            logger.error(
                "Failed to authenticate with VOM (status=%s)",
                response.status_code if response is not None else None,
            )
            return None
        body = response_json(response)
        data = body.get("data") if isinstance(body, dict) else None
        token = data.get("token") if isinstance(data, dict) else None
        if not (isinstance(body, dict) and body.get("success") and token):
            logger.error("VOM login response did not contain a token")
            return None
        self.token_cache.set(self.email, token)
        logger.info("Obtained VOM token %s...", token[:6])
        return str(token)

    def get_token(self) -> str | None:
        return self.token_cache.get(self.email) or self.login()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response | None:
        token = self.get_token()
        if token is None:
            return None
        url = self._url(path)
        response = self._send(
            method, url, headers={**VOM_HEADERS, "Authorization": f"Bearer {token}"}, **kwargs
        )
        if response is not None and response.status_code == 401:
            logger.warning("VOM rejected cached token, logging in again")
            self.token_cache.invalidate(self.email)
            token = self.login()
            if token is None:
                return response
            response = self._send(
                method, url, headers={**VOM_HEADERS, "Authorization": f"Bearer {token}"}, **kwargs
            )
        return response

    # -- reads ------------------------------------------------------------

    def _list(
        self, path: str, key: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]] | None:
        response = self._request("GET", path, params=params)
        if response is None or not response.is_success:
            logger.error(
                "GET %s failed (status=%s)",
                path,
                response.status_code if response is not None else None,
            )
            return None
        body = response_json(response)
        if not isinstance(body, dict):
            return []
        return _unwrap_list(body.get("data"), key)

    def list_units(self) -> list[dict[str, Any]] | None:
        return self._list(UNITS_PATH, "units")

    def list_suppliers(self) -> list[dict[str, Any]] | None:
        return self._list(SUPPLIERS_PATH, "suppliers")

    def list_categories(self) -> list[dict[str, Any]] | None:
        return self._list(CATEGORIES_PATH, "categories")

    def list_purchase_bills(self) -> list[dict[str, Any]] | None:
        return self._list(PURCHASE_BILLS_PATH, "purchase_bills")

    def list_products(self) -> list[dict[str, Any]] | None:
        return self._list(PRODUCTS_PATH, "products")

    def search_products(self, name: str) -> list[dict[str, Any]] | None:
        return self._list(PRODUCTS_PATH, "products", params={"search": name})

    # -- writes -----------------------------------------------------------

    def _create(self, path: str, payload: dict[str, Any], nested_key: str) -> IntegrationSyncResult:
        """POST *payload*; VOM wraps replies as ``{status, data, success}``."""
        response = self._request("POST", path, json=payload)
        if response is None:
            return IntegrationSyncResult(success=False, error="Failed to connect to VOM")
        body = response_json(response)
        if not response.is_success or not (isinstance(body, dict) and body.get("success")):
            message = body.get("message") if isinstance(body, dict) else None
            return self._failure(message or f"VOM request to {path} failed", response)

        data = body.get("data")
        if isinstance(data, dict) and isinstance(data.get(nested_key), dict):
            data = data[nested_key]
        if not isinstance(data, dict) or data.get("id") is None:
            return self._failure("VOM response did not include an id", response)
        return IntegrationSyncResult(success=True, external_id=str(data["id"]), external_data=data)

    def create_unit(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._create(UNITS_PATH, payload, "unit")

    def create_supplier(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._create(SUPPLIERS_PATH, payload, "supplier")

    def create_category(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._create(CATEGORIES_PATH, payload, "category")

    def create_product(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._create(PRODUCTS_PATH, payload, "product")

    def create_purchase_bill(self, payload: dict[str, Any]) -> IntegrationSyncResult:
        return self._create(PURCHASE_BILLS_PATH, payload, "purchase_bill")


class VomCatalogGateway(ExternalEntityGateway):
    """Match a payload against records already in VOM, creating it when absent.

    ``find`` receives the payload and returns the matching VOM record or None;
    ``create`` posts the payload to VOM.
    """

    def __init__(
        self,
        find: Callable[[dict[str, Any]], dict[str, Any] | None],
        create: Callable[[dict[str, Any]], IntegrationSyncResult],
    ) -> None:
        self.find = find
        self.create = create

    def create_or_fetch(self, entity: dict[str, Any]) -> IntegrationSyncResult:
        match = self.find(entity)
        if match is not None and match.get("id") is not None:
            return IntegrationSyncResult(
                success=True,
                external_id=str(match["id"]),
                external_data=match,
                details={"status": "matched"},
            )
        result = self.create(entity)
        if result.success:
            result.details.setdefault("status", "created")
        return result


def match_by_name(
    records: list[dict[str, Any]], *fields: str
) -> Callable[[str | None], dict[str, Any] | None]:
    """Build a case-insensitive lookup over *records* keyed on *fields*."""
    index: dict[str, dict[str, Any]] = {}
    for record in records:
        for name_field in fields:
            value = record.get(name_field)
            if isinstance(value, str) and value.strip():
                index.setdefault(value.strip().lower(), record)

    def lookup(name: str | None) -> dict[str, Any] | None:
        if not name:
            return None
        return index.get(name.strip().lower())

    return lookup

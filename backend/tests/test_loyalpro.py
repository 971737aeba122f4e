"""Tests for the LoyalPro reward and redeem proxies."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers.loyalpro import get_loyalpro_client
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.loyalpro import LoyalProClient


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def loyalpro():
    fake = MagicMock(spec=LoyalProClient)
    fake.reward.return_value = IntegrationSyncResult(success=True, details={"data": {"ok": 1}})
    fake.redeem.return_value = IntegrationSyncResult(success=True, details={"data": {"ok": 2}})
    app.dependency_overrides[get_loyalpro_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_loyalpro_client, None)


REDEEM_BODY = {
    "discount_amount": 25.5,
    "redeemed_products": [{"id": 1}],
    "user_id": "u-1",
    "branch_id": "b-1",
    "order_id": "o-1",
    "reward_code": "RW-9",
}


class TestReward:
    def test_reward_prepends_business_reference(self, client, session_principal, loyalpro):
        response = client.post(
            "/v1/loyalpro/reward", json={"branch_id": "b-1", "reward_code": "RW-1"}
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"ok": 1}}
        loyalpro.reward.assert_called_once_with(
            {"business_reference": "POS-KARAGE", "branch_id": "b-1", "reward_code": "RW-1"}
        )

    def test_missing_fields(self, client, session_principal, loyalpro):
        response = client.post("/v1/loyalpro/reward", json={"branch_id": "b-1"})
        assert response.status_code == 400
        assert "reward_code" in response.json()["detail"]
        loyalpro.reward.assert_not_called()

    def test_upstream_failure(self, client, session_principal, loyalpro):
        loyalpro.reward.return_value = IntegrationSyncResult(
            success=False,
            error="LoyalPro API request failed with status 422",
            details={"response": '{"error":"bad code"}'},
        )
        response = client.post(
            "/v1/loyalpro/reward", json={"branch_id": "b-1", "reward_code": "RW-1"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "success": False,
            "message": "LoyalPro API request failed with status 422",
            "details": '{"error":"bad code"}',
        }

    def test_requires_session(self, client, loyalpro):
        response = client.post(
            "/v1/loyalpro/reward", json={"branch_id": "b-1", "reward_code": "RW-1"}
        )
        assert response.status_code == 401


class TestRedeem:
    def test_redeem(self, client, session_principal, loyalpro):
        response = client.post("/v1/loyalpro/redeem", json=REDEEM_BODY)
        assert response.status_code == 200
        sent = loyalpro.redeem.call_args.args[0]
        assert sent["business_reference"] == "POS-KARAGE"
        assert sent["redeemed_combos"] == []
        assert sent["discount_amount"] == 25.5

    def test_invalid_discount(self, client, session_principal, loyalpro):
        response = client.post(
            "/v1/loyalpro/redeem", json={**REDEEM_BODY, "discount_amount": "lots"}
        )
        assert response.status_code == 400


class TestLoyalProClient:
    def _mock_client(self, mock_client_cls, response=None, error=None):
        mock_client = MagicMock()
        mock_client_cls.return_value.__enter__ = MagicMock(return_value=mock_client)
        mock_client_cls.return_value.__exit__ = MagicMock(return_value=False)
        if error is not None:
            mock_client.request.side_effect = error
        else:
            mock_client.request.return_value = response
        return mock_client

    def test_success(self):
        response = MagicMock(is_success=True, status_code=200)
        response.json.return_value = {"points": 10}
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            mock_client = self._mock_client(mock_client_cls, response)
            result = LoyalProClient(auth_token="tok", base_url="https://lp.test/api/").reward(
                {"business_reference": "POS-X"}
            )

        assert result.success is True
        assert result.details["data"] == {"points": 10}
        method, url = mock_client.request.call_args.args
        assert method == "POST"
        assert url == "https://lp.test/api/reward"
        assert mock_client.request.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}

    def test_error_status_keeps_body(self):
        response = MagicMock(is_success=False, status_code=500, text="boom")
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            self._mock_client(mock_client_cls, response)
            result = LoyalProClient(auth_token="tok").redeem({})

        assert result.success is False
        assert result.error == "LoyalPro API request failed with status 500"
        assert result.details == {"status_code": 500, "response": "boom"}

    def test_transport_error(self):
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            self._mock_client(mock_client_cls, error=httpx.ConnectError("refused"))
            result = LoyalProClient(auth_token="tok").reward({})

        assert result.success is False
        assert result.error == "Failed to connect to LoyalPro"

"""Tests for Boukak loyalty card endpoints and LoyaltyService."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.customer import Customer
from app.models.integration_mapping import IntegrationMapping
from app.models.order import Order, OrderCheckout
from app.models.shared import ACTIVE_STATUS, OrderStatus
from app.routers.loyalty import get_boukak_client
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.boukak import BoukakClient
from app.services.loyalty_service import (
    LoyaltyRequestError,
    LoyaltyService,
    build_card_request,
    customer_card_key,
)


def _card_result(card_id="card-abc", customer_id="bk-cust-1"):
    return IntegrationSyncResult(
        success=True,
        external_id=card_id,
        external_data={"customer_id": customer_id},
        details={
            "applePassUrl": "https://boukak.test/apple",
            "passWalletUrl": "https://boukak.test/wallet",
            "message": "ok",
        },
    )


@pytest.fixture
def boukak():
    """A BoukakClient double installed as the request dependency."""
    fake = MagicMock(spec=BoukakClient)
    fake.create_or_fetch.return_value = _card_result()
    fake.add_stamps.return_value = IntegrationSyncResult(
        success=True, external_id="card-abc", details={"activeStamps": 4, "rewards": 1}
    )
    app.dependency_overrides[get_boukak_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_boukak_client, None)


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def completed_order(db_session, location, customer):
    order = Order(
        location_id=location.id, customer_id=customer.id, status_id=OrderStatus.COMPLETED
    )
    db_session.add(order)
    db_session.flush()
    db_session.add(OrderCheckout(order_id=order.id, grand_total=150.0))
    db_session.commit()
    db_session.refresh(order)
    return order


class TestCardRequest:
    def test_build_card_request(self, customer):
        request = build_card_request(customer, "tpl-1", "ios", "ar", 5)
        assert request == {
            "templateId": "tpl-1",
            "platform": "ios",
            "language": "ar",
            "customerData": {
                "firstname": "Sara",
                "lastname": "Al",
                "phone": "+966501234567",
                "email": "sara@example.com",
                "dob": "1990-04-12",
                "gender": "F",
                "initialCashback": 5,
            },
        }

    def test_key_defaults_location_to_zero(self, db_session):
        walk_in = Customer(full_name="Walk In", mobile="+966500000000", status_id=ACTIVE_STATUS)
        db_session.add(walk_in)
        db_session.commit()
        assert customer_card_key(walk_in).location_id == 0


class TestCreateCard:
    def test_create_card(self, client, boukak, customer, db_session):
        response = client.post("/v1/loyalty/cards", json={"CustomerId": customer.id})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "created"
        assert data["boukakCardId"] == "card-abc"
        assert data["boukakCustomerId"] == "bk-cust-1"
        assert data["applePassUrl"] == "https://boukak.test/apple"

        sent = boukak.create_or_fetch.call_args.args[0]
        assert sent["templateId"] == "default-template-id"
        assert sent["platform"] == "android"
        assert sent["language"] == "en"

        mapping = db_session.query(IntegrationMapping).one()
        assert mapping.provider == "boukak"
        assert mapping.local_id == customer.id
        assert mapping.location_id == customer.location_id

    def test_second_request_reuses_card(self, client, boukak, customer):
        client.post("/v1/loyalty/cards", json={"CustomerId": customer.id})
        response = client.post("/v1/loyalty/cards", json={"CustomerId": customer.id})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "existing"
        assert data["boukakCardId"] == "card-abc"
        assert data["message"] == "Customer already has a Boukak card"
        boukak.create_or_fetch.assert_called_once()

    def test_custom_template(self, client, boukak, customer):
        client.post(
            "/v1/loyalty/cards",
            json={"CustomerId": customer.id, "TemplateId": "tpl-9", "Platform": "ios"},
        )
        sent = boukak.create_or_fetch.call_args.args[0]
        assert sent["templateId"] == "tpl-9"
        assert sent["platform"] == "ios"

    def test_unknown_customer(self, client, boukak):
        response = client.post("/v1/loyalty/cards", json={"CustomerId": 404})
        assert response.status_code == 404
        boukak.create_or_fetch.assert_not_called()

    def test_inactive_customer(self, client, boukak, db_session, customer):
        customer.status_id = 0
        db_session.commit()
        response = client.post("/v1/loyalty/cards", json={"CustomerId": customer.id})
        assert response.status_code == 404

    def test_boukak_failure(self, client, boukak, customer, db_session):
        boukak.create_or_fetch.return_value = IntegrationSyncResult(
            success=False, error="Failed to connect to Boukak"
        )
        response = client.post("/v1/loyalty/cards", json={"CustomerId": customer.id})

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Failed to create Boukak customer card",
            "message": "Failed to connect to Boukak",
        }
        assert db_session.query(IntegrationMapping).count() == 0

    def test_invalid_body(self, client, boukak):
        response = client.post("/v1/loyalty/cards", json={"CustomerId": 0})
        assert response.status_code == 400


class TestAddStamps:
    @pytest.fixture
    def card(self, db_session, customer):
        mapper = LoyaltyService(db_session, MagicMock()).mapper
        mapper.upsert(customer_card_key(customer), "card-abc")

    def test_add_stamps(self, client, boukak, completed_order, card):
        response = client.post(
            "/v1/loyalty/stamps", json={"OrderId": completed_order.id, "Stamps": 2}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["stampsAdded"] == 2
        assert data["activeStamps"] == 4
        assert data["rewards"] == 1
        boukak.add_stamps.assert_called_once_with(
            "card-abc", 2, {"name": f"Order #{completed_order.id}", "price": 150.0}
        )

    def test_default_one_stamp(self, client, boukak, completed_order, card):
        client.post("/v1/loyalty/stamps", json={"OrderId": completed_order.id})
        assert boukak.add_stamps.call_args.args[1] == 1

    def test_order_not_found(self, client, boukak):
        response = client.post("/v1/loyalty/stamps", json={"OrderId": 999})
        assert response.status_code == 404

    def test_order_without_customer(self, client, boukak, db_session, location):
        order = Order(location_id=location.id, status_id=OrderStatus.COMPLETED)
        db_session.add(order)
        db_session.commit()
        response = client.post("/v1/loyalty/stamps", json={"OrderId": order.id})
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Order does not have an associated customer"

    def test_order_not_completed(self, client, boukak, db_session, completed_order, card):
        completed_order.status_id = OrderStatus.REFUNDED
        db_session.commit()
        response = client.post("/v1/loyalty/stamps", json={"OrderId": completed_order.id})
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Can only add stamps to completed orders",
            "currentStatus": OrderStatus.REFUNDED,
        }
        boukak.add_stamps.assert_not_called()

    def test_customer_without_card(self, client, boukak, completed_order, customer):
        response = client.post("/v1/loyalty/stamps", json={"OrderId": completed_order.id})
        assert response.status_code == 400
        assert response.json()["detail"]["customerId"] == customer.id

    def test_card_at_other_location_not_used(
        self, client, boukak, db_session, completed_order, customer, card
    ):
        completed_order.location_id = customer.location_id + 100
        db_session.commit()
        response = client.post("/v1/loyalty/stamps", json={"OrderId": completed_order.id})
        assert response.status_code == 400

    def test_boukak_failure(self, client, boukak, completed_order, card):
        boukak.add_stamps.return_value = IntegrationSyncResult(success=False, error="bad card")
        response = client.post("/v1/loyalty/stamps", json={"OrderId": completed_order.id})
        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "bad card"


class TestWebhook:
    def test_card_installed(self, client, boukak, db_session, customer):
        LoyaltyService(db_session, boukak).mapper.upsert(customer_card_key(customer), "card-abc")
        with patch("app.services.loyalty_service.logger") as mock_logger:
            response = client.post(
                "/v1/loyalty/webhook",
                json={"event": "CARD_INSTALLED", "data": {"cardId": "card-abc"}},
            )
        assert response.status_code == 200
        assert response.json()["message"] == "Webhook received successfully"
        mock_logger.info.assert_called_once()

    def test_unknown_event_acknowledged(self, client, boukak):
        response = client.post("/v1/loyalty/webhook", json={"event": "SOMETHING"})
        assert response.status_code == 200

    def test_missing_event(self, client, boukak):
        response = client.post("/v1/loyalty/webhook", json={"data": {}})
        assert response.status_code == 400

    def test_processing_error_still_200(self, client, boukak):
        with patch.object(LoyaltyService, "handle_webhook", side_effect=RuntimeError("db down")):
            response = client.post(
                "/v1/loyalty/webhook", json={"event": "CARD_UNINSTALLED", "data": {"cardId": "x"}}
            )
        assert response.status_code == 200
        assert response.json()["message"] == "Webhook received with errors - check logs"


class TestBulkSync:
    @pytest.fixture
    def customers(self, db_session, location):
        rows = [
            Customer(
                full_name=f"Customer {i}",
                mobile=f"+96655000000{i}",
                status_id=ACTIVE_STATUS,
                location_id=location.id,
            )
            for i in range(3)
        ]
        rows.append(Customer(full_name="Gone", mobile="+966559999999", status_id=0))
        db_session.add_all(rows)
        db_session.commit()
        return rows

    def test_inline_sync(self, client, boukak, customers):
        boukak.create_or_fetch.side_effect = [
            _card_result("card-0"),
            IntegrationSyncResult(success=False, error="rejected"),
            _card_result("card-2"),
        ]
        response = client.post("/v1/loyalty/cards/bulk-sync")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["created"] == 2
        assert data["failed"] == 1
        assert data["results"][1] == {
            "customerId": customers[1].id,
            "customerName": "Customer 1",
            "status": "failed",
            "boukakCardId": None,
            "error": "rejected",
        }

        sent = boukak.create_or_fetch.call_args_list[0].args[0]
        assert sent["templateId"] == "0p7KrSlSVGdsmRlqV50z"
        assert sent["platform"] == "ios"
        assert sent["language"] == "ar"

    def test_rerun_reports_existing(self, client, boukak, customers):
        boukak.create_or_fetch.side_effect = [_card_result(f"card-{i}") for i in range(3)]
        client.post("/v1/loyalty/cards/bulk-sync")
        response = client.post("/v1/loyalty/cards/bulk-sync")

        data = response.json()
        assert data["existing"] == 3
        assert data["created"] == 0
        assert boukak.create_or_fetch.call_count == 3

    def test_limit(self, client, boukak, customers):
        boukak.create_or_fetch.side_effect = [_card_result(f"card-{i}") for i in range(3)]
        response = client.post("/v1/loyalty/cards/bulk-sync?limit=2")
        assert response.json()["total"] == 2

    def test_background_enqueues_job(self, client, boukak):
        job = MagicMock(job_id="job-7")
        with patch(
            "app.routers.loyalty.enqueue_loyalty_card_sync", new_callable=AsyncMock
        ) as mock_enqueue:
            mock_enqueue.return_value = job
            response = client.post("/v1/loyalty/cards/bulk-sync?background=true&limit=5")

        assert response.status_code == 200
        assert response.json() == {"message": "Loyalty card sync queued", "job_id": "job-7"}
        mock_enqueue.assert_called_once_with(5)
        boukak.create_or_fetch.assert_not_called()


class TestLoyaltyServiceDirect:
    def test_create_card_raises_for_missing_customer(self, db_session):
        with pytest.raises(LookupError):
            LoyaltyService(db_session, MagicMock()).create_card(12345)

    def test_request_error_carries_payload(self):
        err = LoyaltyRequestError({"error": "nope", "customerId": 1})
        assert str(err) == "nope"
        assert err.payload["customerId"] == 1

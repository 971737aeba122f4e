"""Tests for merchant verification, locations and the product catalog."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.item import Item, UniqueItemMap
from app.models.location import Location
from app.models.shared import ACTIVE_STATUS
from app.models.user import User


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def second_location(db_session, merchant):
    loc = Location(user_id=merchant.id, name="Jeddah Branch", status_id=ACTIVE_STATUS)
    db_session.add(loc)
    db_session.commit()
    db_session.refresh(loc)
    return loc


def _add_product(db_session, location, unique_item_id, name, price):
    item = Item(name=name, price=price, status_id=ACTIVE_STATUS)
    db_session.add(item)
    db_session.flush()
    db_session.add(
        UniqueItemMap(
            item_id=item.id,
            location_id=location.id,
            unique_item_id=unique_item_id,
            product_name=name,
            location_name=location.name,
        )
    )
    db_session.commit()
    return item


class TestVerifyMerchant:
    def test_verify(self, client, api_headers):
        response = client.get("/v1/merchants/verify", headers=api_headers)
        assert response.status_code == 200
        assert response.json() == {"Company": "Karage Motors", "CompanyCode": "POS-KARAGE"}


class TestListLocations:
    def test_lists_active_locations(
        self, client, api_headers, db_session, location, second_location
    ):
        inactive = Location(user_id=location.user_id, name="Closed Branch", status_id=0)
        db_session.add(inactive)
        db_session.commit()

        response = client.get("/v1/locations", headers=api_headers)
        assert response.status_code == 200
        data = response.json()
        assert [loc["name"] for loc in data] == ["Riyadh Branch", "Jeddah Branch"]
        assert data[0]["locationId"] == location.id

    def test_other_merchants_locations_hidden(self, client, api_headers, db_session, location):
        other = User(password="other-key", company_code="POS-OTHER", status_id=ACTIVE_STATUS)
        db_session.add(other)
        db_session.commit()
        db_session.add(Location(user_id=other.id, name="Elsewhere", status_id=ACTIVE_STATUS))
        db_session.commit()

        response = client.get("/v1/locations", headers=api_headers)
        assert [loc["name"] for loc in response.json()] == ["Riyadh Branch"]

    def test_empty(self, client, api_headers):
        response = client.get("/v1/locations", headers=api_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_requires_api_key(self, client):
        assert client.get("/v1/locations").status_code == 401


class TestListProducts:
    def test_deduplicates_across_locations(
        self, client, api_headers, db_session, location, second_location
    ):
        _add_product(db_session, location, 10, "Oil Filter", 45.0)
        _add_product(db_session, second_location, 10, "Oil Filter", 45.0)
        _add_product(db_session, location, 11, "Brake Pads", 220.0)

        response = client.get("/v1/products", headers=api_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["totalCount"] == 2
        assert data["totalPages"] == 1
        assert data["currentPage"] == 1
        assert data["pageSize"] == 20
        assert [p["name"] for p in data["products"]] == ["Brake Pads", "Oil Filter"]
        assert data["products"][0]["price"] == 220.0

    def test_pagination(self, client, api_headers, db_session, location):
        for unique_id in range(1, 6):
            _add_product(db_session, location, unique_id, f"Part {unique_id}", 10.0)

        response = client.get("/v1/products?page=2&pageSize=2", headers=api_headers)
        data = response.json()
        assert data["totalCount"] == 5
        assert data["totalPages"] == 3
        assert [p["name"] for p in data["products"]] == ["Part 3", "Part 2"]

    def test_page_past_end_is_empty(self, client, api_headers, db_session, location):
        _add_product(db_session, location, 1, "Wiper", 30.0)
        response = client.get("/v1/products?page=9", headers=api_headers)
        assert response.json()["products"] == []

    def test_page_size_clamped(self, client, api_headers, location):
        response = client.get("/v1/products?page=0&pageSize=500", headers=api_headers)
        data = response.json()
        assert data["currentPage"] == 1
        assert data["pageSize"] == 100

        response = client.get("/v1/products?pageSize=0", headers=api_headers)
        assert response.json()["pageSize"] == 1

    def test_no_products(self, client, api_headers, merchant):
        response = client.get("/v1/products", headers=api_headers)
        data = response.json()
        assert data["totalCount"] == 0
        assert data["totalPages"] == 0
        assert data["userId"] == merchant.id

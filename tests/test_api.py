"""Tests for the JSON API."""

import pytest

from app.ledger import InvoiceLedger, history_key
from tests.conftest import TEST_USER


@pytest.fixture
def ledger(app):
    return InvoiceLedger(app.extensions["blob_store"], key=history_key(TEST_USER["id"]))


class TestApiAuth:
    def test_requires_login(self, client):
        response = client.get("/api/v1/history")
        assert response.status_code == 401
        assert response.get_json() == {"error": "Authentication required"}


class TestVat:
    def test_computes_vat(self, logged_in_client):
        response = logged_in_client.post("/api/v1/vat", json={"sellingPrice": "104347.83"})
        assert response.get_json() == {
            "sellingPrice": "104347.83",
            "vatAmount": "15652.17",
            "totalSellingPrice": "120000.00",
        }

    def test_sanitises_and_defaults_to_zero(self, logged_in_client):
        response = logged_in_client.post("/api/v1/vat", json={"sellingPrice": "abc"})
        assert response.get_json()["vatAmount"] == "0.00"
        assert response.get_json()["sellingPrice"] == ""

    def test_long_price(self, logged_in_client):
        response = logged_in_client.post("/api/v1/vat", json={"sellingPrice": "9" * 27})
        assert response.status_code == 200
        assert response.get_json()["totalSellingPrice"] == "114" + "9" * 24 + "8.85"

    def test_missing_body(self, logged_in_client):
        response = logged_in_client.post("/api/v1/vat")
        assert response.get_json()["totalSellingPrice"] == "0.00"


class TestHistoryApi:
    def test_paginated_listing(self, logged_in_client, ledger, record_factory):
        for i in range(25):
            ledger.append(record_factory(i))

        data = logged_in_client.get("/api/v1/history?page=3").get_json()

        assert data["total"] == 25
        assert data["pages"] == 3
        assert data["page"] == 3
        assert [r["id"] for r in data["invoices"]] == ["rec-024"]

    def test_per_page(self, logged_in_client, ledger, record_factory):
        for i in range(5):
            ledger.append(record_factory(i))
        data = logged_in_client.get("/api/v1/history?per_page=2&sort=name&order=asc").get_json()
        assert [r["customerName"] for r in data["invoices"]] == ["Customer 000", "Customer 001"]
        assert data["pages"] == 3

    def test_get_and_delete(self, logged_in_client, ledger, record_factory):
        ledger.append(record_factory(1))

        found = logged_in_client.get("/api/v1/history/rec-001")
        assert found.get_json()["invoiceNumber"] == "INV-000001"

        assert logged_in_client.delete("/api/v1/history/rec-001").status_code == 200
        assert logged_in_client.get("/api/v1/history/rec-001").status_code == 404

    def test_delete_unknown_is_ok(self, logged_in_client):
        assert logged_in_client.delete("/api/v1/history/nope").status_code == 200

    def test_stats(self, logged_in_client, ledger, record_factory):
        ledger.append(record_factory(1, total_price="100.00", vat_amount="13.04"))
        ledger.append(record_factory(2, total_price="300.00", vat_amount="39.13"))

        stats = logged_in_client.get("/api/v1/history/stats").get_json()

        assert stats["count"] == 2
        assert stats["total_revenue"] == "400.00"
        assert stats["total_vat"] == "52.17"
        assert stats["average_total"] == "200.00"
        assert stats["highest"]["id"] == "rec-002"
        assert stats["lowest"]["id"] == "rec-001"

    def test_stats_empty(self, logged_in_client):
        stats = logged_in_client.get("/api/v1/history/stats").get_json()
        assert stats == {
            "count": 0,
            "total_revenue": "0.00",
            "total_vat": "0.00",
            "average_total": "0.00",
            "highest": None,
            "lowest": None,
        }

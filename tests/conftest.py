"""Pytest configuration and fixtures."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from app import create_app
from app.ledger import InvoiceRecord
from app.services.auth_service import SupabaseAuthClient

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

TEST_USER = {
    "id": "7b1f6c1e-0000-4000-8000-000000000001",
    "email": "dealer@example.com",
    "user_metadata": {"full_name": "Thabo Khumalo"},
}


def supabase_handler(request: httpx.Request) -> httpx.Response:
    """Fake GoTrue endpoints used by the auth client."""
    path = request.url.path
    body = json.loads(request.content) if request.content else {}

    if path == "/auth/v1/token":
        if body.get("password") == "correct-horse":
            return httpx.Response(200, json={"access_token": "token-123", "user": TEST_USER})
        if body.get("email") == "unconfirmed@example.com":
            return httpx.Response(400, json={"code": 400, "error_code": "email_not_confirmed", "msg": "Email not confirmed"})
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

    if path == "/auth/v1/signup":
        if body.get("email") == "taken@example.com":
            return httpx.Response(422, json={"code": 422, "msg": "User already registered"})
        if body.get("email") == "pending@example.com":
            return httpx.Response(200, json={"id": "pending-user", "email": "pending@example.com"})
        user = {
            "id": "new-user",
            "email": body["email"],
            "user_metadata": body.get("data", {}),
        }
        return httpx.Response(200, json={"access_token": "token-new", "user": user})

    if path == "/auth/v1/logout":
        return httpx.Response(204)

    return httpx.Response(404, json={"msg": "not found"})


@pytest.fixture
def auth_client():
    return SupabaseAuthClient(
        "https://project.supabase.test",
        "test-anon-key",
        transport=httpx.MockTransport(supabase_handler),
    )


@pytest.fixture
def app(auth_client):
    app = create_app("testing")
    app.extensions["auth_client"] = auth_client
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    response = client.post("/login", data={"email": "dealer@example.com", "password": "correct-horse"})
    assert response.status_code == 302
    return client


def make_record(index: int = 0, **overrides) -> InvoiceRecord:
    """A well-formed record created *index* hours before FIXED_NOW."""
    created = FIXED_NOW - timedelta(hours=index)
    values = {
        "id": f"rec-{index:03d}",
        "make": "TOYOTA",
        "model": "FORTUNER 4.0 V6 AVT 4X4",
        "chassis_no": f"AHTYUS9GX0400{index:04d}",
        "engine_no": "1GRD881161",
        "kilometers": "314596",
        "year": "2007",
        "condition": "USED",
        "color": "Silver",
        "license_no": "DSK65GM",
        "customer_name": f"Customer {index:03d}",
        "customer_email": f"customer{index}@example.com",
        "customer_phone": "+27 61 100 4801",
        "selling_price": "104347.83",
        "vat_amount": "15652.17",
        "total_price": "120000.00",
        "invoice_number": f"INV-{index:06d}",
        "date": created.strftime("%Y/%m/%d"),
        "created_at": created.isoformat().replace("+00:00", "Z"),
    }
    values.update(overrides)
    return InvoiceRecord(**values)


@pytest.fixture
def record_factory():
    return make_record

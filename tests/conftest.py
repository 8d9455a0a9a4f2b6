import os

# Settings are read once at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-signing-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["INTERNAL_ADMIN_SECRET"] = "bootstrap-secret"

import pytest
from fastapi.testclient import TestClient

from inventory_api.core.jwt import token_service
from inventory_api.database import Base, SessionLocal, engine
from inventory_api.main import app

PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def headers_for(token):
    return {"x-auth-token": token}


@pytest.fixture()
def register(client):
    """Register a user and return auth headers carrying their token."""

    def _register(username, password=PASSWORD, admin=False):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200

        if not admin:
            return headers_for(response.json()["token"])

        response = client.post(
            "/api/internal/promote-admin",
            json={"username": username, "secret": "bootstrap-secret"},
        )
        assert response.status_code == 200

        # Admin flag is baked into the token, so log in again
        response = client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200
        return headers_for(response.json()["token"])

    return _register


@pytest.fixture()
def admin_headers(register):
    return register("admin", admin=True)


@pytest.fixture()
def user_headers(register, admin_headers):
    return register("alice")


@pytest.fixture()
def make_product(client, admin_headers):
    def _make_product(**overrides):
        payload = {
            "title": "Kind of Blue",
            "artist": "Miles Davis",
            "genre": "Jazz",
            "sku": "KOB-001",
            "location": "A1",
            "category": "vinyl",
            "price": 25.0,
            "listPrice": 30.0,
            "costPrice": 12.0,
            "quantity": 10,
        }
        payload.update(overrides)
        response = client.post("/api/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_product


@pytest.fixture()
def own_customer(client, user_headers):
    """Customer profile linked to the regular user's account."""
    response = client.post(
        "/api/customers",
        json={"first_name": "Alice", "last_name": "Doe", "email": "alice@example.com"},
        headers=user_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def quantity_of(client, admin_headers):
    def _quantity_of(product_id):
        response = client.get(f"/api/products/{product_id}", headers=admin_headers)
        assert response.status_code == 200
        return response.json()["quantity"]

    return _quantity_of


@pytest.fixture()
def user_id_of():
    def _user_id_of(headers):
        return int(token_service.verify(headers["x-auth-token"])["sub"])

    return _user_id_of

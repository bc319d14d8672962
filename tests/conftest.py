"""
Pytest configuration and fixtures for the StockIQ API tests
"""
import os

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ANALYTICS_MAX_WORKERS"] = "1"
os.environ["STRICT_ALERT_DEDUP"] = "false"

import uuid
import pytest
from fastapi.testclient import TestClient

from shared.core.config import settings
from shared.core.database import Base, SessionLocal, engine, init_db
from stock_service.app.main import app
from stock_service.app.models.inventory_items import InventoryItem
from stock_service.app.models.suppliers import Supplier


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test"""
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Test client; entering it runs startup, which seeds the admin"""
    with TestClient(app) as c:
        yield c


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


@pytest.fixture
def admin_token(client):
    return login(client, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


@pytest.fixture
def admin_headers(admin_token):
    return auth_header(admin_token)


@pytest.fixture
def make_user(client, admin_headers):
    """Create a user with the given role and return (user, headers)"""
    def _make(role, email=None, password="secret123", name=None):
        email = email or f"{role}-{uuid.uuid4().hex[:8]}@stockiq.com"
        response = client.post("/api/users", headers=admin_headers, json={
            "name": name or f"{role.title()} User",
            "email": email,
            "password": password,
            "role": role,
        })
        assert response.status_code == 201, response.text
        return response.json()["data"], auth_header(login(client, email, password))
    return _make


@pytest.fixture
def manager_headers(make_user):
    return make_user("manager")[1]


@pytest.fixture
def staff_headers(make_user):
    return make_user("staff")[1]


@pytest.fixture
def supplier(client, admin_headers):
    response = client.post("/api/suppliers", headers=admin_headers, json={
        "name": "Acme Supplies",
        "contactPerson": "Jane Doe",
        "email": "orders@acme.com",
        "phone": "555-0100",
        "category": "Hardware",
    })
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def item_payload(supplier):
    def _payload(**overrides):
        payload = {
            "name": "Cordless Drill",
            "sku": "drl-001",
            "category": "Tools",
            "quantity": 25,
            "reorderLevel": 10,
            "unitPrice": 89.5,
            "supplierId": supplier["id"],
            "location": "A-1",
        }
        payload.update(overrides)
        return payload
    return _payload


def add_item(db, **overrides):
    """Insert an item directly, bypassing the API"""
    values = {
        "name": "Widget",
        "sku": f"SKU-{uuid.uuid4().hex[:6].upper()}",
        "category": "General",
        "quantity": 20,
        "reorder_level": 10,
        "unit_price": 2.5,
        "supplier_id": uuid.uuid4(),
    }
    values.update(overrides)
    item = InventoryItem(**values)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def add_supplier(db, **overrides):
    values = {
        "name": "Supplier",
        "contact_person": "Contact",
        "email": "supplier@stockiq.com",
        "phone": "555-0000",
        "category": "General",
    }
    values.update(overrides)
    supplier = Supplier(**values)
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier

"""Shared fixtures: an in-memory database per test and an API client bound to it."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from rentroll.core.database import Base, get_db  # noqa: E402
from rentroll.main import app  # noqa: E402


@pytest.fixture
def test_db():
    """Create an in-memory test database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(test_db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield test_db
        finally:
            # Drop anything a failed request left pending
            test_db.rollback()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def property_payload(**overrides) -> dict:
    """A valid property creation body."""
    payload = {
        "name": "Harbor View",
        "address": "1 Harbor Way",
        "type": "Apartment",
        "units": 10,
        "rent": 1500,
        "amenities": ["Pool", "Gym"],
    }
    payload.update(overrides)
    return payload


def tenant_payload(property_id: str, **overrides) -> dict:
    """A valid tenant creation body for the given property."""
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "5551234567",
        "property": property_id,
        "unitNumber": "A1",
        "leaseDetails": {
            "startDate": "2026-01-01",
            "endDate": "2026-12-31",
            "monthlyRent": 1500,
            "securityDeposit": 1500,
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_property(client):
    """Factory creating a property through the API and returning its data."""

    def _create(**overrides) -> dict:
        response = client.post("/api/properties", json=property_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_tenant(client):
    """Factory creating a tenant through the API and returning its data."""

    def _create(property_id: str, **overrides) -> dict:
        response = client.post("/api/tenants", json=tenant_payload(property_id, **overrides))
        assert response.status_code == 201, response.text
        return response.json()["tenant"]

    return _create

"""Pytest configuration and fixtures."""

import os

# Must be set before the application modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"

from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.real_estate_catalog.api.main import app
from src.real_estate_catalog.client.api_client import ApiRequestError
from src.real_estate_catalog.core.database import Base, get_db
from src.real_estate_catalog.schemas.property_schema import PropertySchema


@pytest.fixture
def db_engine():
    """Fresh in-memory database shared by every connection of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def client(session_factory) -> TestClient:
    """API test client bound to the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def property_payload() -> Dict[str, Any]:
    """Complete body of a new listing."""
    return {
        "title": "Sunset Villa",
        "description": "Sea view villa with a private pool",
        "price": 500000,
        "location": "Goa",
        "type": "Villa",
        "status": "For Sale",
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 3200,
        "imageUrl": "https://example.com/villa.jpg",
    }


def make_property(property_id: str, **overrides) -> PropertySchema:
    data = {
        "id": property_id,
        "title": "Listing",
        "description": "Description",
        "price": 100000,
        "location": "Mumbai",
        "type": "House",
        "status": "For Sale",
        "bedrooms": 2,
        "bathrooms": 1,
        "area": 900,
        "createdAt": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return PropertySchema.model_validate(data)


@pytest.fixture
def sample_properties() -> List[PropertySchema]:
    """P1 and P2 of the filtering examples."""
    return [
        make_property(
            "p1",
            title="Sunset Villa",
            description="Sea view",
            location="Goa",
            price=500000,
            type="Villa",
            status="For Sale",
        ),
        make_property(
            "p2",
            title="City Apartment",
            description="Close to the metro",
            location="Pune",
            price=200000,
            type="Apartment",
            status="For Rent",
        ),
    ]


class FakePropertyApi:
    """In-memory stand-in for PropertyApiClient that records the calls it gets."""

    def __init__(self, properties=None):
        self.properties = list(properties or [])
        self.calls: List[tuple] = []
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def list_properties(self):
        self.calls.append(("list",))
        self._check()
        return list(self.properties)

    def create_property(self, payload):
        self.calls.append(("create", payload))
        self._check()
        created = make_property(f"new-{len(self.properties) + 1}", **payload)
        self.properties.insert(0, created)
        return created

    def update_status(self, property_id, status):
        self.calls.append(("update_status", property_id, status))
        self._check()
        for index, prop in enumerate(self.properties):
            if prop.id == property_id:
                self.properties[index] = prop.model_copy(update={"status": status})
                return self.properties[index]
        raise ApiRequestError(f"Property '{property_id}' not found.", status_code=404)

    def delete_property(self, property_id):
        self.calls.append(("delete", property_id))
        self._check()
        self.properties = [p for p in self.properties if p.id != property_id]
        return "Property deleted successfully"


@pytest.fixture
def fake_api(sample_properties) -> FakePropertyApi:
    return FakePropertyApi(sample_properties)

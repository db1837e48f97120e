"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from cachefest import config
from cachefest.deps import get_store
from cachefest.errors import StoreError
from cachefest.main import app
from cachefest.models import Base
from cachefest.schemas import EventOption, Registration
from cachefest.store import RegistrationStore, SqlRegistrationStore


class FailingStore(RegistrationStore):
    """Store whose every call fails, as when the database is unreachable."""

    def __init__(self) -> None:
        self.inserts = 0

    async def insert(self, record):
        self.inserts += 1
        raise StoreError("insert")

    async def select_all(self):
        raise StoreError("select")


@pytest.fixture
def sql_store() -> SqlRegistrationStore:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return SqlRegistrationStore(engine)


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def make_registration():
    """Factory for stored registrations: events are (id, name, price) tuples."""
    base = datetime(2025, 9, 10, 9, 30, tzinfo=timezone.utc)
    counter = iter(range(1, 10_000))

    def _make(name="Asha", events=(("web-dev", "Web Dev", 200),), **overrides) -> Registration:
        n = next(counter)
        selected = [EventOption(id=i, name=nm, price=p) for i, nm, p in events]
        fields = {
            "id": str(n),
            "name": name,
            "email": f"{name.lower()}@example.com",
            "phone": "9876543210",
            "college": "GVP College",
            "roll_number": f"21A{n:03d}",
            "section": "B",
            "selected_events": selected,
            "total_amount": sum(e.price for e in selected),
            "registration_date": base - timedelta(hours=n),
        }
        fields.update(overrides)
        return Registration(**fields)

    return _make


def _client_for(store: RegistrationStore) -> TestClient:
    app.dependency_overrides[get_store] = lambda: store
    app.state.dashboard = None
    return TestClient(app)


@pytest.fixture
def client(sql_store):
    yield _client_for(sql_store)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    response = client.post("/admin/login", data={"password": config.ADMIN_PASSWORD}, follow_redirects=False)
    assert response.status_code == 303
    return client


@pytest.fixture
def failing_client(failing_store):
    yield _client_for(failing_store)
    app.dependency_overrides.clear()

from __future__ import annotations

import uuid
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from outreach.core.config import get_settings
from outreach.core.database import Base, get_db
from outreach.main import app


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_generated_correlation_id_returned_in_header(client: TestClient) -> None:
    response = client.get(f"/api/hotels/{uuid.uuid4()}")

    assert response.status_code == 404
    header_value = response.headers.get("x-correlation-id")
    assert header_value
    assert uuid.UUID(header_value)
    assert response.json() == {"error": "Hotel not found"}


def test_correlation_id_respected_when_provided(client: TestClient) -> None:
    response = client.post(
        "/api/hotels",
        json={"hotelName": "Sakura Inn", "region": "Yangon"},
        headers={"X-Correlation-Id": "abc-123"},
    )

    assert response.status_code == 201
    assert response.headers.get("x-correlation-id") == "abc-123"


def test_each_request_gets_its_own_generated_id(client: TestClient) -> None:
    first = client.get("/api/health").headers.get("x-correlation-id")
    second = client.get("/api/health").headers.get("x-correlation-id")

    assert first
    assert second
    assert first != second


def test_unusable_correlation_id_is_replaced(client: TestClient) -> None:
    for supplied in ("x" * 200, "has spaces in it", "semi;colon"):
        response = client.get("/api/health", headers={"X-Correlation-Id": supplied})

        returned = response.headers.get("x-correlation-id")
        assert returned != supplied
        assert uuid.UUID(returned)

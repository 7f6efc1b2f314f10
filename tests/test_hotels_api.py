from __future__ import annotations

from collections.abc import Generator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from outreach.core.config import get_settings
from outreach.core.database import Base, get_db
from outreach.hotels.models import HotelActivityLog
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


def _create_hotel(client: TestClient, **fields: object) -> dict:
    payload = {"hotelName": "Grand Hotel", "region": "Yangon"}
    payload.update(fields)
    response = client.post("/api/hotels", json=payload)
    assert response.status_code == 201
    return response.json()


def _activity(client: TestClient, hotel_id: str) -> list[dict]:
    response = client.get(f"/api/hotels/{hotel_id}/activity")
    assert response.status_code == 200
    return response.json()


def _timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def test_create_hotel_defaults_and_response_shape(client: TestClient) -> None:
    created = _create_hotel(client, email="", phone="09 123 456")

    assert created["id"]
    assert created["hotelName"] == "Grand Hotel"
    assert created["region"] == "Yangon"
    assert created["status"] == "NEW"
    assert created["assignee"] is None
    assert created["nextFollowUpDate"] is None
    assert created["phone"] == "09 123 456"
    assert created["email"] == ""
    assert created["address"] == ""
    assert created["website"] == ""
    assert created["lastUpdatedAt"]
    assert created["createdAt"]

    fetched = client.get(f"/api/hotels/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_create_hotel_records_created_activity(client: TestClient) -> None:
    created = _create_hotel(client, userId="1", userName="John Admin")

    entries = _activity(client, created["id"])
    assert len(entries) == 1
    assert entries[0]["action"] == "created"
    assert entries[0]["userId"] == "1"
    assert entries[0]["userName"] == "John Admin"
    assert entries[0]["oldStatus"] is None
    assert entries[0]["newStatus"] is None


def test_create_hotel_with_explicit_status_and_follow_up(client: TestClient) -> None:
    created = _create_hotel(client, status="INTERESTED", assignee="2", nextFollowUpDate="2026-10-30")

    assert created["status"] == "INTERESTED"
    assert created["assignee"] == "2"
    assert created["nextFollowUpDate"] == "2026-10-30"


def test_get_unknown_hotel_returns_not_found_envelope(client: TestClient) -> None:
    response = client.get("/api/hotels/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Hotel not found"}


def test_partial_update_changes_only_provided_fields(client: TestClient) -> None:
    created = _create_hotel(client, address="1 Strand Road", phone="111")

    response = client.patch(f"/api/hotels/{created['id']}", json={"assignee": "2"})
    assert response.status_code == 200
    updated = response.json()

    assert updated["id"] == created["id"]
    assert updated["assignee"] == "2"
    for key in ("hotelName", "region", "address", "phone", "email", "website", "status", "nextFollowUpDate"):
        assert updated[key] == created[key]
    assert _timestamp(updated["lastUpdatedAt"]) > _timestamp(created["lastUpdatedAt"])


def test_explicit_null_clears_nullable_field(client: TestClient) -> None:
    created = _create_hotel(client, assignee="3", website="https://grand.example")

    response = client.patch(f"/api/hotels/{created['id']}", json={"assignee": None, "website": ""})
    assert response.status_code == 200
    assert response.json()["assignee"] is None
    assert response.json()["website"] == ""


def test_last_updated_at_strictly_increases_on_every_update(client: TestClient) -> None:
    created = _create_hotel(client)

    previous = _timestamp(created["lastUpdatedAt"])
    for phone in ("1", "2", "3"):
        response = client.patch(f"/api/hotels/{created['id']}", json={"phone": phone})
        assert response.status_code == 200
        current = _timestamp(response.json()["lastUpdatedAt"])
        assert current > previous
        previous = current


def test_status_change_records_one_activity_entry(client: TestClient, db_session: Session) -> None:
    created = _create_hotel(client)

    response = client.patch(
        f"/api/hotels/{created['id']}",
        json={"status": "CALLING", "userId": "2", "userName": "Sarah Caller"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "CALLING"

    changes = [entry for entry in _activity(client, created["id"]) if entry["action"] == "status_changed"]
    assert len(changes) == 1
    assert changes[0]["oldStatus"] == "NEW"
    assert changes[0]["newStatus"] == "CALLING"
    assert changes[0]["userId"] == "2"
    assert changes[0]["userName"] == "Sarah Caller"

    total = db_session.scalar(select(func.count()).select_from(HotelActivityLog))
    assert total == 2


def test_same_status_update_records_no_activity(client: TestClient) -> None:
    created = _create_hotel(client, status="CALLING")

    response = client.patch(f"/api/hotels/{created['id']}", json={"status": "CALLING"})
    assert response.status_code == 200

    actions = [entry["action"] for entry in _activity(client, created["id"])]
    assert actions == ["created"]


def test_status_change_without_actor_defaults_user_name(client: TestClient) -> None:
    created = _create_hotel(client)

    client.patch(f"/api/hotels/{created['id']}", json={"status": "NO_ANSWER"})

    entries = _activity(client, created["id"])
    assert entries[0]["action"] == "status_changed"
    assert entries[0]["userId"] is None
    assert entries[0]["userName"] == "System"


def test_update_without_recognized_fields_is_rejected(client: TestClient) -> None:
    created = _create_hotel(client)

    empty = client.patch(f"/api/hotels/{created['id']}", json={})
    assert empty.status_code == 400
    assert empty.json() == {"error": "No updates provided"}

    actor_only = client.patch(f"/api/hotels/{created['id']}", json={"userName": "Mike Sales", "unknown": 1})
    assert actor_only.status_code == 400
    assert actor_only.json() == {"error": "No updates provided"}


def test_update_unknown_hotel_returns_not_found(client: TestClient) -> None:
    response = client.patch("/api/hotels/missing", json={"status": "CALLING"})

    assert response.status_code == 404
    assert response.json() == {"error": "Hotel not found"}


def test_invalid_status_value_is_rejected(client: TestClient) -> None:
    created = _create_hotel(client)

    response = client.patch(f"/api/hotels/{created['id']}", json={"status": "WON"})
    assert response.status_code == 400
    assert "status" in response.json()["error"]

    create_response = client.post("/api/hotels", json={"hotelName": "Bad", "region": "Bagan", "status": "LOST"})
    assert create_response.status_code == 400


def test_null_for_required_field_is_rejected(client: TestClient) -> None:
    created = _create_hotel(client)

    response = client.patch(f"/api/hotels/{created['id']}", json={"hotelName": None})

    assert response.status_code == 400
    assert "hotelName cannot be null" in response.json()["error"]


def test_notes_are_listed_newest_first(client: TestClient) -> None:
    created = _create_hotel(client)

    first = client.post(f"/api/hotels/{created['id']}/notes", json={"content": "Left a voicemail"})
    assert first.status_code == 201
    assert first.json()["authorName"] == "System"
    assert first.json()["hotelId"] == created["id"]

    second = client.post(
        f"/api/hotels/{created['id']}/notes",
        json={"authorName": "Sarah Caller", "content": "Manager asked for a demo"},
    )
    assert second.status_code == 201

    notes = client.get(f"/api/hotels/{created['id']}/notes")
    assert notes.status_code == 200
    assert [note["content"] for note in notes.json()] == ["Manager asked for a demo", "Left a voicemail"]
    assert notes.json()[0]["authorName"] == "Sarah Caller"


def test_notes_and_activity_require_existing_hotel(client: TestClient) -> None:
    assert client.get("/api/hotels/missing/notes").status_code == 404
    assert client.get("/api/hotels/missing/activity").status_code == 404

    response = client.post("/api/hotels/missing/notes", json={"content": "hello"})
    assert response.status_code == 404
    assert response.json() == {"error": "Hotel not found"}


def test_note_content_is_required(client: TestClient) -> None:
    created = _create_hotel(client)

    response = client.post(f"/api/hotels/{created['id']}/notes", json={"content": ""})

    assert response.status_code == 400
    assert "content" in response.json()["error"]


def test_whitespace_only_note_is_rejected_and_content_is_trimmed(client: TestClient) -> None:
    created = _create_hotel(client)

    blank = client.post(f"/api/hotels/{created['id']}/notes", json={"content": "   "})
    assert blank.status_code == 400
    assert "content" in blank.json()["error"]

    trimmed = client.post(f"/api/hotels/{created['id']}/notes", json={"content": "  Call back Monday  "})
    assert trimmed.status_code == 201
    assert trimmed.json()["content"] == "Call back Monday"


def test_outreach_scenario_from_creation_to_signed(client: TestClient) -> None:
    before = client.get("/api/dashboard/summary").json()["signedHotels"]

    created = _create_hotel(client)
    assert created["status"] == "NEW"

    client.patch(f"/api/hotels/{created['id']}", json={"status": "CALLING"})
    changes = [entry for entry in _activity(client, created["id"]) if entry["action"] == "status_changed"]
    assert [(entry["oldStatus"], entry["newStatus"]) for entry in changes] == [("NEW", "CALLING")]

    client.patch(f"/api/hotels/{created['id']}", json={"status": "CALLING"})
    changes = [entry for entry in _activity(client, created["id"]) if entry["action"] == "status_changed"]
    assert len(changes) == 1

    bulk = client.post("/api/hotels/bulk", json={"hotelIds": [created["id"]], "updates": {"status": "SIGNED"}})
    assert bulk.status_code == 200
    assert bulk.json() == {"updated": 1}

    assert client.get(f"/api/hotels/{created['id']}").json()["status"] == "SIGNED"
    assert client.get("/api/dashboard/summary").json()["signedHotels"] == before + 1

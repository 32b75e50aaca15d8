import uuid
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import event_doc, write_doc
from content.config import Settings
from api.main import create_app


@pytest.fixture
def local_events(tmp_path):
    folder = tmp_path / "events"
    folder.mkdir()
    today = date.today()
    write_doc(folder, "past.md", event_doc("Leftovers", today - timedelta(days=2)))
    write_doc(folder, "today.md", event_doc("Curry", today))
    write_doc(
        folder,
        "soon.md",
        event_doc(
            "Pizza",
            today + timedelta(days=3),
            description="cheesy",
            coverImage="{url: 'http://x/pizza.png', alt: pizza}",
        ),
    )
    write_doc(folder, "later.md", event_doc("Tacos", today + timedelta(days=1)))
    return folder


@pytest.fixture
def client(local_events):
    app = create_app(Settings(local_path=local_events))
    with TestClient(app) as client:
        yield client


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["generation"] == 1
    assert body["events"] == 4


def test_upcoming_events(client):
    resp = client.get("/api/events")
    assert resp.status_code == 200
    events = resp.json()["events"]
    assert [e["name"] for e in events] == ["Curry", "Tacos", "Pizza"]
    assert set(events[0]) == {"id", "cover_image", "name", "description", "time"}
    assert events[0]["time"] == date.today().isoformat()

    pizza = events[2]
    assert pizza["description"] == "cheesy"
    assert pizza["cover_image"]["url"] == "http://x/pizza.png"
    assert pizza["cover_image"]["alt"] == "pizza"


def test_full_event_includes_past_events(client):
    store = client.app.state.store
    past = next(e for e in store.get_events() if e.name == "Leftovers")

    resp = client.get(f"/api/events/{past.id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == str(past.id)
    assert body["name"] == "Leftovers"
    assert body["images"] == []
    assert body["body"] == "Leftovers body\n"


def test_unknown_event_is_404(client):
    resp = client.get(f"/api/events/{uuid.uuid4()}")
    assert resp.status_code == 404


def test_invalid_event_id(client):
    resp = client.get("/api/events/not-a-uuid")
    assert resp.status_code == 422


def test_empty_store_serves_nothing(tmp_path):
    app = create_app(Settings(local_path=tmp_path / "missing"))
    with TestClient(app) as client:
        assert client.get("/api/events").json() == {"events": []}
        assert client.get("/health").json()["generation"] == 0
        assert client.app.state.sync is None

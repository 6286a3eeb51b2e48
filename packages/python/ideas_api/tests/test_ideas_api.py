import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ideas_api import dimensions_router, register_exception_handlers, router


def _idea_body(title, readiness=5, **overrides):
    body = {
        "title": title,
        "content": f"# {title}",
        "dimensions": {
            "field": "technology",
            "readiness": readiness,
            "complexity": 4,
            "potentially_connected_idea": None,
        },
        "sub_ideas": [],
    }
    body.update(overrides)
    return body


@pytest.fixture
def app(fake_db) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)
    app.include_router(dimensions_router)
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _create(client, title, readiness=5):
    resp = client.post("/api/ideas", json=_idea_body(title, readiness))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_returns_201_with_server_fields(client):
    body = _idea_body("Solar kite", order=99, createdAt="ignored")

    resp = client.post("/api/ideas", json=body)

    assert resp.status_code == 201
    data = resp.json()
    assert data["id"]
    assert data["order"] == 1
    assert data["createdAt"] and data["updatedAt"]
    assert data["dimensions"]["readiness"] == 5


def test_create_duplicate_title_is_400(client):
    _create(client, "Twice")

    resp = client.post("/api/ideas", json=_idea_body("Twice"))

    assert resp.status_code == 400
    assert resp.json() == {"error": "Title already exists"}


def test_create_missing_content_is_400(client):
    resp = client.post("/api/ideas", json={"title": "No body"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Title and content are required"}


def test_list_ideas_keyed_by_id_in_order(client):
    a = _create(client, "A")
    b = _create(client, "B")

    resp = client.get("/api/ideas")

    assert resp.status_code == 200
    ideas = resp.json()["ideas"]
    assert list(ideas) == [a["id"], b["id"]]
    assert ideas[b["id"]]["order"] == 2


def test_get_single_idea_and_404(client):
    a = _create(client, "Lookup")

    assert client.get(f"/api/ideas/{a['id']}").json()["title"] == "Lookup"
    missing = client.get("/api/ideas/nope")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Idea not found"}


def test_update_partial_dimensions_keeps_order(client):
    c = _create(client, "C", readiness=3)

    resp = client.put(f"/api/ideas/{c['id']}", json={"dimensions": {"readiness": 5}})

    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == c["id"]
    assert data["order"] == c["order"]
    assert data["dimensions"]["readiness"] == 5
    assert data["dimensions"]["complexity"] == 4


def test_update_unknown_is_404(client):
    resp = client.put("/api/ideas/ghost", json={"title": "x"})

    assert resp.status_code == 404


def test_update_title_conflict_is_400(client):
    _create(client, "Alpha")
    beta = _create(client, "Beta")

    resp = client.put(f"/api/ideas/{beta['id']}", json={"title": "Alpha"})

    assert resp.status_code == 400


def test_delete_then_404(client):
    d = _create(client, "Doomed")

    resp = client.delete(f"/api/ideas/{d['id']}")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Idea deleted successfully"}
    assert client.delete(f"/api/ideas/{d['id']}").status_code == 404


def test_reorder_scenario_within_column(client):
    a = _create(client, "A", readiness=5)
    b = _create(client, "B", readiness=5)

    resp = client.put("/api/ideas/reorder", json={"reorderedIds": [b["id"], a["id"]]})

    assert resp.status_code == 200
    assert resp.json() == {"message": "Ideas reordered successfully"}
    ideas = client.get("/api/ideas").json()["ideas"]
    assert list(ideas) == [b["id"], a["id"]]
    assert ideas[b["id"]]["order"] == 1
    assert ideas[a["id"]]["order"] == 2


def test_reorder_requires_list(client):
    resp = client.put("/api/ideas/reorder", json={"reorderedIds": "abc"})

    assert resp.status_code == 400
    assert "reorderedIds" in resp.json()["error"]


def test_reorder_unknown_id_is_404_and_atomic(client):
    a = _create(client, "A")
    b = _create(client, "B")

    resp = client.put("/api/ideas/reorder", json={"reorderedIds": [b["id"], "ghost", a["id"]]})

    assert resp.status_code == 404
    ideas = client.get("/api/ideas").json()["ideas"]
    assert ideas[a["id"]]["order"] == 1
    assert ideas[b["id"]]["order"] == 2


def test_validate_title(client):
    existing = _create(client, "Existing Title")

    clash = client.post("/api/ideas/validate-title", json={"title": "Existing Title"}).json()
    own = client.post(
        "/api/ideas/validate-title",
        json={"title": "Existing Title", "excludeId": existing["id"]},
    ).json()

    assert clash == {
        "isValid": False,
        "conflictingId": existing["id"],
        "conflictingTitle": "Existing Title",
    }
    assert own == {"isValid": True}


def test_validate_title_requires_title(client):
    resp = client.post("/api/ideas/validate-title", json={})

    assert resp.status_code == 400


def test_dimensions_default(client):
    resp = client.get("/api/dimensions")

    assert resp.status_code == 200
    scale = resp.json()["dimensions_registry"]["core_dimensions"]["readiness"]["scale"]
    assert list(scale) == ["1-2", "3-4", "5-6", "7-8", "9-10"]


def test_store_failure_is_500(app, fake_db):
    fake_db["ideas"].fail_with = RuntimeError("quota exceeded")
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/api/ideas")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_update_null_readiness_keeps_board_readable(client):
    c = _create(client, "Nullable", readiness=7)

    resp = client.put(f"/api/ideas/{c['id']}", json={"dimensions": {"readiness": None}})

    assert resp.status_code == 200
    assert resp.json()["dimensions"]["readiness"] == 7
    listed = client.get("/api/ideas")
    assert listed.status_code == 200
    assert listed.json()["ideas"][c["id"]]["dimensions"]["readiness"] == 7

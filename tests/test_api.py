# tests/test_api.py

from __future__ import annotations

from fastapi.testclient import TestClient

from todo_api.core.config import Settings
from todo_api.main import create_app

API = "/api/v1"


def test_health(client: TestClient) -> None:
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_and_list(client: TestClient) -> None:
    r = client.post(f"{API}/todos", json={"title": "Test Todo"})
    assert r.status_code == 201
    body = r.json()
    assert body["title"] == "Test Todo"
    assert body["completed"] is False
    assert body["created_at"] == body["updated_at"]
    assert set(body) == {"id", "title", "completed", "created_at", "updated_at"}

    r = client.get(f"{API}/todos")
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == [body["id"]]


def test_create_rejects_bad_titles(client: TestClient) -> None:
    assert client.post(f"{API}/todos", json={"title": ""}).status_code == 422
    assert client.post(f"{API}/todos", json={"title": "x" * 256}).status_code == 422
    assert client.post(f"{API}/todos", json={}).status_code == 422
    assert client.get(f"{API}/todos").json() == []


def test_list_filter_query_param(client: TestClient) -> None:
    ids = [client.post(f"{API}/todos", json={"title": f"t{i}"}).json()["id"] for i in range(3)]
    client.patch(f"{API}/todos/{ids[1]}", json={"completed": True})

    done = client.get(f"{API}/todos", params={"completed": "true"}).json()
    active = client.get(f"{API}/todos", params={"completed": "false"}).json()

    assert [t["id"] for t in done] == [ids[1]]
    assert [t["id"] for t in active] == [ids[0], ids[2]]


def test_patch(client: TestClient) -> None:
    todo = client.post(f"{API}/todos", json={"title": "Test Todo"}).json()

    r = client.patch(f"{API}/todos/{todo['id']}", json={"completed": True})
    assert r.status_code == 200
    assert r.json()["completed"] is True
    assert r.json()["title"] == "Test Todo"
    assert r.json()["updated_at"] > todo["updated_at"]


def test_patch_errors(client: TestClient) -> None:
    todo = client.post(f"{API}/todos", json={"title": "Test Todo"}).json()

    r = client.patch(f"{API}/todos/999999", json={"title": "nope"})
    assert r.status_code == 404
    assert r.json() == {"detail": "todo not found"}

    assert client.patch(f"{API}/todos/{todo['id']}", json={}).status_code == 422
    assert client.patch(f"{API}/todos/{todo['id']}", json={"title": ""}).status_code == 422


def test_delete(client: TestClient) -> None:
    todo = client.post(f"{API}/todos", json={"title": "bye"}).json()

    r = client.delete(f"{API}/todos/{todo['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = client.delete(f"{API}/todos/{todo['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": False}


def test_storage_unavailable_maps_to_503(settings: Settings) -> None:
    app = create_app(settings)
    # no context manager: startup never runs, so the database stays closed
    c = TestClient(app)

    r = c.get(f"{API}/todos")
    assert r.status_code == 503
    assert r.json() == {"detail": "storage unavailable"}
    assert c.get(f"{API}/health").status_code == 503

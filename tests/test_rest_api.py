"""
Tests for the REST surface.
"""
import pytest
from fastapi.testclient import TestClient

from nested_table.controller import NestedTableController
from nested_table.errors import NetworkError
from nested_table.rest_api import NestedTableAPI
from nested_table.row_key import make_key

from conftest import FakeRecordSource, ROOT_RECORDS


@pytest.fixture
def api_client(fake_source):
    api = NestedTableAPI(NestedTableController(fake_source))
    with TestClient(api.get_app()) as client:
        yield client


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_table_after_startup_load(api_client):
    response = api_client.get("/table")
    assert response.status_code == 200

    body = response.json()
    data = body["data"]
    assert body["status"] == "success"
    assert body["metadata"]["max_depth"] == 5
    assert data["status"] == "ready"
    assert [(r["id"], r["title"], r["expanded"]) for r in data["rows"]] == [(1, "A", False), (2, "B", False)]


def test_toggle_expands_and_collapses(api_client, fake_source):
    response = api_client.post("/table/toggle", json={"id": 1, "level": 0, "wait": True})
    assert response.status_code == 200
    assert response.json()["data"] == {"key": make_key(1, 0).to_token(), "expanded": True}

    rows = api_client.get("/table").json()["data"]["rows"]
    assert rows[0]["expanded"]
    assert [c["id"] for c in rows[0]["children"]] == [3]
    assert fake_source.calls == [None, 1]

    response = api_client.post("/table/toggle", json={"id": 1, "level": 0})
    assert response.json()["data"]["expanded"] is False
    rows = api_client.get("/table").json()["data"]["rows"]
    assert rows[0]["children"] is None
    assert fake_source.calls == [None, 1]


def test_toggle_rejects_negative_level(api_client):
    response = api_client.post("/table/toggle", json={"id": 1, "level": -1})
    assert response.status_code == 422


def test_failures_endpoint(fake_source):
    fake_source.responses[2] = NetworkError("boom", scope_id=2)
    api = NestedTableAPI(NestedTableController(fake_source))

    with TestClient(api.get_app()) as client:
        client.post("/table/toggle", json={"id": 2, "level": 0, "wait": True})
        failures = client.get("/table/failures").json()["data"]

    assert failures == [{"key": make_key(2, 0).to_token(), "id": 2, "level": 0, "error": "boom"}]


def test_initial_load_error_and_retry():
    source = FakeRecordSource({None: NetworkError("down")})
    api = NestedTableAPI(NestedTableController(source))

    with TestClient(api.get_app()) as client:
        data = client.get("/table").json()["data"]
        assert data["status"] == "error"
        assert data["error"] == "Failed to fetch data"
        assert data["rows"] == []

        assert client.post("/table/toggle", json={"id": 1, "level": 0}).status_code == 409

        source.responses[None] = ROOT_RECORDS
        response = client.post("/table/retry")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ready"

        assert client.post("/table/retry").status_code == 409


def test_shutdown_closes_source(fake_source):
    api = NestedTableAPI(NestedTableController(fake_source))
    with TestClient(api.get_app()):
        assert not fake_source.closed
    assert fake_source.closed

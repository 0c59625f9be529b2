# tests/test_nodes_api.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from nodehub.apps.api.server import app

TOKEN = {"X-NodeHub-Token": "dev-local-token"}


@pytest.fixture
def client():
    return TestClient(app)


def test_health_is_public(client):
    assert client.get("/health/live").json() == {"ok": True}


def test_token_required(client):
    assert client.get("/api/nodes").status_code == 401
    assert client.get("/api/nodes", headers={"X-NodeHub-Token": "wrong"}).status_code == 401


def test_create_get_list_delete(client, fleet, fields):
    fleet.online("10.0.0.1", 8080)
    r = client.post("/api/nodes", json=fields(), headers=TOKEN)
    assert r.status_code == 201
    node = r.json()["node"]
    assert node["status"] == "Online"
    assert node["versionFamily"] == "1.0"
    # ключ в ответах замаскирован
    assert node["apiKey"] != "secret-api-key-123"
    assert node["apiKey"].endswith("-123")

    r = client.get(f"/api/nodes/{node['id']}", headers=TOKEN)
    assert r.status_code == 200
    assert r.json()["node"]["id"] == node["id"]

    r = client.get("/api/nodes", headers=TOKEN)
    assert [n["id"] for n in r.json()["nodes"]] == [node["id"]]

    assert client.delete(f"/api/nodes/{node['id']}", headers=TOKEN).status_code == 204
    assert client.get(f"/api/nodes/{node['id']}", headers=TOKEN).status_code == 404
    assert client.get("/api/nodes", headers=TOKEN).json()["nodes"] == []


def test_create_missing_field_is_400_naming_the_field(client, fields):
    data = fields()
    del data["address"]
    r = client.post("/api/nodes", json=data, headers=TOKEN)
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "address"


def test_create_out_of_range_ipv4_is_400(client, fields):
    r = client.post("/api/nodes", json=fields(address="999.999.999.999"), headers=TOKEN)
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "address"


def test_update(client, fleet, fields):
    node = client.post("/api/nodes", json=fields(), headers=TOKEN).json()["node"]
    assert node["status"] == "Offline"
    fleet.online("10.0.0.7", 9000)
    r = client.put(f"/api/nodes/{node['id']}", json=fields(address="10.0.0.7", port=9000, name="moved"), headers=TOKEN)
    assert r.status_code == 200
    body = r.json()["node"]
    assert (body["name"], body["address"], body["port"], body["status"]) == ("moved", "10.0.0.7", 9000, "Online")


def test_update_and_delete_unknown_id(client, fields):
    assert client.put("/api/nodes/nope", json=fields(), headers=TOKEN).status_code == 404
    assert client.delete("/api/nodes/nope", headers=TOKEN).status_code == 404


def test_summary(client, fleet, fields):
    fleet.online("10.0.0.1", 8080)
    client.post("/api/nodes", json=fields(address="10.0.0.1"), headers=TOKEN)
    client.post("/api/nodes", json=fields(address="10.0.0.2"), headers=TOKEN)
    r = client.get("/api/nodes/summary", headers=TOKEN)
    assert r.json() == {"ok": True, "total": 2, "online": 1, "offline": 1}


def test_expose_api_keys_setting(client, _autocontext, fields, monkeypatch):
    from dataclasses import replace

    monkeypatch.setattr(_autocontext, "settings", replace(_autocontext.settings, expose_api_keys=True))
    node = client.post("/api/nodes", json=fields(), headers=TOKEN).json()["node"]
    assert node["apiKey"] == "secret-api-key-123"

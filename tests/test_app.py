"""
Tests for application startup and routes served by the SQLite-backed store.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import config
from main import create_app
from utils.errors import ConfigurationError


@pytest.fixture
def sql_client(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def sql_auth_headers(sql_client) -> dict:
    resp = sql_client.post("/register", json={"username": "alice", "password": "s3cret"})
    assert resp.status_code == 200
    return {"Authorization": resp.json()["token"]}


class TestStartup:
    def test_empty_secret_fails_fast(self, monkeypatch):
        monkeypatch.setattr(config, "jwt_secret", "")
        with pytest.raises(ConfigurationError):
            with TestClient(create_app()):
                pass

    def test_startup_opens_sql_store(self, sql_client, sql_auth_headers):
        assert sql_client.get("/templates", headers=sql_auth_headers).json() == []


class TestSQLiteTemplateRoutes:
    def test_add_list_delete(self, sql_client, sql_auth_headers):
        resp = sql_client.post("/templates", json={"prompt": "Hello"}, headers=sql_auth_headers)
        assert resp.status_code == 204
        templates = sql_client.get("/templates", headers=sql_auth_headers).json()
        assert [t["prompt"] for t in templates] == ["Hello"]

        resp = sql_client.delete(f"/templates/{templates[0]['id']}", headers=sql_auth_headers)
        assert resp.status_code == 204
        assert sql_client.get("/templates", headers=sql_auth_headers).json() == []

    def test_delete_unknown_id_is_404(self, sql_client, sql_auth_headers):
        resp = sql_client.delete("/templates/999", headers=sql_auth_headers)
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Template 999 not found"}

    @pytest.mark.parametrize("template_id", ["99999999999999999999", str(2**63), "0", "-1"])
    def test_delete_out_of_range_id_is_400(self, sql_client, sql_auth_headers, template_id):
        sql_client.post("/templates", json={"prompt": "keep me"}, headers=sql_auth_headers)
        resp = sql_client.delete(f"/templates/{template_id}", headers=sql_auth_headers)
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid request"}
        templates = sql_client.get("/templates", headers=sql_auth_headers).json()
        assert [t["prompt"] for t in templates] == ["keep me"]

    def test_largest_id_is_404(self, sql_client, sql_auth_headers):
        resp = sql_client.delete(f"/templates/{2**63 - 1}", headers=sql_auth_headers)
        assert resp.status_code == 404

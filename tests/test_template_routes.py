"""
Tests for the /templates routes.
"""

from unittest.mock import AsyncMock, patch

from utils.errors import StoreError


class TestTemplateRoutes:
    def test_list_starts_empty(self, client, auth_headers):
        resp = client.get("/templates", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_add_then_delete(self, client, auth_headers):
        resp = client.post("/templates", json={"prompt": "Hello"}, headers=auth_headers)
        assert resp.status_code == 204
        assert resp.content == b""

        templates = client.get("/templates", headers=auth_headers).json()
        assert len(templates) == 1
        assert templates[0]["prompt"] == "Hello"

        resp = client.delete(f"/templates/{templates[0]['id']}", headers=auth_headers)
        assert resp.status_code == 204
        assert client.get("/templates", headers=auth_headers).json() == []

    def test_list_is_ordered_by_id(self, client, auth_headers):
        for prompt in ("one", "two", "three"):
            client.post("/templates", json={"prompt": prompt}, headers=auth_headers)
        templates = client.get("/templates", headers=auth_headers).json()
        assert [t["prompt"] for t in templates] == ["one", "two", "three"]
        assert [t["id"] for t in templates] == sorted(t["id"] for t in templates)

    def test_delete_unknown_id_is_404_and_leaves_table(self, client, auth_headers):
        client.post("/templates", json={"prompt": "keep me"}, headers=auth_headers)
        before = client.get("/templates", headers=auth_headers).json()
        resp = client.delete("/templates/999", headers=auth_headers)
        assert resp.status_code == 404
        assert client.get("/templates", headers=auth_headers).json() == before

    def test_delete_non_integer_id_is_400(self, client, auth_headers):
        assert client.delete("/templates/abc", headers=auth_headers).status_code == 400

    def test_add_without_prompt_is_400(self, client, auth_headers):
        assert client.post("/templates", json={}, headers=auth_headers).status_code == 400
        assert client.post("/templates", json={"prompt": ""}, headers=auth_headers).status_code == 400

    def test_blank_prompt_is_400(self, client, auth_headers):
        resp = client.post("/templates", json={"prompt": "   "}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Prompt not provided"}
        assert client.get("/templates", headers=auth_headers).json() == []

    def test_store_failure_is_generic_500(self, client, store, auth_headers):
        failing = AsyncMock(side_effect=StoreError("disk I/O error at /var/db"))
        with patch.object(store, "list_templates", failing):
            resp = client.get("/templates", headers=auth_headers)
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Storage error"}

    def test_templates_are_shared_between_users(self, client, auth_headers):
        client.post("/templates", json={"prompt": "shared"}, headers=auth_headers)
        other = client.post("/register", json={"username": "bob", "password": "pw"}).json()["token"]
        templates = client.get("/templates", headers={"Authorization": other}).json()
        assert [t["prompt"] for t in templates] == ["shared"]

"""
Tests for /api/merchants endpoints.

Tests cover:
- Happy path CRUD with camelCase bodies
- Validation failures -> 400 {message, field}
- Unknown ids -> 404 {message}
- Storage failures -> 500 {message}
"""

from unittest.mock import patch


def _create(client, **body):
    payload = {"name": "Acme", **body}
    response = client.post("/api/merchants", json=payload)
    assert response.status_code == 201
    return response.json()


class TestMerchantCrudEndpoints:

    def test_create_merchant(self, client):
        response = client.post(
            "/api/merchants",
            json={"name": "Acme", "websiteUrl": "https://acme.example"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["name"] == "Acme"
        assert data["websiteUrl"] == "https://acme.example"
        assert data["contactEmail"] is None

    def test_snake_case_input_accepted(self, client):
        data = _create(client, contact_email="billing@acme.example")

        assert data["contactEmail"] == "billing@acme.example"

    def test_list_merchants_sorted_by_name(self, client):
        for name in ["Zeta", "Acme", "Mango"]:
            _create(client, name=name)

        response = client.get("/api/merchants")

        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["Acme", "Mango", "Zeta"]

    def test_get_merchant(self, client):
        merchant = _create(client)

        response = client.get(f"/api/merchants/{merchant['id']}")

        assert response.status_code == 200
        assert response.json() == merchant

    def test_patch_merchant(self, client):
        merchant = _create(client, contactEmail="a@acme.example")

        response = client.patch(
            f"/api/merchants/{merchant['id']}",
            json={"name": "Acme Corp"},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Acme Corp"
        assert response.json()["contactEmail"] == "a@acme.example"

    def test_patch_null_clears_optional_field(self, client):
        merchant = _create(client, websiteUrl="https://acme.example")

        response = client.patch(f"/api/merchants/{merchant['id']}", json={"websiteUrl": None})

        assert response.status_code == 200
        assert response.json()["websiteUrl"] is None

    def test_empty_patch_returns_current(self, client):
        merchant = _create(client)

        response = client.patch(f"/api/merchants/{merchant['id']}", json={})

        assert response.status_code == 200
        assert response.json() == merchant

    def test_delete_merchant(self, client):
        merchant = _create(client)

        response = client.delete(f"/api/merchants/{merchant['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/merchants/{merchant['id']}").status_code == 404


class TestMerchantErrors:

    def test_missing_name(self, client, fake_client):
        response = client.post("/api/merchants", json={"websiteUrl": "https://x.example"})

        assert response.status_code == 400
        assert response.json() == {"message": "name is required", "field": "name"}
        assert fake_client.tables["merchants"] == []

    def test_blank_name(self, client):
        response = client.post("/api/merchants", json={"name": "   "})

        assert response.status_code == 400
        assert response.json() == {"message": "name cannot be empty", "field": "name"}

    def test_patch_null_name_rejected(self, client):
        merchant = _create(client)

        response = client.patch(f"/api/merchants/{merchant['id']}", json={"name": None})

        assert response.status_code == 400
        assert response.json()["field"] == "name"

    def test_missing_body(self, client):
        response = client.post("/api/merchants")

        assert response.status_code == 400
        assert "message" in response.json()

    def test_get_unknown(self, client):
        response = client.get("/api/merchants/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"message": "Merchant not found"}

    def test_patch_unknown(self, client):
        response = client.patch("/api/merchants/does-not-exist", json={"name": "X"})

        assert response.status_code == 404
        assert response.json() == {"message": "Merchant not found"}

    def test_delete_unknown(self, client):
        response = client.delete("/api/merchants/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"message": "Merchant not found"}

    def test_storage_failure_is_500(self, client):
        with patch("hotpay.routes.merchants.get_merchants") as mock_get:
            mock_get.side_effect = RuntimeError("connection refused")

            response = client.get("/api/merchants")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to retrieve merchants"}

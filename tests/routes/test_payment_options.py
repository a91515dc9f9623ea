"""
Tests for /api/payment-options endpoints.
"""

import pytest


@pytest.fixture
def merchant(client):
    return client.post("/api/merchants", json={"name": "Acme"}).json()


def _create_option(client, merchant, **body):
    payload = {
        "merchantId": merchant["id"],
        "chain": "Ethereum",
        "assetSymbol": "USDC",
        "receiveAddress": "0xabc",
        **body,
    }
    response = client.post("/api/payment-options", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()


class TestPaymentOptionEndpoints:

    def test_create_defaults(self, client, merchant):
        option = _create_option(client, merchant)

        assert option["enabled"] is True
        assert option["sortOrder"] == 0
        assert option["receiveAddress"] == "0xabc"

    def test_list_sorted(self, client, merchant):
        _create_option(client, merchant, chain="Solana", sortOrder=1)
        _create_option(client, merchant, chain="Ethereum", assetSymbol="USDT", sortOrder=1)
        _create_option(client, merchant, chain="Ethereum", assetSymbol="USDC", sortOrder=1)
        _create_option(client, merchant, chain="Polygon", sortOrder=0)

        response = client.get("/api/payment-options", params={"merchantId": merchant["id"]})

        assert response.status_code == 200
        assert [(o["chain"], o["assetSymbol"]) for o in response.json()] == [
            ("Polygon", "USDC"),
            ("Ethereum", "USDC"),
            ("Ethereum", "USDT"),
            ("Solana", "USDC"),
        ]

    def test_patch(self, client, merchant):
        option = _create_option(client, merchant)

        response = client.patch(
            f"/api/payment-options/{option['id']}",
            json={"enabled": False, "sortOrder": 5},
        )

        assert response.status_code == 200
        assert response.json()["enabled"] is False
        assert response.json()["sortOrder"] == 5
        assert response.json()["chain"] == "Ethereum"

    def test_delete(self, client, merchant):
        option = _create_option(client, merchant)

        response = client.delete(f"/api/payment-options/{option['id']}")

        assert response.status_code == 204
        assert client.get("/api/payment-options").json() == []


class TestPaymentOptionErrors:

    def test_missing_receive_address(self, client, merchant):
        response = client.post(
            "/api/payment-options",
            json={"merchantId": merchant["id"], "chain": "Ethereum", "assetSymbol": "USDC"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": "receiveAddress is required",
            "field": "receiveAddress",
        }

    def test_null_enabled_rejected(self, client, merchant):
        option = _create_option(client, merchant)

        response = client.patch(f"/api/payment-options/{option['id']}", json={"enabled": None})

        assert response.status_code == 400
        assert response.json() == {"message": "enabled cannot be null", "field": "enabled"}

    def test_unknown_merchant(self, client):
        response = client.post(
            "/api/payment-options",
            json={
                "merchantId": "missing",
                "chain": "Ethereum",
                "assetSymbol": "USDC",
                "receiveAddress": "0xabc",
            },
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Merchant not found"}

    def test_patch_unknown(self, client):
        response = client.patch("/api/payment-options/missing", json={"enabled": False})

        assert response.status_code == 404
        assert response.json() == {"message": "Payment option not found"}

    def test_delete_unknown(self, client):
        response = client.delete("/api/payment-options/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "Payment option not found"}

    @pytest.mark.parametrize("sort_order", [2**31, -2**31 - 1, 4294967296])
    def test_sort_order_outside_integer_column_range(self, client, merchant, fake_client, sort_order):
        response = client.post(
            "/api/payment-options",
            json={
                "merchantId": merchant["id"],
                "chain": "Ethereum",
                "assetSymbol": "USDC",
                "receiveAddress": "0xabc",
                "sortOrder": sort_order,
            },
        )

        assert response.status_code == 400
        assert response.json()["field"] == "sortOrder"
        assert fake_client.tables["supported_payment_options"] == []

    def test_patch_sort_order_outside_range(self, client, merchant):
        option = _create_option(client, merchant)

        response = client.patch(
            f"/api/payment-options/{option['id']}",
            json={"sortOrder": 2**31},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "sortOrder"

    def test_sort_order_at_range_limits(self, client, merchant):
        low = _create_option(client, merchant, sortOrder=-2**31)
        high = _create_option(client, merchant, chain="Solana", sortOrder=2**31 - 1)

        assert low["sortOrder"] == -2**31
        assert high["sortOrder"] == 2**31 - 1

"""Integration tests for the warehouse API endpoints.

Covers:
- GET /api/warehouse/{id} and GET /api/warehouse (in-stock listing).
- POST order / ship / restock: JSON contract, business rejections as
  ``success: false``, malformed bodies as 400, conflicts as 409.
- POST add: unique names, ignored client fields.
- Storage bounds: oversized quantities and names.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from modules.warehouse.constants import MAX_QUANTITY, PRODUCT_NAME_MAX_LENGTH
from modules.warehouse.exceptions import QuantityUpdateConflict
from modules.warehouse.models import Product

pytestmark = pytest.mark.integration


@pytest.fixture()
def product():
    return Product.objects.create(name="Widget", in_stock_quantity=10, reserved_quantity=5)


def _post(client, action: str, payload):
    return client.post(f"/api/warehouse/{action}", payload, format="json")


# ===========================================================================
# GET
# ===========================================================================


class TestGetProduct:
    def test_returns_product(self, api_client, product):
        response = api_client.get(f"/api/warehouse/{product.id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": product.id,
            "name": "Widget",
            "inStockQuantity": 10,
            "reservedQuantity": 5,
        }

    def test_missing_product_is_null(self, api_client):
        response = api_client.get("/api/warehouse/4242")

        assert response.status_code == 200
        assert response.content == b"null"
        assert response.json() is None

    def test_non_numeric_id_is_404(self, api_client):
        assert api_client.get("/api/warehouse/abc").status_code == 404


class TestListInStock:
    def test_lists_only_products_with_unreserved_stock(self, api_client, product):
        Product.objects.create(name="Fully Reserved", in_stock_quantity=4, reserved_quantity=4)
        Product.objects.create(name="Empty", in_stock_quantity=0, reserved_quantity=0)

        response = api_client.get("/api/warehouse")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Widget"]

    def test_empty(self, api_client):
        response = api_client.get("/api/warehouse")
        assert response.status_code == 200
        assert response.json() == []

    def test_name_filter(self, api_client, product):
        Product.objects.create(name="Blue Gadget", in_stock_quantity=2)

        response = api_client.get("/api/warehouse", {"name": "gadget"})

        assert [p["name"] for p in response.json()] == ["Blue Gadget"]


# ===========================================================================
# Quantity commands
# ===========================================================================


class TestOrder:
    def test_success(self, api_client, product):
        response = _post(api_client, "order", {"id": product.id, "quantity": 3})

        assert response.status_code == 200
        assert response.json() == {"success": True, "errorReason": None}
        product.refresh_from_db()
        assert product.reserved_quantity == 8

    def test_not_enough_quantity(self, api_client, product):
        response = _post(api_client, "order", {"id": product.id, "quantity": 6})

        assert response.status_code == 200
        assert response.json() == {"success": False, "errorReason": "NotEnoughQuantity"}
        product.refresh_from_db()
        assert product.reserved_quantity == 5

    def test_negative_quantity(self, api_client, product):
        response = _post(api_client, "order", {"id": product.id, "quantity": -1})
        assert response.json() == {"success": False, "errorReason": "QuantityInvalid"}

    def test_unknown_product(self, api_client):
        response = _post(api_client, "order", {"id": 4242, "quantity": 1})
        assert response.json() == {"success": False, "errorReason": "InvalidRequest"}

    def test_get_not_allowed(self, api_client):
        assert api_client.get("/api/warehouse/order").status_code == 405


class TestShip:
    def test_success(self, api_client, product):
        response = _post(api_client, "ship", {"id": product.id, "quantity": 4})

        assert response.json() == {"success": True, "errorReason": None}
        product.refresh_from_db()
        assert (product.in_stock_quantity, product.reserved_quantity) == (6, 1)

    def test_not_enough_quantity(self, api_client, product):
        response = _post(api_client, "ship", {"id": product.id, "quantity": 11})
        assert response.json() == {"success": False, "errorReason": "NotEnoughQuantity"}


class TestRestock:
    def test_success(self, api_client, product):
        response = _post(api_client, "restock", {"id": product.id, "quantity": 5})

        assert response.json() == {"success": True, "errorReason": None}
        product.refresh_from_db()
        assert product.in_stock_quantity == 15

    def test_unknown_product(self, api_client):
        response = _post(api_client, "restock", {"id": 4242, "quantity": 5})
        assert response.json() == {"success": False, "errorReason": "InvalidRequest"}


class TestMalformedBodies:
    @pytest.mark.parametrize(
        "payload",
        [
            {"id": 1},
            {"quantity": 1},
            {"id": "one", "quantity": 1},
            {"id": 1, "quantity": 1.5},
            {"id": 1, "quantity": True},
            {"id": 1, "quantity": "3"},
            [1, 2],
        ],
    )
    def test_bad_quantity_body_is_400(self, api_client, payload):
        response = _post(api_client, "order", payload)

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_invalid_json_is_400(self, api_client):
        response = api_client.post(
            "/api/warehouse/ship", data="{", content_type="application/json"
        )
        assert response.status_code == 400

    def test_conflict_is_409(self, api_client, product):
        with patch(
            "modules.warehouse.services.WarehouseService.order",
            side_effect=QuantityUpdateConflict("order on product 1 conflicted 5 times."),
        ):
            response = _post(api_client, "order", {"id": product.id, "quantity": 1})

        assert response.status_code == 409
        assert "conflicted" in response.json()["detail"]


# ===========================================================================
# add
# ===========================================================================


class TestAddProduct:
    def test_creates_product(self, api_client):
        response = _post(api_client, "add", {"name": "Gadget", "inStockQuantity": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["errorReason"] is None
        assert data["model"]["name"] == "Gadget"
        assert data["model"]["inStockQuantity"] == 7
        assert data["model"]["reservedQuantity"] == 0
        assert Product.objects.filter(id=data["model"]["id"]).exists()

    def test_client_id_and_reserved_are_ignored(self, api_client, product):
        response = _post(
            api_client,
            "add",
            {"id": product.id, "name": "Gadget", "inStockQuantity": 1, "reservedQuantity": 9},
        )

        model = response.json()["model"]
        assert model["id"] != product.id
        assert model["reservedQuantity"] == 0
        product.refresh_from_db()
        assert product.name == "Widget"

    def test_trimmed_duplicate_gets_distinct_name(self, api_client, product):
        response = _post(api_client, "add", {"name": " Widget ", "inStockQuantity": 1})
        assert response.json()["model"]["name"] == "Widgetx"

    def test_adding_same_name_twice(self, api_client):
        first = _post(api_client, "add", {"name": "Sprocket", "inStockQuantity": 1}).json()
        second = _post(api_client, "add", {"name": "Sprocket", "inStockQuantity": 1}).json()
        assert first["model"]["name"] != second["model"]["name"]

    @pytest.mark.parametrize("payload", [{"inStockQuantity": 1}, {"name": "   "}, {"name": None}])
    def test_blank_name(self, api_client, payload):
        response = _post(api_client, "add", payload)

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "errorReason": "InvalidRequest",
            "model": None,
        }

    def test_negative_stock(self, api_client):
        response = _post(api_client, "add", {"name": "Gadget", "inStockQuantity": -3})

        assert response.json() == {
            "success": False,
            "errorReason": "QuantityInvalid",
            "model": None,
        }
        assert not Product.objects.filter(name="Gadget").exists()

    def test_non_integer_stock_is_400(self, api_client):
        response = _post(api_client, "add", {"name": "Gadget", "inStockQuantity": "many"})
        assert response.status_code == 400


class TestStorageBounds:
    def test_restock_above_storable_range_is_400(self, api_client, product):
        response = _post(api_client, "restock", {"id": product.id, "quantity": 2**63})

        assert response.status_code == 400
        product.refresh_from_db()
        assert product.in_stock_quantity == 10

    def test_add_above_storable_range_is_400(self, api_client):
        response = _post(api_client, "add", {"name": "Big", "inStockQuantity": 2**63})

        assert response.status_code == 400
        assert not Product.objects.filter(name="Big").exists()

    def test_restock_up_to_storable_maximum(self, api_client, product):
        response = _post(
            api_client, "restock", {"id": product.id, "quantity": MAX_QUANTITY - 10}
        )

        assert response.json() == {"success": True, "errorReason": None}
        product.refresh_from_db()
        assert product.in_stock_quantity == MAX_QUANTITY

    def test_restock_past_storable_maximum_is_quantity_invalid(self, api_client, product):
        Product.objects.filter(id=product.id).update(in_stock_quantity=MAX_QUANTITY)

        response = _post(api_client, "restock", {"id": product.id, "quantity": 1})

        assert response.status_code == 200
        assert response.json() == {"success": False, "errorReason": "QuantityInvalid"}
        product.refresh_from_db()
        assert product.in_stock_quantity == MAX_QUANTITY

    def test_add_with_large_stock(self, api_client):
        response = _post(api_client, "add", {"name": "Big", "inStockQuantity": 2**40})

        assert response.json()["model"]["inStockQuantity"] == 2**40
        assert Product.objects.get(name="Big").in_stock_quantity == 2**40

    def test_name_longer_than_column_is_invalid_request(self, api_client):
        name = "n" * (PRODUCT_NAME_MAX_LENGTH + 1)
        response = _post(api_client, "add", {"name": name, "inStockQuantity": 1})

        assert response.status_code == 200
        assert response.json()["errorReason"] == "InvalidRequest"
        assert not Product.objects.exists()


class TestSchema:
    def test_openapi_schema_lists_warehouse_routes(self, api_client):
        response = api_client.get("/api/schema/", HTTP_ACCEPT="application/json")

        assert response.status_code == 200
        paths = json.loads(response.content)["paths"]
        assert "/api/warehouse/order" in paths
        assert "/api/warehouse/add" in paths

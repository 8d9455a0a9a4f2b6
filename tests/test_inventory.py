"""Integration tests for inventory receipts and their stock reconciliation."""

import pytest


@pytest.fixture()
def supplier(client, admin_headers):
    response = client.post(
        "/api/suppliers",
        json={"name": "Blue Note Distribution", "contact_person": "Ann"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


def _receive(client, headers, product_id, quantity, supplier_id=None):
    payload = {"product_id": product_id, "quantity_received": quantity, "remarks": "pallet"}
    if supplier_id is not None:
        payload["supplier_id"] = supplier_id
    return client.post("/api/inventory", json=payload, headers=headers)


class TestReceiveStock:
    def test_receipt_increases_product_quantity(
        self, client, admin_headers, make_product, supplier, quantity_of
    ):
        product = make_product(quantity=10)

        response = _receive(client, admin_headers, product["id"], 5, supplier["id"])

        assert response.status_code == 201
        assert response.json()["quantity_received"] == 5
        assert response.json()["date_received"] is not None
        assert quantity_of(product["id"]) == 15

    def test_unknown_product_creates_nothing(self, client, admin_headers):
        response = _receive(client, admin_headers, 999, 5)

        assert response.status_code == 404
        assert client.get("/api/inventory", headers=admin_headers).json() == []

    def test_unknown_supplier_rolls_back(self, client, admin_headers, make_product, quantity_of):
        product = make_product(quantity=10)

        response = _receive(client, admin_headers, product["id"], 5, supplier_id=999)

        assert response.status_code == 404
        assert quantity_of(product["id"]) == 10
        assert client.get("/api/inventory", headers=admin_headers).json() == []

    def test_negative_quantity_fails_validation(self, client, admin_headers, make_product):
        product = make_product()

        response = _receive(client, admin_headers, product["id"], -3)

        assert response.status_code == 400

    def test_non_admin_cannot_receive(self, client, user_headers, make_product, quantity_of):
        product = make_product(quantity=10)

        response = _receive(client, user_headers, product["id"], 5)

        assert response.status_code == 403
        assert quantity_of(product["id"]) == 10


class TestReadInventory:
    def test_records_include_product_and_supplier(
        self, client, admin_headers, user_headers, make_product, supplier
    ):
        product = make_product()
        receipt = _receive(client, admin_headers, product["id"], 4, supplier["id"]).json()

        listed = client.get("/api/inventory", headers=user_headers).json()
        single = client.get(f"/api/inventory/{receipt['id']}", headers=user_headers).json()

        assert len(listed) == 1
        assert listed[0]["product"]["title"] == "Kind of Blue"
        assert single["supplier"]["name"] == "Blue Note Distribution"

    def test_missing_record(self, client, user_headers):
        response = client.get("/api/inventory/999", headers=user_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Inventory item not found"


class TestUpdateReceipt:
    def test_quantity_change_applies_delta(self, client, admin_headers, make_product, quantity_of):
        product = make_product(quantity=10)
        receipt = _receive(client, admin_headers, product["id"], 5).json()

        response = client.put(
            f"/api/inventory/{receipt['id']}",
            json={"quantity_received": 8},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["quantity_received"] == 8
        assert response.json()["remarks"] == "pallet"
        assert quantity_of(product["id"]) == 18

    def test_remarks_only_leaves_stock_alone(self, client, admin_headers, make_product, quantity_of):
        product = make_product(quantity=10)
        receipt = _receive(client, admin_headers, product["id"], 5).json()

        response = client.put(
            f"/api/inventory/{receipt['id']}",
            json={"remarks": "recounted"},
            headers=admin_headers,
        )

        assert response.json()["remarks"] == "recounted"
        assert quantity_of(product["id"]) == 15

    def test_null_product_keeps_receipt_in_place(
        self, client, admin_headers, make_product, quantity_of
    ):
        product = make_product(quantity=10)
        receipt = _receive(client, admin_headers, product["id"], 5).json()

        response = client.put(
            f"/api/inventory/{receipt['id']}",
            json={"product_id": None, "quantity_received": None, "remarks": "x"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["product_id"] == product["id"]
        assert response.json()["quantity_received"] == 5
        assert response.json()["remarks"] == "x"
        assert quantity_of(product["id"]) == 15

    def test_moving_receipt_to_other_product(self, client, admin_headers, make_product, quantity_of):
        first = make_product(sku="A", quantity=10)
        second = make_product(sku="B", quantity=1)
        receipt = _receive(client, admin_headers, first["id"], 5).json()

        response = client.put(
            f"/api/inventory/{receipt['id']}",
            json={"product_id": second["id"], "quantity_received": 6},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert quantity_of(first["id"]) == 10
        assert quantity_of(second["id"]) == 7

    def test_shrinking_below_sold_stock_is_rejected(
        self, client, admin_headers, make_product, quantity_of
    ):
        product = make_product(quantity=0)
        receipt = _receive(client, admin_headers, product["id"], 5).json()
        client.put(f"/api/products/{product['id']}", json={"quantity": 1}, headers=admin_headers)

        response = client.put(
            f"/api/inventory/{receipt['id']}",
            json={"quantity_received": 0},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_stock"
        assert quantity_of(product["id"]) == 1
        record = client.get(f"/api/inventory/{receipt['id']}", headers=admin_headers).json()
        assert record["quantity_received"] == 5


class TestDeleteReceipt:
    def test_delete_reverses_receipt(self, client, admin_headers, make_product, quantity_of):
        product = make_product(quantity=10)
        receipt = _receive(client, admin_headers, product["id"], 5).json()

        response = client.delete(f"/api/inventory/{receipt['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Inventory entry deleted successfully"}
        assert quantity_of(product["id"]) == 10
        assert client.get(f"/api/inventory/{receipt['id']}", headers=admin_headers).status_code == 404

    def test_delete_that_would_go_negative_is_rejected(
        self, client, admin_headers, make_product, quantity_of
    ):
        product = make_product(quantity=10)
        receipt = _receive(client, admin_headers, product["id"], 5).json()
        client.put(f"/api/products/{product['id']}", json={"quantity": 2}, headers=admin_headers)

        response = client.delete(f"/api/inventory/{receipt['id']}", headers=admin_headers)

        assert response.status_code == 400
        assert quantity_of(product["id"]) == 2
        assert client.get(f"/api/inventory/{receipt['id']}", headers=admin_headers).status_code == 200

    def test_delete_missing_receipt(self, client, admin_headers):
        response = client.delete("/api/inventory/999", headers=admin_headers)

        assert response.status_code == 404

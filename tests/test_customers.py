"""Integration tests for customer profiles, ownership checks and cascade delete."""

from inventory_api.models.order_items import OrderItem
from inventory_api.models.orders import Order


class TestCreateCustomer:
    def test_admin_creates_customer(self, client, admin_headers):
        response = client.post(
            "/api/customers",
            json={"first_name": "Carol", "email": "carol@example.com"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["first_name"] == "Carol"

    def test_user_creates_own_profile(self, client, user_headers, own_customer, user_id_of):
        me = client.get(f"/api/customers/{own_customer['id']}", headers=user_headers)

        assert me.status_code == 200
        assert me.json()["email"] == "alice@example.com"
        assert me.json()["user_id"] == user_id_of(user_headers)

    def test_user_cannot_create_second_profile(self, client, user_headers, own_customer):
        response = client.post("/api/customers", json={"first_name": "Again"}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "conflict"

    def test_user_cannot_create_profile_for_other_account(
        self, client, admin_headers, user_headers, user_id_of
    ):
        response = client.post(
            "/api/customers",
            json={"user_id": user_id_of(admin_headers), "first_name": "Eve"},
            headers=user_headers,
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Can only create your own customer profile"

    def test_admin_links_customer_to_user(self, client, admin_headers, user_headers, user_id_of):
        alice_id = user_id_of(user_headers)

        response = client.post(
            "/api/customers", json={"user_id": alice_id, "first_name": "Alice"}, headers=admin_headers
        )

        assert response.status_code == 201
        me = client.get(f"/api/customers/{response.json()['id']}", headers=user_headers)
        assert me.status_code == 200

    def test_admin_link_to_unknown_user(self, client, admin_headers):
        response = client.post(
            "/api/customers", json={"user_id": 999, "first_name": "Ghost"}, headers=admin_headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_customers_made_before_user_registers_stay_private(
        self, client, register, admin_headers, user_id_of
    ):
        bob = client.post("/api/customers", json={"first_name": "Bob"}, headers=admin_headers).json()
        carol = client.post("/api/customers", json={"first_name": "Carol"}, headers=admin_headers).json()
        alice = register("alice")
        assert user_id_of(alice) in (bob["id"], carol["id"])

        for customer in (bob, carol):
            assert client.get(f"/api/customers/{customer['id']}", headers=alice).status_code == 403
            assert client.get(f"/api/customers/{customer['id']}/orders", headers=alice).status_code == 403

        response = client.post("/api/customers", json={"first_name": "Alice"}, headers=alice)

        assert response.status_code == 201
        assert response.json()["id"] not in (bob["id"], carol["id"])
        assert response.json()["user_id"] == user_id_of(alice)


class TestReadCustomer:
    def test_listing_is_admin_only(self, client, admin_headers, user_headers, own_customer):
        assert client.get("/api/customers", headers=user_headers).status_code == 403

        response = client.get("/api/customers", headers=admin_headers)
        assert [c["id"] for c in response.json()] == [own_customer["id"]]

    def test_user_reading_other_customer_is_forbidden(
        self, client, admin_headers, user_headers, own_customer
    ):
        other = client.post("/api/customers", json={"first_name": "Carol"}, headers=admin_headers).json()

        response = client.get(f"/api/customers/{other['id']}", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied"

    def test_admin_reads_any_customer(self, client, admin_headers, own_customer):
        response = client.get(f"/api/customers/{own_customer['id']}", headers=admin_headers)

        assert response.status_code == 200

    def test_missing_customer(self, client, admin_headers):
        assert client.get("/api/customers/999", headers=admin_headers).status_code == 404

    def test_customer_orders(self, client, user_headers, own_customer, make_product):
        product = make_product()
        client.post(
            "/api/orders",
            json={"customer_id": own_customer["id"], "items": [{"product_id": product["id"], "quantity": 1}]},
            headers=user_headers,
        )

        response = client.get(f"/api/customers/{own_customer['id']}/orders", headers=user_headers)

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestUpdateCustomer:
    def test_user_updates_own_profile(self, client, user_headers, own_customer):
        response = client.put(
            f"/api/customers/{own_customer['id']}",
            json={"phone_number": "555-0142"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["phone_number"] == "555-0142"
        assert response.json()["first_name"] == "Alice"

    def test_user_cannot_update_other_customer(self, client, admin_headers, user_headers):
        other = client.post("/api/customers", json={"first_name": "Carol"}, headers=admin_headers).json()

        response = client.put(
            f"/api/customers/{other['id']}", json={"first_name": "Hacked"}, headers=user_headers
        )

        assert response.status_code == 403


class TestDeleteCustomer:
    def test_delete_cascades_orders_items_and_restocks(
        self, client, admin_headers, user_headers, own_customer, make_product, quantity_of, db
    ):
        product = make_product(quantity=10)
        for quantity in (2, 3):
            client.post(
                "/api/orders",
                json={
                    "customer_id": own_customer["id"],
                    "items": [{"product_id": product["id"], "quantity": quantity}],
                },
                headers=user_headers,
            )
        assert quantity_of(product["id"]) == 5

        response = client.delete(f"/api/customers/{own_customer['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Customer and related orders deleted successfully"}
        assert quantity_of(product["id"]) == 10
        assert db.query(Order).count() == 0
        assert db.query(OrderItem).count() == 0
        assert client.get(f"/api/customers/{own_customer['id']}", headers=admin_headers).status_code == 404

    def test_non_admin_cannot_delete(self, client, user_headers, own_customer):
        response = client.delete(f"/api/customers/{own_customer['id']}", headers=user_headers)

        assert response.status_code == 403

"""
Tests for the /order endpoints

Author: TM3
Date: 2025-10-17
"""
import importlib
import inspect

import pytest


@pytest.fixture
def customer_id(client, sample_customer_data):
    return client.post("/customer", json=sample_customer_data).json()["id"]


@pytest.fixture
def product_id(client, sample_product_data):
    return client.post("/product", json=sample_product_data).json()["id"]


def _place(client, customer_id, items):
    return client.post("/order", json={"customerID": customer_id, "items": items})


class TestCreateOrder:

    def test_create_order(self, client, customer_id, product_id):
        response = _place(client, customer_id, [{"productID": product_id, "quantity": 2}])

        assert response.status_code == 201
        order = response.json()
        assert order["customerID"] == customer_id
        assert order["items"] == [{"productID": product_id, "quantity": 2}]
        assert order["totalPrice"] == 2.0
        assert order["status"] == "Pending"
        assert order["paymentStatus"] == "Pending"

        assert client.get(f"/product/{product_id}").json()["stock"] == 98

    def test_missing_fields(self, client):
        response = client.post("/order", json={"items": []})

        assert response.status_code == 400
        assert response.json() == {"message": "CustomerID and items are required"}

    def test_malformed_quantity(self, client, customer_id, product_id):
        response = _place(client, customer_id, [{"productID": product_id, "quantity": "lots"}])

        assert response.status_code == 400
        assert "quantity" in response.json()["message"]

    def test_unknown_customer(self, client, product_id):
        response = _place(client, "nobody", [{"productID": product_id, "quantity": 1}])

        assert response.status_code == 404
        assert response.json() == {"message": "Customer not found"}

    def test_unknown_product_does_not_revert_prior_items(self, client, customer_id, product_id):
        response = _place(client, customer_id, [
            {"productID": product_id, "quantity": 2},
            {"productID": "X", "quantity": 1},
        ])

        assert response.status_code == 404
        assert "X" in response.json()["message"]
        assert client.get(f"/product/{product_id}").json()["stock"] == 98
        assert client.get("/order").json() == []

    def test_insufficient_stock(self, client, customer_id, product_id):
        response = _place(client, customer_id, [{"productID": product_id, "quantity": 101}])

        assert response.status_code == 400
        assert response.json() == {"message": "Insufficient stock for product: Jellybean"}
        assert client.get(f"/product/{product_id}").json()["stock"] == 100


class TestOrderTransitions:

    def test_cancel_missing(self, client):
        response = client.put("/order/missing/cancel")

        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_cancel(self, client, customer_id, product_id):
        order_id = _place(client, customer_id, [{"productID": product_id, "quantity": 1}]).json()["id"]

        response = client.put(f"/order/{order_id}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"
        assert response.json()["paymentStatus"] == "Pending"

    def test_pay(self, client, customer_id, product_id):
        order_id = _place(client, customer_id, [{"productID": product_id, "quantity": 1}]).json()["id"]

        response = client.post(f"/order/{order_id}/pay")

        assert response.status_code == 200
        assert response.json()["status"] == "Completed"
        assert response.json()["paymentStatus"] == "Paid"

    def test_pay_missing(self, client):
        response = client.post("/order/missing/pay")

        assert response.status_code == 404

    def test_get_order(self, client, customer_id, product_id):
        order_id = _place(client, customer_id, [{"productID": product_id, "quantity": 1}]).json()["id"]

        response = client.get(f"/order/{order_id}")

        assert response.status_code == 200
        assert response.json()["id"] == order_id


class TestListOrders:

    def test_list_expands_customer_and_products(self, client, customer_id, product_id):
        _place(client, customer_id, [{"productID": product_id, "quantity": 2}])
        _place(client, customer_id, [{"productID": product_id, "quantity": 3}])

        response = client.get("/order")

        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 2
        assert orders[0]["customer"] == {
            "firstName": "Nathan",
            "lastName": "Englert",
            "email": "nke5100@psu.edu"
        }
        # Current stock, read at listing time
        assert orders[0]["items"][0]["product"] == {
            "name": "Jellybean",
            "description": "Tasty Jellybean",
            "price": 1.0,
            "stock": 95
        }
        assert orders[0]["totalPrice"] == 2.0
        assert orders[1]["totalPrice"] == 3.0

    def test_list_empty(self, client):
        assert client.get("/order").json() == []


@pytest.mark.parametrize("endpoint", [
    "orderdesk.api.orders.create_order",
    "orderdesk.api.orders.get_orders",
    "orderdesk.api.orders.get_order",
    "orderdesk.api.orders.cancel_order",
    "orderdesk.api.customers.create_customer",
    "orderdesk.api.customers.get_customer",
    "orderdesk.api.products.create_product",
    "orderdesk.api.products.get_product",
    "orderdesk.api.products.delete_product",
    "orderdesk.main.health",
])
def test_store_routes_run_in_threadpool(endpoint):
    module_name, _, name = endpoint.rpartition(".")
    func = getattr(importlib.import_module(module_name), name)

    assert not inspect.iscoroutinefunction(func)
